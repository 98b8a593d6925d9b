"""Runtime configuration utilities."""

import os
from functools import lru_cache

import msgspec

from devicename.config import DEFAULT_LOCALE
from devicename.structs import ClientInfo

ENV_VAR = "DEVICENAME_CONFIG"


class ConfigError(RuntimeError):
    """The server was started with unusable settings."""


class RuntimeConfig(msgspec.Struct, frozen=True, omit_defaults=True):
    """Settings shared with server workers.

    Serialized to the DEVICENAME_CONFIG env var as JSON via msgspec.
    """

    default_locale: str = DEFAULT_LOCALE
    escape_html: bool = False
    clients: dict[str, str] = {}  # client_id -> client_name

    def client(self, client_id: str, client_name: str | None = None) -> ClientInfo:
        """ClientInfo for client_id, name looked up unless given explicitly."""
        return ClientInfo(
            client_id=client_id,
            client_name=client_name or self.clients.get(client_id),
        )


@lru_cache(maxsize=1)
def load_config() -> RuntimeConfig:
    """Load RuntimeConfig from the environment, defaults if unset."""
    config_json = os.getenv(ENV_VAR)
    if not config_json:
        return RuntimeConfig()
    return msgspec.json.decode(config_json.encode(), type=RuntimeConfig)


def export_config(config: RuntimeConfig) -> None:
    """Store config in the environment for worker processes and refresh the cache."""
    os.environ[ENV_VAR] = msgspec.json.encode(config).decode()
    load_config.cache_clear()
