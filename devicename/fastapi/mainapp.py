"""HTTP preview of device display names.

Configuration comes from the DEVICENAME_CONFIG JSON env variable (set by the
CLI entrypoint) so that uvicorn reload / multiprocess workers inherit it.
"""

from functools import lru_cache

from fastapi import FastAPI, Request

from devicename.fastapi.errors import install_error_handlers
from devicename.fastapi.logging import AccessLogMiddleware
from devicename.fastapi.response import MsgspecResponse
from devicename.i18n import Translator
from devicename.preview import preview
from devicename.util import runtime

app = FastAPI(title="devicename")
app.add_middleware(AccessLogMiddleware)

install_error_handlers(app)


@lru_cache
def get_translator(default_locale: str, escape: bool) -> Translator:
    try:
        return Translator(default_locale=default_locale, escape=escape)
    except ValueError as e:
        raise runtime.ConfigError(f"{runtime.ENV_VAR}: {e}") from e


def current_translator() -> Translator:
    config = runtime.load_config()
    return get_translator(config.default_locale, config.escape_html)


@app.get("/device-name")
async def device_name(
    request: Request,
    client_id: str = "",
    client_name: str | None = None,
    lang: str | None = None,
    user_agent: str | None = None,
):
    """Compose the display name for a client and user agent.

    The user agent defaults to the request's own User-Agent header and the
    locale to the best match for Accept-Language.
    """
    client_id = client_id.strip()
    if not client_id:
        raise ValueError("client_id is required")
    config = runtime.load_config()
    translator = current_translator()
    if user_agent is None:
        user_agent = request.headers.get("user-agent", "")
    locale = lang or translator.negotiate(request.headers.get("accept-language"))
    client = config.client(client_id, client_name)
    return MsgspecResponse(preview(user_agent, client, translator, locale))


@app.get("/locales")
async def locales():
    translator = current_translator()
    return {
        "default": translator.default_locale,
        "locales": translator.available_locales(),
    }
