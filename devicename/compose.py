"""Compose the localized "client on device" display name.

The translator is passed in explicitly as ``translate(key, params, locale)``
so that this module carries no global state. Model and bare app names are
used verbatim; only the platform pairing, the unknown device fallback and the
outer sentence go through the translator.
"""

from collections.abc import Callable, Mapping

from devicename.config import (
    KEY_CLIENT_ON_DEVICE,
    KEY_NAME_FOR_PLATFORM,
    KEY_UNKNOWN_DEVICE,
)
from devicename.resolver import resolve
from devicename.structs import (
    ClientInfo,
    DeviceNameVariant,
    ModelKnown,
    NameAndPlatform,
    NameOnly,
    Unknown,
    UserAgentInfo,
)

Translate = Callable[[str, Mapping[str, str], str], str]


def client_display_name(client: ClientInfo) -> str:
    """Client name if set, else the client id."""
    return client.client_name or client.client_id or ""


def localize_variant(variant: DeviceNameVariant, translate: Translate, locale) -> str:
    match variant:
        case ModelKnown(model=model):
            return model
        case NameAndPlatform(name=name, platform=platform):
            return translate(
                KEY_NAME_FOR_PLATFORM, {"name": name, "platform": platform}, locale
            )
        case NameOnly(name=name):
            return name
        case Unknown():
            return translate(KEY_UNKNOWN_DEVICE, {}, locale)
    raise TypeError(f"Not a device name variant: {variant!r}")


def device_name(ua: UserAgentInfo, translate: Translate, locale) -> str:
    """Localized device name for a parsed user agent."""
    return localize_variant(resolve(ua), translate, locale)


def client_on_device(
    client_name: str, device: str, translate: Translate, locale
) -> str:
    """Outer sentence for an already resolved client and device name."""
    return translate(
        KEY_CLIENT_ON_DEVICE,
        {"clientName": client_name, "deviceName": device},
        locale,
    )


def compose(
    client: ClientInfo, ua: UserAgentInfo, translate: Translate, locale
) -> str:
    """Render the full display name, e.g. "Element on Firefox for Windows"."""
    return client_on_device(
        client_display_name(client),
        device_name(ua, translate, locale),
        translate,
        locale,
    )
