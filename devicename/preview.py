"""Full render of a display name with intermediate results, for API and CLI."""

from __future__ import annotations

import msgspec

from devicename.compose import client_display_name, client_on_device, localize_variant
from devicename.i18n import Translator
from devicename.resolver import resolve
from devicename.structs import ClientInfo, DeviceNameVariant, UserAgentInfo
from devicename.util import useragent


class Preview(msgspec.Struct):
    display_name: str
    client_name: str
    device_name: str  # Escaped like display_name when the translator escapes
    variant: DeviceNameVariant
    user_agent: UserAgentInfo
    locale: str


def preview(
    raw_user_agent: str | None,
    client: ClientInfo,
    translator: Translator,
    locale: str | None = None,
) -> Preview:
    """Parse raw_user_agent and compose the display name for client."""
    locale = locale or translator.default_locale
    ua = useragent.parse(raw_user_agent)
    variant = resolve(ua)
    client_name = client_display_name(client)
    # Model and app names are not translated, so escape them here
    device = translator.escape_param(
        localize_variant(variant, translator.translate, locale)
    )
    display_name = client_on_device(client_name, device, translator.translate, locale)
    return Preview(
        display_name=str(display_name),
        client_name=client_name,
        device_name=str(device),
        variant=variant,
        user_agent=ua,
        locale=locale,
    )
