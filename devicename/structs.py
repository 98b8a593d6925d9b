from __future__ import annotations

from typing import Literal

import msgspec

DeviceType = Literal["pc", "mobile", "tablet", "unknown"]


class UserAgentInfo(msgspec.Struct, frozen=True, omit_defaults=True):
    """Structured result of parsing a raw user agent string.

    Only model, name and os take part in device name resolution; the other
    fields are informational.
    """

    model: str | None = None  # Device model, e.g. "iPhone 13"
    name: str | None = None  # Browser or app name
    os: str | None = None  # Operating system / platform name
    version: str | None = None
    os_version: str | None = None
    device_type: DeviceType = "unknown"
    raw: str = ""


class ClientInfo(msgspec.Struct, frozen=True):
    """Client requesting the session. client_id is always set."""

    client_id: str
    client_name: str | None = None


# -------------------------------------------------------------------------
# Device name variants, a tagged union on "kind"
# -------------------------------------------------------------------------


class ModelKnown(msgspec.Struct, frozen=True, tag_field="kind", tag="model"):
    model: str


class NameAndPlatform(
    msgspec.Struct, frozen=True, tag_field="kind", tag="name_for_platform"
):
    name: str
    platform: str


class NameOnly(msgspec.Struct, frozen=True, tag_field="kind", tag="name"):
    name: str


class Unknown(msgspec.Struct, frozen=True, tag_field="kind", tag="unknown"):
    pass


DeviceNameVariant = ModelKnown | NameAndPlatform | NameOnly | Unknown
