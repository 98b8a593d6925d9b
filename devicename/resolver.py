"""Pick the most specific device name variant from parsed user agent fields."""

from devicename.structs import (
    DeviceNameVariant,
    ModelKnown,
    NameAndPlatform,
    NameOnly,
    Unknown,
    UserAgentInfo,
)


def resolve(ua: UserAgentInfo) -> DeviceNameVariant:
    """Select a device name variant, first matching rule wins.

    1. model → ModelKnown (always wins)
    2. name and os → NameAndPlatform
    3. name → NameOnly
    4. otherwise Unknown, an os without a name is dropped

    Empty strings count as absent.
    """
    if ua.model:
        return ModelKnown(ua.model)
    if ua.name and ua.os:
        return NameAndPlatform(ua.name, ua.os)
    if ua.name:
        return NameOnly(ua.name)
    return Unknown()
