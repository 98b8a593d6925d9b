"""User agent parsing into the fields used for device display names.

Browsers are recognized by ua-parser. Native apps (iOS and Android clients
that send ``Name/Version (Model; OS Version; ...)``) and Electron desktop apps
are matched first so that the app name and device model are not lost.
"""

import logging
import re

from ua_parser import parse as ua_parse

from devicename.config import USER_AGENT_MAX_LENGTH
from devicename.structs import DeviceType, UserAgentInfo

_logger = logging.getLogger(__name__)

# e.g. "Element/1.10.12 (iPhone14,5; iOS 16.4; Scale/3.00)"
# or "Element/1.5.22 (Linux; U; Android 13; Pixel 6 Build/TQ3A; ...)"
_NATIVE_APP = re.compile(r"^(?P<name>[^/\s]+)/(?P<version>\S+) \((?P<info>[^()]+)")
_OS_SEGMENT = re.compile(r"^(?P<os>.*?)\s+(?P<version>\d[\w.]*)$")
_PRODUCT = re.compile(r"(?:^|\s)([^\s/()]+)/([^\s()]+)")

# Product tokens that never name an Electron app
_ENGINE_TOKENS = {"Mozilla", "AppleWebKit", "Chrome", "Safari", "Electron"}

# Device families that say nothing about the actual model
_GENERIC_DEVICES = {
    "Other",
    "Mac",
    "K",
    "Spider",
    "Generic Smartphone",
    "Generic Tablet",
    "Generic Feature Phone",
}

_OS_NAMES = {
    "Mac OS X": "macOS",
    "Chrome OS": "ChromeOS",
}

_PC_OS = {"Windows", "macOS", "Linux", "ChromeOS", "Ubuntu", "Fedora", "Debian"}
_MOBILE_OS = {"iOS", "iPadOS", "Android"}

# Reported unchanged by Chrome's reduced user agent, whatever the real version
_FROZEN_OS_VERSIONS = {("Windows", "10"), ("macOS", "10.15.7")}


def _clean(value: str | None) -> str | None:
    """Treat ua-parser's "Other" and blank values as absent."""
    if not value or value == "Other":
        return None
    return value


def _join_version(*parts: str | None) -> str | None:
    version = ".".join(p for p in parts if p)
    return version or None


def device_type(model: str | None, os: str | None) -> DeviceType:
    if model and ("iPad" in model or "Tablet" in model):
        return "tablet"
    if os in _MOBILE_OS:
        return "mobile"
    if os in _PC_OS:
        return "pc"
    return "unknown"


def _split_os(segment: str) -> tuple[str, str | None]:
    """Split "Android 11" into ("Android", "11")."""
    if m := _OS_SEGMENT.match(segment):
        return m["os"], m["version"]
    return segment, None


def _parse_native_app(ua: str) -> UserAgentInfo | None:
    if "Mozilla/" in ua:
        return None
    m = _NATIVE_APP.match(ua)
    if not m:
        return None
    match [s.strip() for s in m["info"].split(";")]:
        case ["Linux", "U", os_segment, model, *_]:
            model = model.split(" Build/")[0].strip()
        case [model, os_segment, *_]:
            pass
        case _:
            return None
    os, os_version = _split_os(os_segment)
    # A bare token such as "U" or "en" is not an operating system
    if not model or not os or os_version is None:
        return None
    return UserAgentInfo(
        model=model,
        name=m["name"],
        os=os,
        version=m["version"],
        os_version=os_version,
        device_type=device_type(model, os),
        raw=ua,
    )


def _electron_app(ua: str) -> tuple[str, str] | None:
    """Name and version of the app embedding Electron, if any."""
    if "Electron/" not in ua:
        return None
    for name, version in _PRODUCT.findall(ua):
        if name not in _ENGINE_TOKENS:
            return name, version
    return None


def parse(ua: str | None) -> UserAgentInfo:
    """Parse a raw User-Agent header.

    Never raises: empty, unrecognized or malformed input gives a result with
    every field absent.
    """
    if not ua or not ua.strip() or ua == "-":
        return UserAgentInfo(raw=ua or "")
    ua = ua[:USER_AGENT_MAX_LENGTH]

    if native := _parse_native_app(ua):
        return native

    try:
        r = ua_parse(ua)
    except Exception:
        _logger.debug("Unable to parse user agent %r", ua, exc_info=True)
        return UserAgentInfo(raw=ua)

    name = version = None
    if r.user_agent:
        name = _clean(r.user_agent.family)
        version = _join_version(
            r.user_agent.major, r.user_agent.minor, r.user_agent.patch
        )
    os = os_version = None
    if r.os:
        os = _clean(r.os.family)
        os = _OS_NAMES.get(os, os)
        os_version = _join_version(r.os.major, r.os.minor, r.os.patch)
    model = _clean(r.device.family) if r.device else None
    # Exclude device if generic or matching browser family (parser bug)
    if model in _GENERIC_DEVICES or model == name:
        model = None
    if os == "iOS" and model and model.startswith("iPad"):
        os = "iPadOS"
    if (os, os_version) in _FROZEN_OS_VERSIONS or (os == "Android" and "; K)" in ua):
        os_version = None

    if app := _electron_app(ua):
        name, version = app

    if name is None:
        version = None
    if os is None:
        os_version = None

    return UserAgentInfo(
        model=model,
        name=name,
        os=os,
        version=version,
        os_version=os_version,
        device_type=device_type(model, os),
        raw=ua,
    )
