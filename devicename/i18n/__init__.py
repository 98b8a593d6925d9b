"""
Message catalogs and translation with locale fallback.

Catalogs are nested JSON objects stored next to this module, one file per
locale (``en.json``, ``de.json``...). Messages use ``%(name)s`` placeholders
and are addressed with dotted keys such as ``device_name.unknown_device``.

Lookup walks the requested locale, its parents (``fr-CA`` → ``fr``) and then
the default locale. A key found nowhere raises MissingTranslation.
"""

import html
import logging
from collections.abc import Mapping
from importlib.resources import files
from typing import Any

import msgspec

from devicename.config import DEFAULT_LOCALE

__all__ = ["MissingTranslation", "Safe", "Translator", "locale_chain"]

_logger = logging.getLogger(__name__)

CATALOG_DIR = files("devicename.i18n")


class MissingTranslation(KeyError):
    """No catalog could render the requested message."""


class Safe(str):
    """Text already escaped for HTML output, never escaped again."""


def normalize_locale(locale: str | None) -> str:
    return (locale or "").strip().replace("_", "-").lower()


def locale_chain(locale: str | None, default: str = DEFAULT_LOCALE) -> list[str]:
    """Candidate locales in lookup order.

    Examples:
        'fr-CA' → ['fr-ca', 'fr', 'en']
        'en_GB' → ['en-gb', 'en']
        None → ['en']
    """
    parts = [p for p in normalize_locale(locale).split("-") if p]
    chain = ["-".join(parts[:i]) for i in range(len(parts), 0, -1)]
    default = normalize_locale(default)
    if default and default not in chain:
        chain.append(default)
    return chain


def _flatten(tree: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    messages: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping):
            messages.update(_flatten(value, f"{path}."))
        else:
            messages[path] = str(value)
    return messages


def load_catalogs(directory=CATALOG_DIR) -> dict[str, dict[str, str]]:
    """Load every ``<locale>.json`` in directory into flat key → message maps."""
    catalogs = {}
    for entry in directory.iterdir():
        if not entry.name.endswith(".json"):
            continue
        locale = normalize_locale(entry.name.removesuffix(".json"))
        tree = msgspec.json.decode(entry.read_bytes(), type=dict[str, Any])
        catalogs[locale] = _flatten(tree)
    return catalogs


class Translator:
    """Render catalog messages for a locale.

    With escape=True, placeholder values are HTML-escaped (literal catalog
    text is trusted) and results are returned as Safe so that nesting one
    translation inside another does not escape twice.
    """

    def __init__(
        self,
        catalogs: dict[str, dict[str, str]] | None = None,
        default_locale: str = DEFAULT_LOCALE,
        escape: bool = False,
    ):
        if catalogs is None:
            catalogs = load_catalogs()
        self.catalogs = {normalize_locale(k): v for k, v in catalogs.items()}
        self.default_locale = normalize_locale(default_locale)
        self.escape = escape
        if self.default_locale not in self.catalogs:
            raise ValueError(f"No catalog for default locale '{default_locale}'")

    def available_locales(self) -> list[str]:
        return sorted(self.catalogs)

    def message_with_fallback(self, locale: str | None, key: str) -> tuple[str, str]:
        """Find the message template for key.

        Returns:
            (message, locale the message was found in)

        Raises:
            MissingTranslation: If no candidate locale has the key
        """
        for candidate in locale_chain(locale, self.default_locale):
            message = self.catalogs.get(candidate, {}).get(key)
            if message is not None:
                if candidate == self.default_locale and normalize_locale(
                    locale
                ) not in ("", self.default_locale):
                    _logger.debug(
                        "Message %s missing for locale %r, using %s",
                        key,
                        locale,
                        candidate,
                    )
                return message, candidate
        raise MissingTranslation(key)

    def escape_param(self, value) -> str:
        """Value as it would be substituted into a message."""
        if not self.escape or isinstance(value, Safe):
            return value
        return Safe(html.escape(str(value)))

    def translate(self, key: str, params: Mapping[str, str], locale) -> str:
        message, _locale = self.message_with_fallback(locale, key)
        args = {name: self.escape_param(value) for name, value in params.items()}
        try:
            text = message % args
        except (KeyError, TypeError, ValueError) as e:
            raise MissingTranslation(f"{key}: cannot format message ({e})") from e
        return Safe(text) if self.escape else text

    __call__ = translate

    def negotiate(self, accept_language: str | None) -> str:
        """Pick the best loaded locale for an Accept-Language header.

        Example:
            'fr-CH, fr;q=0.9, de;q=0.8' → 'fr'
        """
        weighted: list[tuple[float, str]] = []
        for item in (accept_language or "").split(","):
            tag, _, params = item.strip().partition(";")
            tag = tag.strip()
            if not tag or tag == "*":
                continue
            q = 1.0
            params = params.strip()
            if params.startswith("q="):
                try:
                    q = float(params[2:])
                except ValueError:
                    continue
            if q > 0:
                weighted.append((q, tag))
        # sorted() is stable so equal weights keep header order
        for _q, tag in sorted(weighted, key=lambda w: -w[0]):
            for candidate in locale_chain(tag, default=""):
                if candidate in self.catalogs:
                    return candidate
        return self.default_locale
