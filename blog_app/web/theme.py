"""
Initial color-scheme resolution and user overrides.

Resolution order is explicit stored choice, then the system color-scheme
signal, then the light default. Exactly one tier wins and the result is
always ``"light"`` or ``"dark"``.

Server-rendered pages resolve per request (``config.middleware.ThemeMiddleware``)
and write the result into ``<html data-theme>``, so the first byte of markup
already carries the theme. Statically built pages have no request to read, so
``bootstrap_script()`` emits the same resolution as a blocking ``<head>`` script.
"""
import json
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse


logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)
DEFAULT_THEME = LIGHT

SOURCE_EXPLICIT = "explicit-user-choice"
SOURCE_SYSTEM = "system-setting"
SOURCE_DEFAULT = "default"

STORAGE_KEY = "theme"
COLOR_SCHEME_QUERY = "(prefers-color-scheme: dark)"
CLIENT_HINT_HEADER = "Sec-CH-Prefers-Color-Scheme"


class StoreUnavailable(Exception):
    """The durable store cannot be read or written."""


class SignalIndeterminate(Exception):
    """The system color-scheme query cannot give an answer."""


@dataclass(frozen=True)
class ThemePreference:
    source: str
    value: str


def opposite(value: str) -> str:
    return LIGHT if value == DARK else DARK


class MemoryStore:
    """Volatile store; contents are lost with the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class CookieStore:
    """
    Durable store backed by the browser cookie jar for the site's origin.

    Writes are buffered until ``apply()`` copies them onto the outgoing
    response; reads see buffered writes first.
    """

    def __init__(self, request: HttpRequest):
        self.request = request
        self.max_age = int(getattr(settings, "THEME_COOKIE_MAX_AGE", 60 * 60 * 24 * 365 * 10))
        self.secure = bool(getattr(settings, "THEME_COOKIE_SECURE", False))
        self._pending: Dict[str, str] = {}

    def _cookie_name(self, key: str) -> str:
        if key == STORAGE_KEY:
            return getattr(settings, "THEME_COOKIE_NAME", STORAGE_KEY)
        return key

    def get(self, key: str) -> Optional[str]:
        if key in self._pending:
            return self._pending[key]
        cookies = getattr(self.request, "COOKIES", None)
        if cookies is None:
            raise StoreUnavailable("request carries no cookie jar")
        return cookies.get(self._cookie_name(key))

    def set(self, key: str, value: str) -> None:
        self._pending[key] = value

    def apply(self, response: HttpResponse) -> None:
        for key, value in self._pending.items():
            try:
                response.set_cookie(
                    self._cookie_name(key),
                    value,
                    max_age=self.max_age,
                    samesite="Lax",
                    secure=self.secure,
                )
            except ValueError:
                logger.exception("Could not persist %s cookie", key)


class FixedSignal:
    """System signal with a predetermined answer; ``None`` is indeterminate."""

    def __init__(self, matches: Optional[bool] = None):
        self.matches = matches

    def query(self, media_feature: str) -> Optional[bool]:
        return self.matches


class ClientHintSignal:
    """
    Reads the ``Sec-CH-Prefers-Color-Scheme`` client hint.

    Browsers only send it after the server has asked for it with ``Accept-CH``;
    until then the signal is indeterminate.
    """

    def __init__(self, request: HttpRequest):
        self.request = request

    def query(self, media_feature: str) -> Optional[bool]:
        if media_feature != COLOR_SCHEME_QUERY:
            raise SignalIndeterminate(f"unsupported media feature {media_feature!r}")
        raw = self.request.headers.get(CLIENT_HINT_HEADER)
        if raw is None:
            return None
        # Structured header token, sent quoted: "dark"
        value = raw.strip().strip('"').lower()
        if value == DARK:
            return True
        if value == LIGHT:
            return False
        return None


def read_explicit(store) -> Optional[str]:
    try:
        value = store.get(STORAGE_KEY)
    except StoreUnavailable as exc:
        logger.debug("Theme store unavailable: %s", exc)
        return None
    except Exception:
        logger.exception("Theme store read failed")
        return None
    return value if value in THEMES else None


def read_system(signal) -> Optional[str]:
    try:
        matches = signal.query(COLOR_SCHEME_QUERY)
    except SignalIndeterminate as exc:
        logger.debug("Color-scheme signal indeterminate: %s", exc)
        return None
    except Exception:
        logger.exception("Color-scheme signal query failed")
        return None
    if matches is None:
        return None
    return DARK if matches is True else LIGHT


def resolve_preference(store, signal) -> ThemePreference:
    explicit = read_explicit(store)
    if explicit is not None:
        return ThemePreference(SOURCE_EXPLICIT, explicit)
    system = read_system(signal)
    if system is not None:
        return ThemePreference(SOURCE_SYSTEM, system)
    return ThemePreference(SOURCE_DEFAULT, DEFAULT_THEME)


def resolve(store, signal) -> str:
    return resolve_preference(store, signal).value


class DocumentTheme:
    """Page-scoped theme read by templates; only ``ThemeResolver`` writes it."""

    def __init__(self, preference: ThemePreference):
        self._preference = preference

    @property
    def value(self) -> str:
        return self._preference.value

    @property
    def source(self) -> str:
        return self._preference.source

    @property
    def preference(self) -> ThemePreference:
        return self._preference

    def __str__(self) -> str:
        return self.value


class ThemeResolver:
    def __init__(self, store, signal):
        self.store = store
        self.signal = signal
        self.document: Optional[DocumentTheme] = None

    def resolve(self) -> str:
        preference = resolve_preference(self.store, self.signal)
        self.document = DocumentTheme(preference)
        return preference.value

    def toggle(self, new_value: str) -> str:
        if new_value not in THEMES:
            raise ValueError(f"Invalid theme {new_value!r}; expected one of {THEMES}")
        try:
            self.store.set(STORAGE_KEY, new_value)
        except StoreUnavailable as exc:
            logger.warning("Theme store unavailable, toggle is volatile: %s", exc)
        except Exception:
            logger.exception("Theme store write failed, toggle is volatile")
        self.document = DocumentTheme(ThemePreference(SOURCE_EXPLICIT, new_value))
        return new_value

    @property
    def value(self) -> str:
        if self.document is None:
            self.resolve()
        return self.document.value

    @property
    def source(self) -> str:
        if self.document is None:
            self.resolve()
        return self.document.source


_BOOTSTRAP_TEMPLATE = """(function () {
  var root = document.documentElement;
  if (root.getAttribute("data-theme-resolved") === "server") { return; }
  var themes = %(themes)s;
  var theme = null;
  var source = %(source_default)s;
  try {
    var stored = window.localStorage.getItem(%(key)s);
    if (themes.indexOf(stored) !== -1) { theme = stored; source = %(source_explicit)s; }
  } catch (e) {}
  if (theme === null) {
    try {
      var mql = window.matchMedia ? window.matchMedia(%(query)s) : null;
      if (mql && typeof mql.matches === "boolean") {
        theme = mql.matches ? %(dark)s : %(light)s;
        source = %(source_system)s;
      }
    } catch (e) {}
  }
  if (theme === null) { theme = %(default)s; }
  root.setAttribute("data-theme", theme);
  root.setAttribute("data-theme-source", source);
})();"""


def bootstrap_script() -> str:
    """Client-side rendition of ``resolve_preference`` for a blocking ``<head>`` script."""
    return _BOOTSTRAP_TEMPLATE % {
        "themes": json.dumps(list(THEMES)),
        "key": json.dumps(STORAGE_KEY),
        "query": json.dumps(COLOR_SCHEME_QUERY),
        "dark": json.dumps(DARK),
        "light": json.dumps(LIGHT),
        "default": json.dumps(DEFAULT_THEME),
        "source_explicit": json.dumps(SOURCE_EXPLICIT),
        "source_system": json.dumps(SOURCE_SYSTEM),
        "source_default": json.dumps(SOURCE_DEFAULT),
    }
