"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import datetime as dt
import enum
import typing as typ
from urllib.parse import urlsplit

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .models import AnalyticsConfig, LinkPolicy, SiteConfigError, ThemeConfig

_E = typ.TypeVar("_E", bound=enum.Enum)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_str(payload: typ.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a string or raise when missing or blank."""
    value = payload.get(key)
    if not isinstance(value, str | int | float) or isinstance(value, bool):
        msg = f"{context} requires a string '{key}'."
        raise SiteConfigError(msg)
    text = str(value).strip()
    if not text:
        msg = f"{context} requires a non-empty '{key}'."
        raise SiteConfigError(msg)
    return text


def _parse_enum(enum_type: type[_E], value: object, *, field: str, default: _E) -> _E:
    """Coerce ``value`` into ``enum_type`` or raise a descriptive error."""
    if value is None:
        return default
    try:
        return enum_type(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        msg = f"Invalid {field} '{value}'. Expected one of: {allowed}."
        raise SiteConfigError(msg) from exc


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    """Return ``value`` when it is a YAML boolean, ``default`` when unset.

    YAML 1.2 reads ``no`` and ``off`` as strings, so anything other than a real
    ``true``/``false`` is rejected rather than coerced.
    """
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"{field} must be true or false, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _parse_policy(value: object, *, field: str, default: LinkPolicy) -> LinkPolicy:
    """Parse a broken-link policy name."""
    return _parse_enum(LinkPolicy, value, field=field, default=default)


def _validate_site_url(value: str) -> str:
    """Ensure the site URL is absolute http(s) and drop any trailing slash."""
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        msg = f"Site 'url' must be an absolute http(s) URL, got '{value}'."
        raise SiteConfigError(msg)
    return value.rstrip("/")


def _validate_base_url(value: object | None) -> str:
    """Return a base URL that starts and ends with a slash."""
    text = _optional_str(value) or "/"
    if not text.startswith("/"):
        msg = f"Site 'base_url' must start with '/', got '{text}'."
        raise SiteConfigError(msg)
    if not text.endswith("/"):
        text = f"{text}/"
    return text


def _validate_pygments_style(name: str, field: str) -> str:
    """Ensure ``name`` is a known Pygments style."""
    try:
        get_style_by_name(name)
    except ClassNotFound as exc:
        msg = f"Unknown Pygments style '{name}' for theme '{field}'."
        raise SiteConfigError(msg) from exc
    return name


def _build_theme_config(payload: typ.Mapping[str, typ.Any] | None) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    match payload:
        case None:
            return base
        case dict():
            pass
        case _:
            msg = "Theme configuration must be a mapping."
            raise SiteConfigError(msg)
    light = str(payload.get("light", base.light))
    dark = str(payload.get("dark", base.dark))
    return ThemeConfig(
        light=_validate_pygments_style(light, "light"),
        dark=_validate_pygments_style(dark, "dark"),
        custom_css=_optional_str(payload.get("custom_css")),
    )


def _build_analytics_config(
    payload: typ.Mapping[str, typ.Any] | None,
) -> AnalyticsConfig | None:
    """Build the analytics pass-through block, if any."""
    match payload:
        case None:
            return None
        case {"tracking_id": tracking_id, **rest} if tracking_id:
            return AnalyticsConfig(
                tracking_id=str(tracking_id),
                anonymize_ip=_parse_bool(
                    rest.get("anonymize_ip"),
                    field="Analytics 'anonymize_ip'",
                    default=True,
                ),
            )
        case _:
            msg = "Analytics configuration requires a 'tracking_id'."
            raise SiteConfigError(msg)


def _expand_copyright(template: str, today: dt.date) -> str:
    """Substitute ``{year}`` in the copyright line."""
    return template.replace("{year}", str(today.year))


__all__ = [
    "_build_analytics_config",
    "_build_theme_config",
    "_expand_copyright",
    "_optional_str",
    "_parse_bool",
    "_parse_enum",
    "_parse_policy",
    "_required_str",
    "_validate_base_url",
    "_validate_pygments_style",
    "_validate_site_url",
]
