"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_analytics_config,
    _build_theme_config,
    _optional_str,
    _parse_policy,
    _required_str,
    _validate_base_url,
    _validate_site_url,
)
from .models import HomeConfig, LinkPolicy, SiteConfig, SiteConfigError
from .navigation import _build_footer_config, _build_navbar_config
from .tutorials import _build_tutorial_registry


def load_site_config(path: Path, *, today: dt.date | None = None) -> SiteConfig:
    """Load the YAML configuration describing the site and its navigation.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration (for example,
        ``config/site.yaml``).
    today : date, optional
        Date used to expand ``{year}`` in the footer copyright. Defaults to
        the current UTC date.

    Returns
    -------
    SiteConfig
        Frozen site configuration. Relative ``paths`` entries resolve against
        the project root: the parent of a ``config/`` folder holding the file,
        otherwise the file's own directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields (``title``, ``url``) are missing or any block is
        malformed.

    Examples
    --------
    >>> from pathlib import Path
    >>> from learntdd_pages.config import load_site_config
    >>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> site.title  # doctest: +SKIP
    'Learn TDD'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    return build_site_config(
        raw, root=_project_root(path), today=today or dt.datetime.now(dt.UTC).date()
    )


def build_site_config(
    raw: typ.Mapping[str, typ.Any], *, root: Path, today: dt.date
) -> SiteConfig:
    """Validate an already parsed mapping into a :class:`SiteConfig`."""
    title = _required_str(raw, "title", "Site configuration")
    url = _validate_site_url(_required_str(raw, "url", "Site configuration"))
    tutorials = _build_tutorial_registry(raw.get("tutorials"))
    paths = raw.get("paths") or {}
    if not isinstance(paths, dict):
        msg = "The 'paths' block must be a mapping."
        raise SiteConfigError(msg)

    return SiteConfig(
        title=title,
        url=url,
        tagline=_optional_str(raw.get("tagline")) or "",
        base_url=_validate_base_url(raw.get("base_url")),
        navbar=_build_navbar_config(
            raw.get("navbar"), site_title=title, tutorials=tutorials
        ),
        footer=_build_footer_config(raw.get("footer"), today=today),
        theme=_build_theme_config(raw.get("theme")),
        analytics=_build_analytics_config(raw.get("analytics")),
        tutorials=tutorials,
        home=_build_home_config(raw.get("home")),
        on_broken_links=_parse_policy(
            raw.get("on_broken_links"),
            field="on_broken_links",
            default=LinkPolicy.THROW,
        ),
        on_broken_markdown_links=_parse_policy(
            raw.get("on_broken_markdown_links"),
            field="on_broken_markdown_links",
            default=LinkPolicy.WARN,
        ),
        organization_name=_optional_str(raw.get("organization_name")),
        project_name=_optional_str(raw.get("project_name")),
        favicon=_optional_str(raw.get("favicon")),
        pages_dir=root / paths.get("pages", "pages"),
        static_dir=root / paths.get("static", "static"),
        output_dir=root / paths.get("output", "public"),
    )


def _build_home_config(payload: typ.Mapping[str, typ.Any] | None) -> HomeConfig:
    """Build the home page metadata block."""
    base = HomeConfig()
    match payload:
        case None:
            return base
        case dict() as data:
            return HomeConfig(
                title=_optional_str(data.get("title")) or base.title,
                description=_optional_str(data.get("description")) or "",
                older_heading=_optional_str(data.get("older_heading"))
                or base.older_heading,
            )
        case _:
            msg = "Home configuration must be a mapping."
            raise SiteConfigError(msg)


def _project_root(path: Path) -> Path:
    """Return the directory relative paths in the config are resolved from."""
    parent = path.resolve().parent
    if parent.name == "config":
        return parent.parent
    return parent


__all__ = ["build_site_config", "load_site_config"]
