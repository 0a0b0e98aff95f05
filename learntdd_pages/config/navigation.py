"""Navbar and footer configuration builders."""

from __future__ import annotations

import datetime as dt
import typing as typ

from .helpers import _expand_copyright, _optional_str, _parse_enum, _required_str
from .models import (
    FooterConfig,
    FooterLinkConfig,
    FooterSectionConfig,
    NavbarConfig,
    NavDropdownConfig,
    NavItem,
    NavLinkConfig,
    NavPosition,
    SiteConfigError,
    TutorialCategory,
    TutorialRegistry,
)

FOOTER_STYLES = ("dark", "light")


def _build_navbar_config(
    payload: typ.Mapping[str, typ.Any] | None,
    *,
    site_title: str,
    tutorials: TutorialRegistry,
) -> NavbarConfig:
    """Build the navbar from its YAML block.

    Items keep their declaration order. ``type: tutorials`` items and
    dropdowns declaring ``items_from`` expand registry entries in place.
    """
    match payload:
        case None:
            return NavbarConfig(title=site_title)
        case dict() as data:
            pass
        case _:
            msg = "Navbar configuration must be a mapping."
            raise SiteConfigError(msg)
    title = _optional_str(data.get("title")) or site_title
    entries = data.get("items") or []
    if not isinstance(entries, list):
        msg = "Navbar 'items' must be a list."
        raise SiteConfigError(msg)
    items: list[NavItem] = []
    for entry in entries:
        items.extend(_build_nav_item(entry, tutorials))
    return NavbarConfig(title=title, items=tuple(items))


def _build_nav_item(
    entry: object, tutorials: TutorialRegistry
) -> list[NavItem]:
    """Build one or more navbar items from a single YAML entry."""
    match entry:
        case {"type": "dropdown", **rest}:
            return [_build_nav_dropdown(rest, tutorials)]
        case {"type": "tutorials", **rest}:
            position = _parse_position(rest.get("position"))
            category = _parse_category(rest.get("category"))
            return [
                NavLinkConfig(to=tutorial.route, label=tutorial.name, position=position)
                for tutorial in tutorials.by_category(category)
            ]
        case dict() as mapping if mapping.get("type", "link") == "link":
            return [_build_nav_link(mapping)]
        case {"type": other}:
            msg = f"Unknown navbar item type '{other}'."
            raise SiteConfigError(msg)
        case _:
            msg = f"Navbar items must be mappings with 'to' and 'label', got {entry!r}."
            raise SiteConfigError(msg)


def _build_nav_link(
    payload: typ.Mapping[str, typ.Any],
    *,
    default_position: NavPosition = NavPosition.LEFT,
) -> NavLinkConfig:
    """Build a navbar link."""
    label = _required_str(payload, "label", "Navbar link")
    to = _optional_str(payload.get("to")) or _optional_str(payload.get("href"))
    if not to:
        msg = f"Navbar link '{label}' requires 'to' or 'href'."
        raise SiteConfigError(msg)
    position = _parse_position(payload.get("position"), default=default_position)
    return NavLinkConfig(to=to, label=label, position=position)


def _build_nav_dropdown(
    payload: typ.Mapping[str, typ.Any], tutorials: TutorialRegistry
) -> NavDropdownConfig:
    """Build a dropdown, optionally filling its children from the registry."""
    label = _required_str(payload, "label", "Navbar dropdown")
    position = _parse_position(payload.get("position"))
    children: list[NavLinkConfig] = []
    if payload.get("items_from") is not None:
        category = _parse_category(payload.get("items_from"))
        children.extend(
            NavLinkConfig(to=tutorial.route, label=tutorial.name, position=position)
            for tutorial in tutorials.by_category(category)
        )
    for child in payload.get("items") or []:
        match child:
            case dict():
                children.append(_build_nav_link(child, default_position=position))
            case _:
                msg = f"Dropdown '{label}' items must be mappings."
                raise SiteConfigError(msg)
    if not children:
        msg = f"Dropdown '{label}' requires at least one item."
        raise SiteConfigError(msg)
    return NavDropdownConfig(label=label, items=tuple(children), position=position)


def _parse_position(
    value: object, *, default: NavPosition = NavPosition.LEFT
) -> NavPosition:
    return _parse_enum(NavPosition, value, field="navbar position", default=default)


def _parse_category(value: object) -> TutorialCategory:
    return _parse_enum(
        TutorialCategory,
        value,
        field="tutorial category",
        default=TutorialCategory.FEATURED,
    )


def _build_footer_config(
    payload: typ.Mapping[str, object] | None, *, today: dt.date
) -> FooterConfig:
    """Build the footer configuration."""
    match payload:
        case None:
            return FooterConfig()
        case dict() as data:
            pass
        case _:
            msg = "Footer configuration must be a mapping."
            raise SiteConfigError(msg)
    style = _optional_str(data.get("style")) or "dark"
    if style not in FOOTER_STYLES:
        msg = f"Footer style must be one of {', '.join(FOOTER_STYLES)}, got '{style}'."
        raise SiteConfigError(msg)
    sections: list[FooterSectionConfig] = []
    for entry in data.get("links") or []:
        match entry:
            case {"title": title, **rest} if title:
                links = _build_footer_links(rest.get("items"), section=str(title))
            case _:
                msg = "Footer link sections require a 'title'."
                raise SiteConfigError(msg)
        sections.append(FooterSectionConfig(title=str(title), items=tuple(links)))
    copyright_text = _optional_str(data.get("copyright")) or ""
    return FooterConfig(
        style=style,
        sections=tuple(sections),
        copyright=_expand_copyright(copyright_text, today),
    )


def _build_footer_links(entries: object, *, section: str) -> list[FooterLinkConfig]:
    """Build the links of one footer section."""
    match entries:
        case None:
            return []
        case list():
            pass
        case _:
            msg = f"Footer section '{section}' items must be a list."
            raise SiteConfigError(msg)
    links: list[FooterLinkConfig] = []
    for entry in entries:
        match entry:
            case {"label": str() as label, **rest} if label and (
                rest.get("to") or rest.get("href")
            ):
                target = str(rest.get("to") or rest.get("href"))
            case _:
                msg = f"Footer links in '{section}' require 'label' and 'to'."
                raise SiteConfigError(msg)
        links.append(FooterLinkConfig(label=label, to=target))
    return links


__all__ = [
    "FOOTER_STYLES",
    "_build_footer_config",
    "_build_footer_links",
    "_build_nav_dropdown",
    "_build_nav_item",
    "_build_nav_link",
    "_build_navbar_config",
]
