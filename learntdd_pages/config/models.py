"""Typed dataclasses describing the Learn TDD site configuration."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import Path

from learntdd_pages._constants import EXTERNAL_SCHEMES


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class LinkPolicy(enum.StrEnum):
    """How the build reacts to a link whose target route is not served."""

    IGNORE = "ignore"
    LOG = "log"
    WARN = "warn"
    THROW = "throw"


class TutorialCategory(enum.StrEnum):
    """Presentation tag for a framework tutorial on the home page."""

    FEATURED = "featured"
    SECONDARY = "secondary"


class NavPosition(enum.StrEnum):
    """Side of the navbar an item is placed on."""

    LEFT = "left"
    RIGHT = "right"


@dc.dataclass(frozen=True, slots=True)
class FrameworkTutorial:
    """One framework tutorial known to the site.

    Attributes
    ----------
    name : str
        Display name, e.g. ``"React Native"``.
    route : str
        Route serving the tutorial, e.g. ``"/react-native"``.
    logo : str | None
        Static asset path for the logo; passed through to templates untouched.
    category : TutorialCategory
        ``FEATURED`` entries render as cards, ``SECONDARY`` as plain links.
    logo_alt : str
        Alternative text for the logo image.
    home : bool
        Whether the tutorial appears on the home page at all.
    """

    name: str
    route: str
    logo: str | None = None
    category: TutorialCategory = TutorialCategory.FEATURED
    logo_alt: str = ""
    home: bool = True

    @property
    def href(self) -> str:
        """Link target used by cards and lists."""
        return self.route


FrameworkCardEntry = FrameworkTutorial


@dc.dataclass(frozen=True, slots=True)
class TutorialRegistry:
    """Canonical ordered list of tutorials that every view derives from."""

    entries: tuple[FrameworkTutorial, ...] = ()

    def __iter__(self) -> typ.Iterator[FrameworkTutorial]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def by_category(
        self, category: TutorialCategory, *, home_only: bool = False
    ) -> tuple[FrameworkTutorial, ...]:
        """Return entries tagged ``category`` in declaration order."""
        return tuple(
            entry
            for entry in self.entries
            if entry.category == category and (entry.home or not home_only)
        )

    @property
    def featured(self) -> tuple[FrameworkTutorial, ...]:
        """Entries shown as cards on the home page."""
        return self.by_category(TutorialCategory.FEATURED, home_only=True)

    @property
    def secondary(self) -> tuple[FrameworkTutorial, ...]:
        """Entries shown in the older tutorials list."""
        return self.by_category(TutorialCategory.SECONDARY, home_only=True)


@dc.dataclass(frozen=True, slots=True)
class NavLinkConfig:
    """Navbar link pointing at a route or external URL."""

    to: str
    label: str
    position: NavPosition = NavPosition.LEFT


@dc.dataclass(frozen=True, slots=True)
class NavDropdownConfig:
    """Navbar dropdown grouping several links under one label."""

    label: str
    items: tuple[NavLinkConfig, ...]
    position: NavPosition = NavPosition.LEFT


NavItem = NavLinkConfig | NavDropdownConfig


@dc.dataclass(frozen=True, slots=True)
class NavbarConfig:
    """Navbar title and ordered items."""

    title: str
    items: tuple[NavItem, ...] = ()

    def items_at(self, position: NavPosition) -> tuple[NavItem, ...]:
        """Return items placed at ``position``, preserving declaration order."""
        return tuple(item for item in self.items if item.position == position)

    def links(self) -> typ.Iterator[NavLinkConfig]:
        """Yield every link, flattening dropdowns in display order."""
        for item in self.items:
            match item:
                case NavDropdownConfig(items=children):
                    yield from children
                case NavLinkConfig():
                    yield item


@dc.dataclass(frozen=True, slots=True)
class FooterLinkConfig:
    """Footer hyperlink metadata."""

    label: str
    to: str

    @property
    def external(self) -> bool:
        """Whether the link leaves the site."""
        return self.to.lower().startswith(EXTERNAL_SCHEMES)


@dc.dataclass(frozen=True, slots=True)
class FooterSectionConfig:
    """Titled column of footer links."""

    title: str
    items: tuple[FooterLinkConfig, ...]


@dc.dataclass(frozen=True, slots=True)
class FooterConfig:
    """Footer style, link sections, and copyright line."""

    style: str = "dark"
    sections: tuple[FooterSectionConfig, ...] = ()
    copyright: str = ""


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Pygments styles for code blocks in light and dark mode."""

    light: str = "default"
    dark: str = "dracula"
    custom_css: str | None = None


@dc.dataclass(frozen=True, slots=True)
class AnalyticsConfig:
    """Google Analytics settings passed through to the layout untouched."""

    tracking_id: str
    anonymize_ip: bool = True


@dc.dataclass(frozen=True, slots=True)
class HomeConfig:
    """Home page metadata and section headings."""

    title: str = "Home"
    description: str = ""
    older_heading: str = "Older Tutorials"


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Fully validated site configuration shared by every renderer."""

    title: str
    url: str
    tagline: str = ""
    base_url: str = "/"
    navbar: NavbarConfig = dc.field(default_factory=lambda: NavbarConfig(title=""))
    footer: FooterConfig = dc.field(default_factory=FooterConfig)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    analytics: AnalyticsConfig | None = None
    tutorials: TutorialRegistry = dc.field(default_factory=TutorialRegistry)
    home: HomeConfig = dc.field(default_factory=HomeConfig)
    on_broken_links: LinkPolicy = LinkPolicy.THROW
    on_broken_markdown_links: LinkPolicy = LinkPolicy.WARN
    organization_name: str | None = None
    project_name: str | None = None
    favicon: str | None = None
    pages_dir: Path = Path("pages")
    static_dir: Path = Path("static")
    output_dir: Path = Path("public")

    def url_for(self, target: str) -> str:
        """Return the href for ``target`` under the configured base URL.

        External targets and targets under the root base URL are returned
        unchanged.
        """
        if target.lower().startswith(EXTERNAL_SCHEMES) or self.base_url == "/":
            return target
        if target.startswith("/"):
            return self.base_url.rstrip("/") + target
        return target

    def page_title(self, title: str | None) -> str:
        """Format a browser title as ``"<page> | <site>"``."""
        if not title or title == self.title:
            return self.title
        return f"{title} | {self.title}"


__all__ = [
    "AnalyticsConfig",
    "FooterConfig",
    "FooterLinkConfig",
    "FooterSectionConfig",
    "FrameworkCardEntry",
    "FrameworkTutorial",
    "HomeConfig",
    "LinkPolicy",
    "NavDropdownConfig",
    "NavItem",
    "NavLinkConfig",
    "NavPosition",
    "NavbarConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "TutorialCategory",
    "TutorialRegistry",
]
