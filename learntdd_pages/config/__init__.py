"""Load and validate the Learn TDD site configuration.

This subpackage parses the project's ``site.yaml`` file into frozen
dataclasses (:class:`SiteConfig`, :class:`NavbarConfig`, etc.) that every
renderer receives explicitly. The primary entry point is
:func:`load_site_config`, which fails fast on a missing ``title`` or ``url``
and returns a :class:`SiteConfig` ready for page composition.

Examples
--------
>>> from pathlib import Path
>>> from learntdd_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> [entry.route for entry in site.tutorials.featured]  # doctest: +SKIP
['/react', '/next', '/react-native']
"""

from .loader import build_site_config, load_site_config
from .models import (
    AnalyticsConfig,
    FooterConfig,
    FooterLinkConfig,
    FooterSectionConfig,
    FrameworkCardEntry,
    FrameworkTutorial,
    HomeConfig,
    LinkPolicy,
    NavbarConfig,
    NavDropdownConfig,
    NavItem,
    NavLinkConfig,
    NavPosition,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
    TutorialCategory,
    TutorialRegistry,
)

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
    "build_site_config",
    "load_site_config",
]
