"""Shared fixtures for the Learn TDD site tests.

The fixtures build a throwaway project tree (``config/site.yaml``, ``pages/``
and ``static/``) under ``tmp_path`` so loader, builder, and CLI tests all run
against the same realistic configuration without touching the repository's
own ``config/`` directory.
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from learntdd_pages.config import (
    FooterConfig,
    FooterLinkConfig,
    FooterSectionConfig,
    FrameworkTutorial,
    NavbarConfig,
    NavDropdownConfig,
    NavLinkConfig,
    SiteConfig,
    TutorialCategory,
    TutorialRegistry,
    load_site_config,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TITLE = "Learn TDD"
TAGLINE = "Learn Test-Driven Development in the framework of your choice."
FIXED_TODAY = dt.date(2024, 5, 1)

BASE_CONFIG = dedent(
    """
    title: Learn TDD
    tagline: Learn Test-Driven Development in the framework of your choice.
    url: https://learntdd.in
    base_url: /
    on_broken_links: throw
    on_broken_markdown_links: warn
    analytics:
      tracking_id: G-D5WS3PECNF
      anonymize_ip: true
    theme:
      light: default
      dark: dracula
    tutorials:
      - name: React
        route: /react
        logo: /img/react.svg
      - name: Next.js
        route: /next
        logo: /img/next.svg
      - name: React Native
        route: /react-native
        logo: /img/react.svg
      - name: Ember
        route: /ember
        category: secondary
      - name: Ruby on Rails
        route: /rails
        category: secondary
      - name: Vue
        route: /vue
        category: secondary
    navbar:
      title: Learn TDD in…
      items:
        - type: tutorials
          category: featured
        - type: dropdown
          label: Older Tutorials
          items_from: secondary
    footer:
      style: dark
      links:
        - title: More
          items:
            - label: Contact
              to: mailto:tdd@codingitwrong.com
      copyright: Copyright © {year} Josh Justice.
    """
).lstrip()

PAGE_SLUGS = ("react", "next", "react-native", "ember", "rails", "vue")


def _page_markdown(slug: str) -> str:
    name = slug.replace("-", " ").title()
    return f"# Learn TDD in {name}\n\nWrite a failing test first.\n"


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Create a project tree with one Markdown page per tutorial route."""
    root = tmp_path / "site"
    (root / "config").mkdir(parents=True)
    pages_dir = root / "pages"
    pages_dir.mkdir()
    for slug in PAGE_SLUGS:
        (pages_dir / f"{slug}.md").write_text(_page_markdown(slug), encoding="utf-8")
    img_dir = root / "static" / "img"
    img_dir.mkdir(parents=True)
    (img_dir / "react.svg").write_text("<svg/>", encoding="utf-8")
    return root


@pytest.fixture
def write_config(site_root: Path) -> cabc.Callable[[str], Path]:
    """Return a helper writing ``config/site.yaml`` and returning its path."""

    def _write(text: str = BASE_CONFIG) -> Path:
        path = site_root / "config" / "site.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_config(write_config: cabc.Callable[[str], Path]) -> SiteConfig:
    """Load the base configuration from the temporary project tree."""
    return load_site_config(write_config(BASE_CONFIG), today=FIXED_TODAY)


@pytest.fixture
def learn_tdd_site() -> SiteConfig:
    """Build the Learn TDD configuration in memory, without any YAML."""
    tutorials = TutorialRegistry(
        entries=(
            FrameworkTutorial("React", "/react", "/img/react.svg"),
            FrameworkTutorial("Next.js", "/next", "/img/next.svg"),
            FrameworkTutorial("React Native", "/react-native", "/img/react.svg"),
            FrameworkTutorial("Ember", "/ember", category=TutorialCategory.SECONDARY),
            FrameworkTutorial(
                "Ruby on Rails", "/rails", category=TutorialCategory.SECONDARY
            ),
            FrameworkTutorial("Vue", "/vue", category=TutorialCategory.SECONDARY),
        )
    )
    navbar = NavbarConfig(
        title="Learn TDD in…",
        items=(
            NavLinkConfig("/react", "React"),
            NavLinkConfig("/next", "Next.js"),
            NavLinkConfig("/react-native", "React Native"),
            NavDropdownConfig(
                "Older Tutorials",
                (
                    NavLinkConfig("/ember", "Ember"),
                    NavLinkConfig("/rails", "Ruby on Rails"),
                    NavLinkConfig("/vue", "Vue"),
                ),
            ),
        ),
    )
    footer = FooterConfig(
        sections=(
            FooterSectionConfig(
                "More", (FooterLinkConfig("Contact", "mailto:tdd@codingitwrong.com"),)
            ),
        ),
        copyright="Copyright © 2024 Josh Justice.",
    )
    return SiteConfig(
        title=TITLE,
        url="https://learntdd.in",
        tagline=TAGLINE,
        navbar=navbar,
        footer=footer,
        tutorials=tutorials,
    )


@pytest.fixture
def base_config_text() -> str:
    """Return the YAML text of the base configuration for tests to edit."""
    return BASE_CONFIG


@pytest.fixture(autouse=True)
def _reset_learntdd_logger() -> cabc.Iterator[None]:
    """Drop handlers installed by CLI commands so they never outlive a test."""
    yield
    logger = logging.getLogger("learntdd")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
