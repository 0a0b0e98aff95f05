"""Tests for the home page composition.

The home page is a pure function of the site configuration and the two entry
lists. These tests render it in memory with :class:`HomePageBuilder` and check
the banner, the card grid, the older tutorials list, and the layout chrome
with BeautifulSoup.

Usage
-----
Run ``pytest tests/test_homepage.py -v``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest
from bs4 import BeautifulSoup

from learntdd_pages.config import (
    AnalyticsConfig,
    FrameworkTutorial,
    TutorialCategory,
    TutorialRegistry,
)
from learntdd_pages.homepage import HomePageBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

    from learntdd_pages.config import SiteConfig

TAGLINE = "Learn Test-Driven Development in the framework of your choice."


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _card_links(soup: BeautifulSoup) -> list[tuple[str, str]]:
    return [
        (link.get_text(strip=True), link["href"])
        for link in soup.select("[data-test='framework-card'] a.framework-card__link")
    ]


def test_banner_shows_title_and_tagline_verbatim(learn_tdd_site: SiteConfig) -> None:
    """The banner renders the configured title and tagline unchanged."""
    soup = _soup(HomePageBuilder(learn_tdd_site).render())
    banner = soup.select_one("[data-test='banner']")
    assert banner is not None, "expected a banner element on the home page"
    assert banner.select_one("h1.hero__title").get_text() == "Learn TDD"
    assert banner.select_one("p.hero__subtitle").get_text() == TAGLINE


def test_cards_follow_declared_order(learn_tdd_site: SiteConfig) -> None:
    """Exactly three cards render, in registry order, linking to their routes."""
    soup = _soup(HomePageBuilder(learn_tdd_site).render())
    assert _card_links(soup) == [
        ("React", "/react"),
        ("Next.js", "/next"),
        ("React Native", "/react-native"),
    ]


def test_card_logos_pass_through(learn_tdd_site: SiteConfig) -> None:
    """Each card carries its logo asset and alt text."""
    soup = _soup(HomePageBuilder(learn_tdd_site).render())
    logos = [
        (img["src"], img["alt"]) for img in soup.select("img.framework-card__logo")
    ]
    assert logos == [
        ("/img/react.svg", "React logo"),
        ("/img/next.svg", "Next.js logo"),
        ("/img/react.svg", "React Native logo"),
    ]


def test_older_tutorials_render_as_plain_links(learn_tdd_site: SiteConfig) -> None:
    """Secondary entries render as a plain list, not as cards."""
    soup = _soup(HomePageBuilder(learn_tdd_site).render())
    wrapper = soup.select_one("[data-test='older-tutorials']")
    assert wrapper is not None, "expected the older tutorials block"
    assert wrapper.select_one("h2").get_text() == "Older Tutorials"
    links = [(a.get_text(), a["href"]) for a in wrapper.select("li a")]
    assert links == [("Ember", "/ember"), ("Ruby on Rails", "/rails"), ("Vue", "/vue")]
    assert not wrapper.select(".framework-card"), "older tutorials must not be cards"


def test_older_tutorials_block_omitted_when_empty(learn_tdd_site: SiteConfig) -> None:
    """No older tutorials means no older tutorials heading at all."""
    html = HomePageBuilder(learn_tdd_site).render(older=())
    assert _soup(html).select_one("[data-test='older-tutorials']") is None


def test_render_is_deterministic(learn_tdd_site: SiteConfig) -> None:
    """Rendering twice with the same inputs yields byte-identical output."""
    first = HomePageBuilder(learn_tdd_site).render()
    second = HomePageBuilder(learn_tdd_site).render()
    assert first == second


def test_explicit_card_order_is_not_sorted(learn_tdd_site: SiteConfig) -> None:
    """Cards passed explicitly keep the caller's order, duplicates included."""
    cards = [
        FrameworkTutorial("Vue", "/vue"),
        FrameworkTutorial("React", "/react"),
        FrameworkTutorial("React", "/react"),
    ]
    soup = _soup(HomePageBuilder(learn_tdd_site).render(cards=cards))
    assert _card_links(soup) == [
        ("Vue", "/vue"),
        ("React", "/react"),
        ("React", "/react"),
    ]


def test_cards_and_navigation_are_independent(learn_tdd_site: SiteConfig) -> None:
    """Dropping Next.js from the cards leaves it in the navbar untouched."""
    registry = learn_tdd_site.tutorials
    without_next = dc.replace(
        registry,
        entries=tuple(entry for entry in registry if entry.name != "Next.js"),
    )
    site = dc.replace(learn_tdd_site, tutorials=without_next)
    soup = _soup(HomePageBuilder(site).render())
    assert _card_links(soup) == [("React", "/react"), ("React Native", "/react-native")]
    navbar_hrefs = [a["href"] for a in soup.select("[data-test='navbar'] a")]
    assert "/next" in navbar_hrefs, "navbar keeps its own Next.js entry"


def test_hidden_tutorial_stays_out_of_home(learn_tdd_site: SiteConfig) -> None:
    """Registry entries with ``home`` disabled are not rendered as cards."""
    entries = list(learn_tdd_site.tutorials.entries)
    entries[1] = dc.replace(entries[1], home=False)
    site = dc.replace(
        learn_tdd_site,
        tutorials=dc.replace(learn_tdd_site.tutorials, entries=tuple(entries)),
    )
    names = [name for name, _ in _card_links(_soup(HomePageBuilder(site).render()))]
    assert names == ["React", "React Native"]


def test_layout_chrome_and_metadata(learn_tdd_site: SiteConfig) -> None:
    """The page carries the site title, navbar dropdown, and footer."""
    soup = _soup(HomePageBuilder(learn_tdd_site).render())
    assert soup.title is not None
    assert soup.title.get_text() == "Home | Learn TDD"
    description = soup.select_one("meta[name='description']")
    assert description is not None
    assert description["content"] == TAGLINE
    dropdown = [a["href"] for a in soup.select(".dropdown__menu a")]
    assert dropdown == ["/ember", "/rails", "/vue"]
    footer = soup.select_one("[data-test='footer']")
    assert footer is not None
    assert "footer--dark" in footer["class"]
    contact = footer.select_one("a.footer__link-item")
    assert contact["href"] == "mailto:tdd@codingitwrong.com"
    assert "Copyright © 2024 Josh Justice." in footer.get_text()


def test_colour_mode_follows_reader_preference(learn_tdd_site: SiteConfig) -> None:
    """An inline head script picks the stored or preferred colour mode."""
    soup = _soup(HomePageBuilder(learn_tdd_site).render())
    assert soup.html["data-theme"] == "light", "light is the no-script default"
    script = soup.head.select_one("script[data-test='color-mode']")
    assert script is not None, "expected an inline colour mode script"
    source = script.get_text()
    assert "prefers-color-scheme: dark" in source
    assert 'localStorage.getItem("theme")' in source
    assert 'setAttribute("data-theme"' in source


def test_analytics_snippet_uses_tracking_id_unmodified(
    learn_tdd_site: SiteConfig,
) -> None:
    """The gtag snippet is emitted only when analytics is configured."""
    assert "googletagmanager" not in HomePageBuilder(learn_tdd_site).render()
    site = dc.replace(learn_tdd_site, analytics=AnalyticsConfig("G-D5WS3PECNF"))
    html = HomePageBuilder(site).render()
    assert "gtag/js?id=G-D5WS3PECNF" in html
    assert "\"G-D5WS3PECNF\"" in html


def test_base_url_prefixes_internal_links(learn_tdd_site: SiteConfig) -> None:
    """A non-root base URL prefixes routes but leaves external links alone."""
    site = dc.replace(learn_tdd_site, base_url="/learn/")
    soup = _soup(HomePageBuilder(site).render())
    assert _card_links(soup)[0] == ("React", "/learn/react")
    contact = soup.select_one("a.footer__link-item")
    assert contact["href"] == "mailto:tdd@codingitwrong.com"


def test_titles_are_escaped(learn_tdd_site: SiteConfig) -> None:
    """Markup in configuration text is escaped, not injected."""
    site = dc.replace(learn_tdd_site, tagline="<script>alert(1)</script>")
    html = HomePageBuilder(site).render()
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


@pytest.mark.parametrize(
    "category", [TutorialCategory.FEATURED, TutorialCategory.SECONDARY]
)
def test_registry_tag_selects_home_view(
    learn_tdd_site: SiteConfig, category: TutorialCategory
) -> None:
    """An entry's tag decides whether it lands in the card grid or the list."""
    entry = FrameworkTutorial("Svelte", "/svelte", category=category)
    site = dc.replace(learn_tdd_site, tutorials=TutorialRegistry((entry,)))
    soup = _soup(HomePageBuilder(site).render())
    older = soup.select("[data-test='older-tutorial'] a")
    if category is TutorialCategory.FEATURED:
        assert _card_links(soup) == [("Svelte", "/svelte")]
        assert older == []
    else:
        assert _card_links(soup) == []
        assert [a["href"] for a in older] == ["/svelte"]


def test_explicit_cards_always_render_as_cards(learn_tdd_site: SiteConfig) -> None:
    """A secondary entry passed as a card still renders as a card."""
    entry = FrameworkTutorial("Vue", "/vue", category=TutorialCategory.SECONDARY)
    soup = _soup(HomePageBuilder(learn_tdd_site).render(cards=[entry], older=[]))
    grid = soup.select_one("[data-test='framework-cards']")
    assert grid is not None
    assert [child.name for child in grid.find_all(recursive=False)] == ["div"]
    assert _card_links(soup) == [("Vue", "/vue")]
    assert not grid.select("li")


def test_explicit_older_entries_never_render_as_cards(
    learn_tdd_site: SiteConfig,
) -> None:
    """A featured entry passed to the older list renders as a plain ``li``."""
    entry = FrameworkTutorial("Ember", "/ember", "/img/ember.svg")
    soup = _soup(HomePageBuilder(learn_tdd_site).render(cards=[], older=[entry]))
    items = soup.select("[data-test='older-tutorials'] ul > *")
    assert [item.name for item in items] == ["li"]
    assert items[0].a["href"] == "/ember"
    assert not soup.select(".framework-card"), "older tutorials must not be cards"


def test_run_writes_index(learn_tdd_site: SiteConfig, tmp_path: Path) -> None:
    """``run`` writes ``index.html`` into the output directory."""
    output = HomePageBuilder(learn_tdd_site).run(tmp_path / "public")
    assert output == tmp_path / "public" / "index.html"
    assert output.read_text(encoding="utf-8") == (
        HomePageBuilder(learn_tdd_site).render()
    )
