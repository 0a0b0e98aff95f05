"""Learn TDD home page composition.

This module turns a :class:`~learntdd_pages.config.SiteConfig` into the
``index.html`` served at ``/``. The page is assembled from three views: a
banner with the site title and tagline, a grid of featured framework cards,
and a plain list of older tutorials. Both lists default to the tutorial
registry filtered by category, so an entry's tag picks the view it lands in.
Callers may pass explicit sequences instead; each is rendered by the view it
was passed to, and the builder does not cross-check them against the navbar.

Rendering is a pure function of the configuration and the two lists: the same
inputs always produce byte-identical markup.

>>> from learntdd_pages.config import SiteConfig
>>> site = SiteConfig(title="Learn TDD", url="https://learntdd.in")
>>> "Learn TDD</h1>" in HomePageBuilder(site).render()
True
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ._constants import HOME_ROUTE, PAGE_FILENAME

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import FrameworkTutorial, SiteConfig


class HomePageBuilder:
    """Render the home page from structured config data."""

    def __init__(
        self, site: SiteConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site : SiteConfig
            Parsed site configuration; provides the banner text, the tutorial
            registry, and the layout chrome (navbar and footer).
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``learntdd_pages/templates``.
        """
        self.site = site
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("home_page.jinja")

    def render(
        self,
        cards: cabc.Sequence[FrameworkTutorial] | None = None,
        older: cabc.Sequence[FrameworkTutorial] | None = None,
    ) -> str:
        """Return the home page HTML.

        Parameters
        ----------
        cards : Sequence[FrameworkTutorial], optional
            Entries rendered as cards, in order. Defaults to the featured
            registry entries.
        older : Sequence[FrameworkTutorial], optional
            Entries rendered in the older tutorials list, in order. Defaults to
            the secondary registry entries. The block is omitted when empty.
        """
        featured = self.site.tutorials.featured if cards is None else tuple(cards)
        secondary = self.site.tutorials.secondary if older is None else tuple(older)
        context = {
            "site": self.site,
            "cards": featured,
            "older": secondary,
            "page_title": self.site.page_title(self.site.home.title),
            "description": self.site.home.description or self.site.tagline,
            "highlight_stylesheet": None,
            "route": HOME_ROUTE,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self, output_dir: Path | None = None) -> Path:
        """Render and write ``index.html``, returning the output path."""
        output_path = (output_dir or self.site.output_dir) / PAGE_FILENAME
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path


__all__ = ["HomePageBuilder"]
