"""Render Markdown tutorial pages inside the shared site layout.

:class:`TutorialPageGenerator` converts one :class:`MarkdownPage` to HTML with
:class:`HtmlContentRenderer`, wraps it in ``tutorial_page.jinja`` and returns a
:class:`RenderedPage` holding the markup plus every link the Markdown
referenced. Nothing is written to disk here; the site builder checks the
collected links first and writes afterwards.

Example
-------
>>> from pathlib import Path
>>> from learntdd_pages.config import load_site_config
>>> from learntdd_pages.generator import TutorialPageGenerator, discover_pages
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> pages = discover_pages(site.pages_dir)  # doctest: +SKIP
>>> TutorialPageGenerator(site, pages).render(pages[0]).route  # doctest: +SKIP
'/ember'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from learntdd_pages._constants import HIGHLIGHT_STYLESHEET
from learntdd_pages.generator.link_rewriter import LinkCollector, MarkdownLinkExtension
from learntdd_pages.generator.renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from learntdd_pages.config import SiteConfig
    from learntdd_pages.generator.page_source import MarkdownPage


@dc.dataclass(frozen=True, slots=True)
class RenderedPage:
    """In-memory result of rendering one page.

    Attributes
    ----------
    route : str
        Route the page is served at.
    title : str
        Page title (without the site suffix).
    html : str
        Complete HTML document.
    links : tuple[str, ...]
        Internal route targets referenced from the page body.
    broken_markdown_links : tuple[str, ...]
        ``.md`` targets that matched no page.
    """

    route: str
    title: str
    html: str
    links: tuple[str, ...] = ()
    broken_markdown_links: tuple[str, ...] = ()


class TutorialPageGenerator:
    """Render Markdown pages with the site chrome."""

    def __init__(
        self,
        site: SiteConfig,
        pages: cabc.Sequence[MarkdownPage],
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        site : SiteConfig
            Site configuration injected into the layout.
        pages : Sequence[MarkdownPage]
            Every known page; used to resolve links between Markdown files.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.site = site
        self.page_routes = {page.relative_path: page.route for page in pages}
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("tutorial_page.jinja")
        self.stylesheet = HtmlContentRenderer(site.theme).stylesheet

    def render(self, page: MarkdownPage) -> RenderedPage:
        """Render ``page`` into a full HTML document.

        Returns
        -------
        RenderedPage
            Markup together with the links found in the Markdown body.
        """
        collector = LinkCollector()
        extension = MarkdownLinkExtension(
            relative_path=page.relative_path,
            route=page.route,
            page_routes=self.page_routes,
            url_for=self.site.url_for,
            collector=collector,
        )
        renderer = HtmlContentRenderer(self.site.theme, link_extension=extension)
        content_html = renderer.markdown(page.body)
        context = {
            "site": self.site,
            "page": page,
            "page_title": self.site.page_title(page.title),
            "description": page.description or self.site.tagline,
            "content_html": content_html,
            "highlight_stylesheet": self.site.url_for(f"/{HIGHLIGHT_STYLESHEET}"),
            "route": page.route,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return RenderedPage(
            route=page.route,
            title=page.title,
            html=html,
            links=tuple(collector.routes),
            broken_markdown_links=tuple(collector.broken_markdown),
        )


__all__ = ["RenderedPage", "TutorialPageGenerator"]
