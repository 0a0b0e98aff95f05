"""Build the complete Learn TDD site.

:class:`SiteBuilder` ties the pieces together for one build pass:

1. discover the Markdown tutorial pages and register every route;
2. render the home page and each tutorial page in memory;
3. check navbar, footer, home page and Markdown links against the route table
   and apply the configured broken-link policies;
4. only then write the HTML files, the code highlighting stylesheet, the
   static assets, and the ``routes.json`` manifest.

A ``throw`` policy failure therefore leaves the output directory untouched.

>>> from pathlib import Path
>>> from learntdd_pages.config import load_site_config
>>> builder = SiteBuilder(load_site_config(Path("config/site.yaml")))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('public/index.html'), PosixPath('public/ember/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import json
import shutil
import typing as typ
from pathlib import Path

from ._constants import HIGHLIGHT_STYLESHEET, HOME_ROUTE, ROUTE_MANIFEST
from .generator import (
    HtmlContentRenderer,
    RenderedPage,
    TutorialPageGenerator,
    discover_pages,
)
from .homepage import HomePageBuilder
from .logging import get_logger
from .routes import (
    LinkReference,
    RouteTable,
    collect_config_links,
    enforce_policy,
    find_broken_links,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .generator import MarkdownPage

logger = get_logger("site")


@dc.dataclass(frozen=True, slots=True)
class LinkReport:
    """Outcome of checking every link in the site."""

    broken_links: tuple[LinkReference, ...] = ()
    broken_markdown_links: tuple[LinkReference, ...] = ()

    @property
    def ok(self) -> bool:
        """True when no broken link of either kind was found."""
        return not (self.broken_links or self.broken_markdown_links)


class SiteBuilder:
    """Render, check, and write the whole site."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        pages: cabc.Sequence[MarkdownPage] | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        site : SiteConfig
            Validated configuration passed to every renderer.
        pages : Sequence[MarkdownPage], optional
            Tutorial pages to render. Defaults to the pages discovered under
            ``site.pages_dir``.
        templates_dir : Path, optional
            Directory containing Jinja templates.
        """
        self.site = site
        self.pages = list(discover_pages(site.pages_dir) if pages is None else pages)
        self.home_builder = HomePageBuilder(site, templates_dir=templates_dir)
        self.page_generator = TutorialPageGenerator(
            site, self.pages, templates_dir=templates_dir
        )

    def build_routes(self) -> RouteTable:
        """Return the route table: the home page first, then each tutorial page."""
        table = RouteTable()
        table.add(HOME_ROUTE, title=self.site.home.title)
        for page in self.pages:
            table.add(page.route, title=page.title)
        return table

    def render(self) -> list[RenderedPage]:
        """Render every page in memory, home page first."""
        rendered = [
            RenderedPage(
                route=HOME_ROUTE,
                title=self.site.home.title,
                html=self.home_builder.render(),
            )
        ]
        for page in self.pages:
            logger.debug("Rendering %s from %s", page.route, page.relative_path)
            rendered.append(self.page_generator.render(page))
        return rendered

    def check(
        self,
        rendered: cabc.Sequence[RenderedPage] | None = None,
        routes: RouteTable | None = None,
    ) -> LinkReport:
        """Collect broken links without applying any policy."""
        if routes is None:
            routes = self.build_routes()
        if rendered is None:
            rendered = self.render()
        references = collect_config_links(self.site)
        markdown_broken: list[LinkReference] = []
        for page in rendered:
            references.extend(
                LinkReference(f"page {page.route}", target) for target in page.links
            )
            markdown_broken.extend(
                LinkReference(f"page {page.route}", target)
                for target in page.broken_markdown_links
            )
        return LinkReport(
            broken_links=tuple(find_broken_links(references, routes)),
            broken_markdown_links=tuple(markdown_broken),
        )

    def run(self, output_dir: Path | None = None) -> list[Path]:
        """Render, check, and write the site, returning the written paths.

        Raises
        ------
        BrokenLinkError
            If broken links exist and the matching policy is ``throw``.
        """
        routes = self.build_routes()
        rendered = self.render()
        report = self.check(rendered, routes)
        enforce_policy(
            report.broken_markdown_links,
            self.site.on_broken_markdown_links,
            kind="markdown link",
        )
        enforce_policy(report.broken_links, self.site.on_broken_links)

        out_dir = output_dir or self.site.output_dir
        written: list[Path] = []
        entries = {entry.route: entry for entry in routes}
        for page in rendered:
            path = out_dir / entries[page.route].path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(page.html, encoding="utf-8")
            written.append(path)

        stylesheet_path = out_dir / HIGHLIGHT_STYLESHEET
        stylesheet_path.parent.mkdir(parents=True, exist_ok=True)
        stylesheet_path.write_text(
            HtmlContentRenderer(self.site.theme).stylesheet, encoding="utf-8"
        )
        written.append(stylesheet_path)

        if self.site.static_dir.is_dir():
            shutil.copytree(self.site.static_dir, out_dir, dirs_exist_ok=True)
            logger.debug("Copied static assets from %s", self.site.static_dir)

        manifest_path = out_dir / ROUTE_MANIFEST
        manifest_path.write_text(
            json.dumps(routes.to_manifest(), indent=2) + "\n", encoding="utf-8"
        )
        written.append(manifest_path)
        logger.info("Built %d routes into %s", len(routes), out_dir)
        return written


__all__ = ["LinkReport", "SiteBuilder"]
