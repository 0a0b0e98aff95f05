"""Resolve and record links found in tutorial Markdown.

Relative links to other Markdown files (``./vue.md``, ``../react.md#setup``)
are rewritten to the route that serves the target page. Links to ``.md`` files
that do not exist are recorded as broken Markdown links. Every other internal
link is recorded so the build can check it against the route table. Relative
route links (``setup``, ``../vue``) resolve against the page route as a
directory and are emitted as that route, so the href a browser follows is the
one that was checked.
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from learntdd_pages._constants import EXTERNAL_SCHEMES

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any


@dc.dataclass(slots=True)
class LinkCollector:
    """Links seen while converting a single Markdown document.

    Attributes
    ----------
    routes : list[str]
        Internal route targets, as they appear after resolution.
    broken_markdown : list[str]
        Original targets of ``.md`` links with no matching page.
    """

    routes: list[str] = dc.field(default_factory=list)
    broken_markdown: list[str] = dc.field(default_factory=list)


class MarkdownLinkExtension(Extension):
    """Rewrite ``.md`` links to routes and record internal targets.

    Parameters
    ----------
    relative_path : str
        POSIX path of the page being rendered, relative to the pages root.
    route : str
        Route serving the page being rendered.
    page_routes : Mapping[str, str]
        Relative Markdown path to route for every known page.
    url_for : Callable[[str], str]
        Function turning a route into the emitted href (applies the base URL).
    collector : LinkCollector
        Receives the links found during conversion.
    """

    def __init__(
        self,
        *,
        relative_path: str,
        route: str,
        page_routes: cabc.Mapping[str, str],
        url_for: cabc.Callable[[str], str],
        collector: LinkCollector,
    ) -> None:
        super().__init__()
        self.relative_path = relative_path
        self.route = route
        self.page_routes = page_routes
        self.url_for = url_for
        self.collector = collector

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link treeprocessor on the Markdown instance."""
        processor = MarkdownLinkTreeprocessor(md, self)
        md.treeprocessors.register(processor, "learntdd_links", 15)


class MarkdownLinkTreeprocessor(Treeprocessor):
    """Resolve anchors in the parsed Markdown tree."""

    def __init__(self, md: Markdown, extension: MarkdownLinkExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> Element:
        """Rewrite ``.md`` anchors and record internal targets."""
        for element in root.iter("a"):
            href = element.get("href")
            rewritten = self._resolve(href)
            if rewritten is not None:
                element.set("href", rewritten)
        return root

    def _resolve(self, target: str | None) -> str | None:
        """Return a replacement href for ``target``, or None to leave it."""
        if not target or target.startswith("#"):
            return None
        if target.lower().startswith(EXTERNAL_SCHEMES) or "://" in target:
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc:
            return None

        collector = self.extension.collector
        if parsed.path.endswith(".md"):
            route = self._resolve_markdown(parsed.path)
            if route is None:
                collector.broken_markdown.append(target)
                return None
        else:
            route = self._resolve_route(parsed.path)
            collector.routes.append(route)
        href = self.extension.url_for(route)
        if parsed.query:
            href = f"{href}?{parsed.query}"
        if parsed.fragment:
            href = f"{href}#{parsed.fragment}"
        return href

    def _resolve_markdown(self, path: str) -> str | None:
        """Map a Markdown file reference to the route of the page it names."""
        if path.startswith("/"):
            joined = posixpath.normpath(path.lstrip("/"))
        else:
            base_dir = posixpath.dirname(self.extension.relative_path)
            joined = posixpath.normpath(posixpath.join(base_dir, path))
        return self.extension.page_routes.get(joined)

    def _resolve_route(self, path: str) -> str:
        """Resolve a route reference against the directory URL of this page."""
        if path.startswith("/"):
            return path
        base = self.extension.route.rstrip("/") + "/"
        return posixpath.normpath(posixpath.join(base, path))


__all__ = ["LinkCollector", "MarkdownLinkExtension", "MarkdownLinkTreeprocessor"]
