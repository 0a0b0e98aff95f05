r"""Discover Markdown tutorial pages and map them to routes.

Every ``*.md`` file under the pages directory becomes one route: ``react.md``
is served at ``/react`` and ``guides/index.md`` at ``/guides``. Pages may open
with a YAML front matter block providing ``title`` and ``description``.

Example
-------
>>> from learntdd_pages.generator.page_source import route_for
>>> from pathlib import Path
>>> route_for(Path("react-native.md"))
'/react-native'
>>> route_for(Path("guides/index.md"))
'/guides'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from learntdd_pages._constants import HOME_ROUTE

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
TITLE_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)


class PageSourceError(ValueError):
    """Raised when a Markdown page cannot be mapped to a unique route."""


@dc.dataclass(frozen=True, slots=True)
class MarkdownPage:
    """A Markdown source file and the route it is served at.

    Attributes
    ----------
    source : Path
        Path of the Markdown file on disk.
    relative_path : str
        POSIX path of the file relative to the pages directory.
    route : str
        Route serving the rendered page.
    title : str
        Page title from front matter, the first ``#`` heading, or the stem.
    description : str
        Meta description from front matter; empty when absent.
    body : str
        Markdown with the front matter removed.
    """

    source: Path
    relative_path: str
    route: str
    title: str
    description: str
    body: str


def route_for(relative: Path) -> str:
    """Return the route for a Markdown file path relative to the pages root."""
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts.pop()
    return "/" + "/".join(parts) if parts else HOME_ROUTE


def discover_pages(pages_dir: Path) -> list[MarkdownPage]:
    """Load every Markdown page below ``pages_dir`` in path order.

    A missing directory yields no pages.

    Raises
    ------
    PageSourceError
        If two files map to the same route, a file claims the home route, or a
        front matter block is not a mapping.
    """
    if not pages_dir.is_dir():
        return []
    pages: list[MarkdownPage] = []
    seen: dict[str, str] = {}
    for source in sorted(pages_dir.rglob("*.md")):
        relative = source.relative_to(pages_dir)
        route = route_for(relative)
        if route == HOME_ROUTE:
            msg = f"Page '{relative.as_posix()}' would replace the home page route."
            raise PageSourceError(msg)
        if route in seen:
            msg = (
                f"Pages '{seen[route]}' and '{relative.as_posix()}' both map to "
                f"route '{route}'."
            )
            raise PageSourceError(msg)
        seen[route] = relative.as_posix()
        pages.append(load_page(source, relative=relative, route=route))
    return pages


def load_page(source: Path, *, relative: Path, route: str) -> MarkdownPage:
    """Read a single Markdown page and resolve its title and description."""
    text = source.read_text(encoding="utf-8")
    meta, body = split_front_matter(text, origin=relative.as_posix())
    title = _optional_text(meta.get("title")) or _first_heading(body)
    if not title:
        title = relative.with_suffix("").name.replace("-", " ").title()
    return MarkdownPage(
        source=source,
        relative_path=relative.as_posix(),
        route=route,
        title=title,
        description=_optional_text(meta.get("description")) or "",
        body=body,
    )


def split_front_matter(
    text: str, *, origin: str = "<string>"
) -> tuple[dict[str, typ.Any], str]:
    """Split a leading YAML front matter block from Markdown ``text``."""
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    try:
        meta = loader.load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"Front matter in '{origin}' is not valid YAML: {exc}"
        raise PageSourceError(msg) from exc
    if not isinstance(meta, dict):
        msg = f"Front matter in '{origin}' must be a mapping."
        raise PageSourceError(msg)
    return dict(meta), text[match.end() :]


def _first_heading(body: str) -> str | None:
    match = TITLE_PATTERN.search(body)
    if not match:
        return None
    return match.group(1).replace("\\", "").strip() or None


def _optional_text(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "MarkdownPage",
    "PageSourceError",
    "discover_pages",
    "load_page",
    "route_for",
    "split_front_matter",
]
