"""Route table and link-integrity checks for the generated site.

Every page the build writes is registered in a :class:`RouteTable`. Links from
the navbar, footer, home page and Markdown bodies are gathered as
:class:`LinkReference` values and checked against that table; what happens to
the broken ones is decided by a :class:`~learntdd_pages.config.LinkPolicy`.

Example
-------
>>> from learntdd_pages.routes import RouteTable, normalize_route
>>> table = RouteTable()
>>> table.add("/react", title="React")
'react/index.html'
>>> normalize_route("/react/#setup")
'/react'
>>> "/react" in table
True
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from urllib.parse import urlsplit

from learntdd_pages._constants import EXTERNAL_SCHEMES, HOME_ROUTE, PAGE_FILENAME
from learntdd_pages.config import LinkPolicy, NavDropdownConfig
from learntdd_pages.logging import get_logger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from learntdd_pages.config import FrameworkTutorial, SiteConfig

logger = get_logger("routes")


class BrokenLinkError(RuntimeError):
    """Raised when internal links point at routes the site does not serve."""

    def __init__(
        self, broken: cabc.Sequence[LinkReference], *, kind: str = "link"
    ) -> None:
        self.broken = tuple(broken)
        lines = [f"Found {len(self.broken)} broken {kind}(s):"]
        lines.extend(
            f"  - {ref.target} (referenced from {ref.source})" for ref in self.broken
        )
        super().__init__("\n".join(lines))

    @property
    def targets(self) -> tuple[str, ...]:
        """Missing targets in the order they were found."""
        return tuple(ref.target for ref in self.broken)


@dc.dataclass(frozen=True, slots=True)
class LinkReference:
    """A link target and a human-readable description of where it appears."""

    source: str
    target: str


@dc.dataclass(frozen=True, slots=True)
class RouteEntry:
    """One servable page."""

    route: str
    path: str
    title: str


def is_external(target: str) -> bool:
    """Return True when ``target`` leaves the site (URL, mailto, tel)."""
    lowered = target.lower()
    return lowered.startswith(EXTERNAL_SCHEMES) or bool(urlsplit(target).scheme)


def normalize_route(target: str) -> str:
    """Strip query, fragment, and trailing slash from an internal target."""
    path = urlsplit(target).path or HOME_ROUTE
    if path != HOME_ROUTE:
        path = path.rstrip("/") or HOME_ROUTE
    if path.endswith(f"/{PAGE_FILENAME}"):
        path = path[: -len(PAGE_FILENAME) - 1] or HOME_ROUTE
    return path


def output_path_for(route: str) -> str:
    """Return the output file, relative to the build root, serving ``route``."""
    normalized = normalize_route(route)
    if normalized == HOME_ROUTE:
        return PAGE_FILENAME
    return f"{normalized.strip('/')}/{PAGE_FILENAME}"


class RouteTable:
    """Ordered set of routes the build will serve."""

    def __init__(self) -> None:
        self._entries: dict[str, RouteEntry] = {}

    def add(self, route: str, *, title: str = "") -> str:
        """Register ``route`` and return the output path that serves it.

        Raises
        ------
        ValueError
            If the route is already registered.
        """
        normalized = normalize_route(route)
        if normalized in self._entries:
            msg = f"Route '{normalized}' is already registered."
            raise ValueError(msg)
        path = output_path_for(normalized)
        self._entries[normalized] = RouteEntry(
            route=normalized, path=path, title=title
        )
        return path

    def __contains__(self, target: object) -> bool:
        if not isinstance(target, str):
            return False
        return normalize_route(target) in self._entries

    def __iter__(self) -> cabc.Iterator[RouteEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def routes(self) -> list[str]:
        """Registered routes in registration order."""
        return list(self._entries)

    def to_manifest(self) -> dict[str, list[dict[str, str]]]:
        """Return a JSON-serializable description of the table."""
        return {"routes": [dc.asdict(entry) for entry in self._entries.values()]}


def collect_config_links(
    site: SiteConfig,
    *,
    cards: cabc.Sequence[FrameworkTutorial] | None = None,
    older: cabc.Sequence[FrameworkTutorial] | None = None,
) -> list[LinkReference]:
    """Gather link references from the navbar, footer, and home page lists."""
    references: list[LinkReference] = []
    for item in site.navbar.items:
        match item:
            case NavDropdownConfig(label=dropdown, items=children):
                references.extend(
                    LinkReference(
                        f"navbar dropdown '{dropdown}' > '{child.label}'", child.to
                    )
                    for child in children
                )
            case _:
                references.append(LinkReference(f"navbar '{item.label}'", item.to))
    for section in site.footer.sections:
        references.extend(
            LinkReference(f"footer '{section.title}' > '{link.label}'", link.to)
            for link in section.items
        )
    featured = site.tutorials.featured if cards is None else cards
    secondary = site.tutorials.secondary if older is None else older
    references.extend(
        LinkReference(f"home card '{entry.name}'", entry.href) for entry in featured
    )
    references.extend(
        LinkReference(f"home older tutorials '{entry.name}'", entry.href)
        for entry in secondary
    )
    return references


def find_broken_links(
    references: cabc.Iterable[LinkReference], routes: RouteTable
) -> list[LinkReference]:
    """Return references whose internal target is missing from ``routes``."""
    return [
        ref
        for ref in references
        if not is_external(ref.target) and ref.target not in routes
    ]


def enforce_policy(
    broken: cabc.Sequence[LinkReference], policy: LinkPolicy, *, kind: str = "link"
) -> None:
    """Apply ``policy`` to ``broken`` references.

    ``throw`` raises :class:`BrokenLinkError`; ``warn`` and ``log`` report each
    reference at WARNING and INFO level; ``ignore`` does nothing.
    """
    if not broken or policy is LinkPolicy.IGNORE:
        return
    if policy is LinkPolicy.THROW:
        raise BrokenLinkError(broken, kind=kind)
    level = logging.WARNING if policy is LinkPolicy.WARN else logging.INFO
    for ref in broken:
        logger.log(
            level, "Broken %s %s (referenced from %s)", kind, ref.target, ref.source
        )


__all__ = [
    "BrokenLinkError",
    "LinkReference",
    "RouteEntry",
    "RouteTable",
    "collect_config_links",
    "enforce_policy",
    "find_broken_links",
    "is_external",
    "normalize_route",
    "output_path_for",
]
