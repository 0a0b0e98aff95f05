"""Utilities for discovering, rendering, and link-checking tutorial pages."""

from .link_rewriter import LinkCollector, MarkdownLinkExtension
from .page_generator import RenderedPage, TutorialPageGenerator
from .page_source import MarkdownPage, PageSourceError, discover_pages, route_for
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "LinkCollector",
    "MarkdownLinkExtension",
    "MarkdownPage",
    "PageSourceError",
    "RenderedPage",
    "TutorialPageGenerator",
    "discover_pages",
    "route_for",
]
