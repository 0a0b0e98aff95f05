"""Markdown conversion with Pygments highlighting for both colour modes.

Tutorial fences use Docusaurus info strings such as
``jsx title="src/App.test.js"``. Python-Markdown only understands the
language, so each info string is reduced to its language before conversion
and the language and title are put back on the highlighted block as
``data-language`` and ``data-title`` attributes.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from learntdd_pages.config import ThemeConfig
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any
    ThemeConfig = typ.Any

FENCE_LINE_PATTERN = re.compile(r"[ ]{0,3}(?P<fence>`{3,}|~{3,})(?P<info>[^`]*)")
LANGUAGE_PATTERN = re.compile(r"[A-Za-z0-9_+#.-]+")
FENCE_TITLE_PATTERN = re.compile(r"""title=(?:"([^"]*)"|'([^']*)'|(\S+))""")
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
THEME_SELECTOR = 'html[data-theme="{mode}"] .codehilite'
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists", "toc")


@dc.dataclass(frozen=True, slots=True)
class CodeFence:
    """Language and optional title taken from a fence info string."""

    language: str = ""
    title: str | None = None

    @property
    def attributes(self) -> str:
        """Return the extra attributes for the highlighted ``div``."""
        attrs = f' data-language="{escape(self.language or "text", quote=True)}"'
        if self.title:
            attrs += f' data-title="{escape(self.title, quote=True)}"'
        return attrs


def parse_info_string(info: str) -> CodeFence:
    """Split a fence info string into its language and ``title`` metadata.

    >>> parse_info_string('jsx title="src/App.test.js"')
    CodeFence(language='jsx', title='src/App.test.js')
    >>> parse_info_string("rust,no_run")
    CodeFence(language='rust', title=None)
    """
    info = info.strip()
    language = LANGUAGE_PATTERN.match(info)
    rest = info[language.end() :] if language else info
    title = FENCE_TITLE_PATTERN.search(rest)
    return CodeFence(
        language=language.group(0) if language else "",
        title=next(filter(None, title.groups()), None) if title else None,
    )


def normalize_fences(text: str) -> tuple[str, list[CodeFence]]:
    """Reduce opening fences to their language and collect each fence's metadata.

    Fence lines are also dedented so fences nested in lists still parse.
    """
    fences: list[CodeFence] = []
    lines: list[str] = []
    open_fence: str | None = None
    for line in text.split("\n"):
        match = FENCE_LINE_PATTERN.fullmatch(line.rstrip("\r"))
        if match is None:
            lines.append(line)
            continue
        fence, info = match.group("fence"), match.group("info")
        if open_fence is None:
            block = parse_info_string(info)
            fences.append(block)
            open_fence = fence
            lines.append(f"{fence}{block.language}")
        elif (
            not info.strip()
            and fence[0] == open_fence[0]
            and len(fence) >= len(open_fence)
        ):
            open_fence = None
            lines.append(fence)
        else:
            lines.append(line)
    return "\n".join(lines), fences


class HtmlContentRenderer:
    """Render tutorial Markdown with light and dark code palettes."""

    def __init__(
        self, theme: ThemeConfig, link_extension: Extension | None = None
    ) -> None:
        """Initialize a renderer for ``theme`` with an optional link extension.

        Parameters
        ----------
        theme : ThemeConfig
            Pair of Pygments styles used for light and dark mode.
        link_extension : Extension, optional
            Markdown extension used to resolve and record links; pass ``None``
            to render links untouched.
        """
        self.theme = theme
        self._formatters = {
            "light": HtmlFormatter(style=theme.light, cssclass="codehilite"),
            "dark": HtmlFormatter(style=theme.dark, cssclass="codehilite"),
        }
        self._link_extension = link_extension

    @property
    def stylesheet(self) -> str:
        """Return the CSS for highlighted code, scoped per colour mode."""
        rules = [
            formatter.get_style_defs(THEME_SELECTOR.format(mode=mode))
            for mode, formatter in self._formatters.items()
        ]
        return "\n".join(rules) + "\n"

    def markdown(self, text: str) -> str:
        """Convert ``text`` to HTML and annotate its highlighted blocks."""
        normalized, fences = normalize_fences(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = list(MARKDOWN_EXTENSIONS)
        if self._link_extension:
            extensions.append(self._link_extension)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                }
            },
        )
        return self._annotate(md.convert(normalized), fences)

    @staticmethod
    def _annotate(html: str, fences: list[CodeFence]) -> str:
        """Copy fence metadata onto the highlighted blocks, in document order."""
        if not fences:
            return html
        remaining = iter(fences)

        def _open_tag(_match: re.Match[str]) -> str:
            fence = next(remaining, CodeFence())
            return f'<div class="codehilite"{fence.attributes}>'

        return CODEHILITE_OPEN_TAG.sub(_open_tag, html, len(fences))


__all__ = ["CodeFence", "HtmlContentRenderer", "normalize_fences", "parse_info_string"]
