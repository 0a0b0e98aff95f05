"""Cyclopts CLI entrypoint for building the Learn TDD site.

The ``learntdd`` console script defined here renders the home page and the
Markdown tutorial pages into a static tree, checks every internal link against
the route table, and lists the routes a build would serve. Every option can
also be supplied through an ``INPUT_*`` environment variable so the commands
run unchanged in CI.

Examples
--------
Build the site with the default configuration:

>>> from learntdd_pages.cli import main
>>> main()  # doctest: +SKIP

Check links for another config without writing anything:

>>> from learntdd_pages.cli import app
>>> app(["check", "--config", "config/site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import LinkPolicy, SiteConfigError, load_site_config
from .generator import PageSourceError
from .logging import configure_logging, get_logger
from .routes import BrokenLinkError
from .site import SiteBuilder

DEFAULT_CONFIG = Path("config/site.yaml")
ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the site.yaml file", env_var="INPUT_CONFIG")
]

app = App(name="learntdd", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

logger = get_logger("cli")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_builder(config: Path) -> SiteBuilder:
    """Load the configuration and pages, exiting with status 1 on defects."""
    try:
        return SiteBuilder(load_site_config(config))
    except (FileNotFoundError, SiteConfigError, PageSourceError) as exc:
        logger.error("%s", exc)  # noqa: TRY400
        sys.exit(1)


@app.command(help="Render the home page and tutorial pages into static HTML.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug output", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Build the whole site.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override the configured output directory.
    verbose : bool, optional
        Emit debug logging for each rendered page.

    Returns
    -------
    None
        Writes rendered artifacts and prints the generated paths. Exits with
        status 1 when the configuration is invalid or a ``throw`` link policy
        finds broken links.
    """
    configure_logging(verbose=verbose)
    builder = _load_builder(config)
    try:
        written = builder.run(output_dir=output_dir)
    except BrokenLinkError as exc:
        logger.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Check navbar, footer, home page, and Markdown links.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Report broken links without writing any output.

    Exits with status 1 when broken links are found under a ``throw`` policy.
    Links found under ``warn`` or ``log`` are reported but do not fail.
    """
    configure_logging()
    builder = _load_builder(config)
    report = builder.check()
    site = builder.site
    failed = False
    for kind, broken, policy in (
        ("link", report.broken_links, site.on_broken_links),
        ("markdown link", report.broken_markdown_links, site.on_broken_markdown_links),
    ):
        for ref in broken:
            print(f"broken {kind}: {ref.target} (referenced from {ref.source})")
        failed = failed or (bool(broken) and policy is LinkPolicy.THROW)
    if failed:
        sys.exit(1)
    if report.ok:
        print("all links resolve")


@app.command(help="List the routes the site serves, in build order.")
def routes(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Print each route with the file that serves it."""
    configure_logging()
    builder = _load_builder(config)
    for entry in builder.build_routes():
        print(f"{entry.route}\t{entry.path}\t{entry.title}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``learntdd`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
