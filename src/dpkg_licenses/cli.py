"""Command-line interface for dpkg_licenses.

Provides the main entry point and subcommands for generating the license
report of installed packages and inspecting the resolver chain.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional, TextIO

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from dpkg_licenses import __version__
from dpkg_licenses.constants import (
    DEFAULT_DOC_ROOT,
    DEFAULT_JOBS,
    DEFAULT_PROBE_TIMEOUT,
    EXIT_ERROR,
    EXIT_SUCCESS,
)
from dpkg_licenses.exceptions import DpkgLicensesError, ScanError
from dpkg_licenses.models import ErrorPolicy, PackageRecord
from dpkg_licenses.reporters import BaseReporter, get_reporter
from dpkg_licenses.resolvers import ResolverChain, build_chain
from dpkg_licenses.scanners import get_scanner

app = typer.Typer(
    name="dpkg-licenses",
    help="Report the licenses of installed Debian packages.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("dpkg_licenses")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("dpkg_licenses").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"dpkg-licenses {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
) -> None:
    """Report the licenses of installed Debian packages."""


async def _stream_report(
    chain: ResolverChain,
    reporter: BaseReporter,
    records: list[PackageRecord],
    out: TextIO,
    policy: ErrorPolicy,
    jobs: int,
    progress: Optional[Progress] = None,
) -> tuple[int, int, int]:
    """Resolve packages and write report rows as they become available.

    Returns:
        Tuple of (resolved, unknown, failed) row counts.

    Raises:
        DpkgLicensesError: In strict mode, the first resolution failure.
    """
    task = None
    if progress is not None:
        task = progress.add_task(
            f"Resolving licenses for {len(records)} packages...", total=len(records)
        )

    for line in reporter.header_lines():
        out.write(f"{line}\n")

    resolved = unknown = failed = 0
    async for record, result in chain.stream(records, policy=policy, jobs=jobs):
        out.write(f"{reporter.format_row(record, result)}\n")
        if result.is_error:
            failed += 1
        elif result.is_unknown:
            unknown += 1
        else:
            resolved += 1
        if progress is not None and task is not None:
            progress.advance(task)

    return resolved, unknown, failed


def _run_report(
    csv_mode: bool,
    status_file: Optional[Path],
    doc_root: Path,
    plugins: list[str],
    policy: ErrorPolicy,
    jobs: int,
    timeout: Optional[float],
    output: Optional[Path],
    verbose: bool,
) -> int:
    """Implementation of the report command."""
    _setup_logging(verbose)

    scanner = get_scanner(status_file)
    if verbose:
        err_console.print(f"[dim]Using package source: {escape(scanner.source_name)}[/dim]")

    try:
        records = scanner.scan()
    except ScanError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_ERROR

    try:
        chain = build_chain(doc_root=doc_root, plugins=plugins, timeout=timeout)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_ERROR

    if verbose:
        order = ", ".join(d.identifier for d in chain.describe())
        err_console.print(f"[dim]Resolver chain: {escape(order)}[/dim]")

    reporter = get_reporter("csv" if csv_mode else "table")
    if output is not None and not output.suffix:
        output = output.with_suffix(reporter.default_extension)
    if verbose:
        err_console.print(f"[dim]Output format: {reporter.format_name}[/dim]")

    out: TextIO
    if output is not None:
        try:
            out = output.open("w", encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]Error writing output:[/red] {escape(str(e))}")
            return EXIT_ERROR
    else:
        out = sys.stdout

    try:
        if output is not None:
            # Progress is only shown when stdout is not the report itself
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=err_console,
                transient=True,
            ) as progress:
                counts = asyncio.run(
                    _stream_report(chain, reporter, records, out, policy, jobs, progress)
                )
        else:
            counts = asyncio.run(
                _stream_report(chain, reporter, records, out, policy, jobs)
            )
    except DpkgLicensesError as e:
        out.flush()
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        err_console.print("[red]Aborted[/red] (use --lenient to skip failing packages)")
        return EXIT_ERROR
    finally:
        if output is not None:
            out.close()

    resolved, unknown, failed = counts
    if verbose or output is not None:
        err_console.print(
            f"Resolved licenses for [bold]{resolved}[/bold]/{len(records)} packages"
            f" ({unknown} unknown, {failed} failed)"
        )
    if output is not None:
        err_console.print(f"[green]Generated:[/green] {escape(str(output))}")

    return EXIT_SUCCESS


@app.command()
def report(
    csv_mode: Annotated[
        bool,
        typer.Option(
            "--csv",
            "-c",
            help="Emit CSV instead of a fixed-width table",
        ),
    ] = False,
    status_file: Annotated[
        Optional[Path],
        typer.Option(
            "--status-file",
            envvar="DPKG_LICENSES_STATUS_FILE",
            help="Read packages from a dpkg status file instead of running dpkg-query",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    doc_root: Annotated[
        Path,
        typer.Option(
            "--doc-root",
            envvar="DPKG_LICENSES_DOC_ROOT",
            help="Directory holding the per-package copyright files",
        ),
    ] = DEFAULT_DOC_ROOT,
    plugins: Annotated[
        Optional[list[str]],
        typer.Option(
            "--plugin",
            "-p",
            help="External license reader command, queried after the built-in "
            "strategies (repeatable, order is priority)",
        ),
    ] = None,
    lenient: Annotated[
        bool,
        typer.Option(
            "--lenient/--strict",
            help="Mark packages whose resolution fails as unknown-error and "
            "continue, instead of aborting the report",
        ),
    ] = False,
    jobs: Annotated[
        int,
        typer.Option(
            "--jobs",
            "-j",
            envvar="DPKG_LICENSES_JOBS",
            min=1,
            help="Number of packages resolved concurrently",
        ),
    ] = DEFAULT_JOBS,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout",
            envvar="DPKG_LICENSES_TIMEOUT",
            help="Per-strategy time limit in seconds (0 disables it)",
        ),
    ] = DEFAULT_PROBE_TIMEOUT,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the report to a file instead of stdout "
            "(.txt or .csv is appended when the name has no extension)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Generate the license report of installed packages.

    Exit codes:
        0 - Report generated
        1 - Scan or resolution failed
    """
    exit_code = _run_report(
        csv_mode=csv_mode,
        status_file=status_file,
        doc_root=doc_root,
        plugins=plugins or [],
        policy=ErrorPolicy.LENIENT if lenient else ErrorPolicy.STRICT,
        jobs=jobs,
        timeout=timeout if timeout > 0 else None,
        output=output,
        verbose=verbose,
    )
    raise typer.Exit(code=exit_code)


@app.command()
def strategies(
    doc_root: Annotated[
        Path,
        typer.Option(
            "--doc-root",
            envvar="DPKG_LICENSES_DOC_ROOT",
            help="Directory holding the per-package copyright files",
        ),
    ] = DEFAULT_DOC_ROOT,
    plugins: Annotated[
        Optional[list[str]],
        typer.Option(
            "--plugin",
            "-p",
            help="External license reader command (repeatable)",
        ),
    ] = None,
) -> None:
    """List the resolver strategies in the order they are queried."""
    try:
        chain = build_chain(doc_root=doc_root, plugins=plugins or [])
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_ERROR)

    for descriptor in chain.describe():
        console.print(f"{descriptor.priority:>3}  {escape(descriptor.identifier)}")


if __name__ == "__main__":
    app()
