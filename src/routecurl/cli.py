from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from routecurl.errors import RoutecurlError
from routecurl.orchestrator.pipeline import InspectResult, run_inspect, run_list_routes


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log config discovery and type resolution"),
) -> None:
    """Resolve Spring controller routes to URLs and curl commands."""
    _configure_logging(verbose)


def _source_path(file: str) -> Path:
    path = Path(file).expanduser().resolve()
    if not path.exists():
        raise typer.BadParameter(f"Source file does not exist: {path}")
    if not path.is_file():
        raise typer.BadParameter(f"Source path is not a file: {path}")
    return path


def _inspect(file: str, method: Optional[str], line: Optional[int], root: Optional[List[str]]) -> InspectResult:
    path = _source_path(file)
    extra = [Path(r) for r in (root or [])]
    try:
        result = run_inspect(path, method_name=method, line=line, extra_roots=extra)
    except RoutecurlError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if result.url is None:
        err_console.print(
            f"[yellow]No Spring mapping annotation found[/yellow] on {result.method.name}()"
        )
        raise typer.Exit(code=1)
    return result


@app.command()
def url(
    file: str = typer.Argument(..., help="Controller source file (.java)"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="Method name"),
    line: Optional[int] = typer.Option(None, "--line", "-l", help="Any line inside the method"),
    root: Optional[List[str]] = typer.Option(None, "--root", help="Extra module root (dependency) to search"),
) -> None:
    """Print the full URL a controller method is served at."""
    result = _inspect(file, method, line, root)
    print(result.url)


@app.command()
def curl(
    file: str = typer.Argument(..., help="Controller source file (.java)"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="Method name"),
    line: Optional[int] = typer.Option(None, "--line", "-l", help="Any line inside the method"),
    root: Optional[List[str]] = typer.Option(None, "--root", help="Extra module root (dependency) to search"),
) -> None:
    """Print a curl command that exercises a controller method."""
    result = _inspect(file, method, line, root)
    print(result.command)


@app.command()
def routes(
    file: str = typer.Argument(..., help="Controller source file (.java)"),
    root: Optional[List[str]] = typer.Option(None, "--root", help="Extra module root (dependency) to search"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    """List every mapped method in a controller file."""
    path = _source_path(file)
    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    try:
        rows = run_list_routes(path, extra_roots=[Path(r) for r in (root or [])])
    except RoutecurlError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if fmt == "json":
        payload = [
            {
                "class": r.class_name,
                "method": r.method_name,
                "http_method": r.http_method,
                "url": r.url,
                "line": r.line,
            }
            for r in rows
        ]
        print(json.dumps(payload, indent=2))
        return

    console.print(f"[bold]Routes:[/bold] {len(rows)} in {path.name}")
    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("URL")
    table.add_column("HANDLER")
    table.add_column("LINE", no_wrap=True)

    for r in rows:
        table.add_row(r.http_method, r.url, f"{r.class_name}.{r.method_name}", str(r.line))

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
