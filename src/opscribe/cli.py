from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from opscribe.config import ReaderConfig, import_object
from opscribe.domain.models import Operation
from opscribe.errors import OpscribeError
from opscribe.orchestrator.reader import OperationReader
from opscribe.routing.condition import RouteCondition

app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.command()
def read(
    target: str = typer.Argument(..., help="Handler to read, as module:function"),
    method: str = typer.Option("GET", help="HTTP method the route is matched for"),
    param: Optional[List[str]] = typer.Option(
        None, "--param", help="Route parameter expression (repeatable): id, !debug, mode=full"
    ),
    config: Optional[Path] = typer.Option(None, help="JSON reader config file"),
    signature_names: bool = typer.Option(
        True, "--signature-names/--no-signature-names", help="Use Python parameter names as a name source"
    ),
    format: str = typer.Option("table", help="Output format: table|json"),
    out: Optional[Path] = typer.Option(None, help="Output path (default: print to stdout)"),
    app_dir: Path = typer.Option(Path("."), help="Directory prepended to sys.path before importing TARGET"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    setup_logging(verbose)

    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    try:
        cfg = ReaderConfig.from_file(config) if config else ReaderConfig()
        if not signature_names:
            cfg = cfg.model_copy(update={"use_signature_names": False})
        app_path = str(app_dir.expanduser().resolve())
        if app_path not in sys.path:
            sys.path.insert(0, app_path)
        handler = import_object(target)
        route = RouteCondition.from_expressions(param or [])
        reader = OperationReader(cfg)
        op = reader.read_operation(cfg.documentation_context(), handler, route, method)
    except (OpscribeError, ValueError) as e:
        raise typer.BadParameter(str(e)) from e

    if fmt == "json":
        text = json.dumps(op.to_dict(), indent=2)
        if out:
            out_path = out.expanduser()
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text, encoding="utf-8")
            console.print(f"[bold green]Wrote[/bold green] operation to: {escape(str(out_path))}")
        else:
            console.print(text, markup=False, highlight=False, soft_wrap=True)
        return

    if out:
        out_path = out.expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", encoding="utf-8") as f:
            _print_operation(Console(file=f, width=120, no_color=True), op)
        console.print(f"[bold green]Wrote[/bold green] operation to: {escape(str(out_path))}")
    else:
        _print_operation(console, op)


def _print_operation(target: Console, op: Operation) -> None:
    target.print(f"[bold]{op.http_method}[/bold] {escape(op.nickname)} -> {escape(op.response_class)}")
    if op.summary:
        target.print(escape(op.summary))
    target.print("")

    table = Table(show_header=True, header_style="bold")
    table.add_column("NAME")
    table.add_column("IN", no_wrap=True)
    table.add_column("TYPE")
    table.add_column("REQUIRED", no_wrap=True)
    table.add_column("DEFAULT")
    for p in op.parameters:
        table.add_row(
            escape(p.name),
            p.param_type,
            escape(p.data_type),
            "yes" if p.required else "no",
            escape(p.default_value or ""),
        )
    target.print(table)

    if op.error_responses:
        target.print("")
        target.print("[bold]Errors:[/bold]")
        for e in op.error_responses:
            target.print(f"  {e.code}  {escape(e.reason)}")


@app.command()
def ping() -> None:
    console.print("pong")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
