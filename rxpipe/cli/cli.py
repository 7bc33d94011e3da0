# rxpipe/cli/cli.py
"""
rxpipe CLI - Main application.

Commands:
    rxpipe replace      Substitute matches chunk by chunk
    rxpipe parse        Render every match through a template
    rxpipe delimiters   List built-in delimiters

Use "-" as INPUT or OUTPUT for stdin / stdout.

NOTE: Commands use lazy loading - the pipeline is only imported when a
command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="rxpipe",
    help="rxpipe - chunked regex parse/replace between files and streams.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command("replace")
def replace(
    input: str = typer.Argument(..., help="Input file, or - for stdin."),
    output: str = typer.Argument(..., help="Output file, or - for stdout."),
    pattern: str = typer.Argument(..., help="Regular expression to match."),
    replacement: str = typer.Argument(..., help="Replacement template ($1, $&, $<name>, $$)."),
    global_search: bool = typer.Option(False, "--global", "-g", help="Replace every match in a chunk."),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive matching."),
    line_by_line: bool = typer.Option(False, "--line-by-line", "-l", help="One chunk per line."),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Custom chunk delimiter regex."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logs."),
) -> None:
    """Replace matches in every chunk of INPUT and write to OUTPUT."""
    from rxpipe.cli.commands import replace as mod

    mod.command(
        input=input,
        output=output,
        pattern=pattern,
        replacement=replacement,
        global_search=global_search,
        ignore_case=ignore_case,
        line_by_line=line_by_line,
        delimiter=delimiter,
        config=config,
        verbose=verbose,
    )


@app.command("parse")
def parse(
    input: str = typer.Argument(..., help="Input file, or - for stdin."),
    output: str = typer.Argument(..., help="Output file, or - for stdout."),
    pattern: str = typer.Argument(..., help="Regular expression every chunk must match."),
    template: str = typer.Argument(..., help="Output template per match ($1, $&, $<name>, $$)."),
    global_search: bool = typer.Option(False, "--global", "-g", help="Render every match in a chunk."),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive matching."),
    line_by_line: bool = typer.Option(False, "--line-by-line", "-l", help="One chunk per line."),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Custom chunk delimiter regex."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logs."),
) -> None:
    """Render the matches of every chunk of INPUT into OUTPUT."""
    from rxpipe.cli.commands import parse as mod

    mod.command(
        input=input,
        output=output,
        pattern=pattern,
        template=template,
        global_search=global_search,
        ignore_case=ignore_case,
        line_by_line=line_by_line,
        delimiter=delimiter,
        config=config,
        verbose=verbose,
    )


@app.command("delimiters")
def delimiters() -> None:
    """List built-in delimiters."""
    from rxpipe.core.pattern import Delimiters

    for member in Delimiters:
        typer.echo(f"{member.name}\t{member.value.pattern}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
