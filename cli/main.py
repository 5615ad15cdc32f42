#!/usr/bin/env python3
"""
CLI for the PAD compiler.

Usage:
    pad transform src/main.rs              # JSON payload on stdout
    pad transform app.js -l javascript     # JavaScript front end
    cat main.rs | pad transform -          # read from stdin
    pad config                             # show effective settings
"""
import json
import re
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.table import Table

# Load .env before importing pad modules (settings are read at import time)
load_dotenv()

from pad_compiler.registry.language_registry import build_default_registry  # noqa: E402

console = Console()
err_console = Console(stderr=True)

LANGUAGES = build_default_registry().names()
SUFFIX_LANGUAGES = {
    ".rs": "rust",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

# Payloads are tag-first, so an error is recognisable without parsing the tree.
ERROR_PAYLOAD = re.compile(r'^\{\s*"type":\s*"error"')


@click.group()
@click.version_option(version="0.1.0", prog_name="pad")
@click.option('--verbose', '-v', is_flag=True, help='Log pipeline stages at DEBUG level')
def cli(verbose: bool):
    """
    PAD compiler - turn function bodies into Problem Analysis Diagram trees.

    \b
    Commands:
      transform      - Compile a source file into the PAD JSON payload
      config         - Show current configuration
    """
    if verbose:
        from shared.logger import set_level
        set_level("DEBUG")


def _guess_language(source: str, explicit: Optional[str]) -> str:
    from shared.config import config as pad_config

    if explicit:
        return explicit
    if source != "-":
        guessed = SUFFIX_LANGUAGES.get(Path(source).suffix.lower())
        if guessed:
            return guessed
    return pad_config.default_language


@cli.command()
@click.argument('source', type=click.Path(allow_dash=True, dir_okay=False), default='-')
@click.option('--language', '-l', type=click.Choice(LANGUAGES), default=None,
              help='Source language (default: from file suffix, then PAD_DEFAULT_LANGUAGE)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True), default=None,
              help='Write the payload to a file instead of stdout')
@click.option('--pretty', is_flag=True, help='Indent the JSON payload')
def transform(source: str, language: Optional[str], output: Optional[str], pretty: bool):
    """
    Compile SOURCE (a file path, or - for stdin) into the PAD JSON payload.

    Exits with status 1 when the payload is an error node.

    \b
    Example:
      pad transform main.rs --pretty
    """
    from pad_compiler import transform as compile_source
    from shared.config import config as pad_config

    with click.open_file(source, 'r', encoding='utf-8') as handle:
        text = handle.read()

    indent = pad_config.json_indent
    if pretty and indent is None:
        indent = 2
    payload = compile_source(text, _guess_language(source, language), indent=indent)

    if output:
        Path(output).write_text(payload + "\n", encoding='utf-8')
        console.print(f"[green]✓[/green] Wrote {output}")
    else:
        click.echo(payload)

    if ERROR_PAYLOAD.match(payload):
        message = json.loads(payload).get("message")
        err_console.print(f"[bold red]❌ Error:[/bold red] {message}", highlight=False)
        sys.exit(1)


@cli.command()
@click.option('--format', '-f', 'fmt', type=click.Choice(['json', 'table']), default='table', help='Output format')
def config(fmt: str):
    """
    Show current configuration.

    Displays configuration values loaded from environment variables and .env file.
    """
    from shared.config import config as pad_config

    items = [
        ("log_level", "PAD_LOG_LEVEL"),
        ("default_language", "PAD_DEFAULT_LANGUAGE"),
        ("json_indent", "PAD_JSON_INDENT"),
    ]

    if fmt == 'json':
        output = {attr: getattr(pad_config, attr, None) for attr, _ in items}
        click.echo(json.dumps(output, indent=2, default=str))
        return

    table = Table(title="PAD Configuration", box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Env Variable", style="dim")
    table.add_column("Value")

    for attr, env_var in items:
        value = getattr(pad_config, attr, None)
        display_value = "[dim]not set[/dim]" if value is None else str(value)
        table.add_row(attr, env_var, display_value)

    console.print(table)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
