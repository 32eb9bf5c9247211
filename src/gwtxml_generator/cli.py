"""Typer-based CLI for the GWT module generator."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigError, GeneratorSettings, load_settings, parse_args, save_settings
from .generator import GeneratorError
from .pipeline import run_generate, run_scan

app = typer.Typer(help="Aggregate GWT module descriptors found on a search path into one IDE.gwt.xml.")
console = Console()
err_console = Console(stderr=True)

_RULE = " ------------------------------------------------------------------------ "


def _console_sink(message) -> None:
    err_console.print(message, end="", markup=False, highlight=False, soft_wrap=True)


def _configure_logging(level: str, log_file: Path | None) -> None:
    logger.remove()
    logger.add(_console_sink, level=level)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level)


def _load(config_file: Optional[Path], options: Dict[str, Any]) -> GeneratorSettings:
    try:
        return load_settings(options, config_file)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1)


def _banner() -> None:
    console.print(_RULE, markup=False)
    console.print("Searching for GWT")
    console.print(_RULE, markup=False)


ExcludeOption = typer.Option(None, "--excludePackages", "--exclude-packages", help="Package prefix to exclude (repeatable)")
IncludeOption = typer.Option(None, "--includePackages", "--include-packages", help="Package prefix to include (repeatable)")
SearchPathOption = typer.Option(None, "--searchPath", "--search-path", help="Directory or archive to scan (repeatable)")
SuffixOption = typer.Option(None, "--suffix", help="Descriptor suffix, defaults to .gwt.xml")
ConfigOption = typer.Option(None, "--config", help="Path to configuration YAML")
LogLevelOption = typer.Option("INFO", "--log-level", help="Logging level")
LogFileOption = typer.Option(None, "--log-file", help="Also write log messages to this file")


@app.command()
def generate(
    exclude_packages: Optional[List[str]] = ExcludeOption,
    include_packages: Optional[List[str]] = IncludeOption,
    root_dir: Optional[str] = typer.Option(None, "--rootDir", "--root-dir", help="Output root directory"),
    gwt_file_name: Optional[str] = typer.Option(None, "--gwtFileName", "--gwt-file-name", help="Output file relative to the root"),
    entry_point: Optional[str] = typer.Option(None, "--entryPoint", "--entry-point", help="Entry point class"),
    style_sheet: Optional[str] = typer.Option(None, "--styleSheet", "--style-sheet", help="Stylesheet name"),
    logging_enabled: Optional[str] = typer.Option(None, "--loggingEnabled", "--logging-enabled", help="true to enable GWT logging"),
    search_path: Optional[List[str]] = SearchPathOption,
    suffix: Optional[str] = SuffixOption,
    template: Optional[Path] = typer.Option(None, "--template", help="Alternative descriptor template"),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Scan the search path and write the aggregate descriptor."""

    _configure_logging(log_level.upper(), log_file)
    settings = _load(
        config,
        {
            "excludePackages": exclude_packages,
            "includePackages": include_packages,
            "rootDir": root_dir,
            "gwtFileName": gwt_file_name,
            "entryPoint": entry_point,
            "styleSheet": style_sheet,
            "loggingEnabled": logging_enabled,
            "searchPath": search_path,
            "suffix": suffix,
            "template": template,
        },
    )

    _banner()
    try:
        result = run_generate(settings)
    except (GeneratorError, OSError) as exc:
        err_console.print(str(exc), markup=False, soft_wrap=True)
        raise typer.Exit(code=1)

    console.print(f"Found {len(result.modules)} gwt modules")
    console.print(f"[green]Wrote {result.output_path}[/green]", soft_wrap=True)


@app.command()
def scan(
    exclude_packages: Optional[List[str]] = ExcludeOption,
    include_packages: Optional[List[str]] = IncludeOption,
    search_path: Optional[List[str]] = SearchPathOption,
    suffix: Optional[str] = SuffixOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """List the modules that would be aggregated, without writing anything."""

    _configure_logging(log_level.upper(), log_file)
    settings = _load(
        config,
        {
            "excludePackages": exclude_packages,
            "includePackages": include_packages,
            "searchPath": search_path,
            "suffix": suffix,
        },
    )
    modules = run_scan(settings)

    table = Table(title="GWT Modules")
    table.add_column("Module")
    for module in sorted(modules):
        table.add_row(module)
    console.print(table)
    console.print(f"Found {len(modules)} gwt modules")


@app.command("init-config")
def init_config(path: Path = typer.Argument(..., writable=True, resolve_path=True)) -> None:
    """Write a configuration file holding the default settings to PATH."""

    save_settings(GeneratorSettings(), path)
    console.print(f"[green]Wrote configuration to {path}[/green]")


def main(argv: Sequence[str] | None = None) -> int:
    """Run scan and generate from raw ``--key=value`` arguments.

    Uses the camel-case option names, e.g.
    ``--rootDir=target --excludePackages=com.google``.
    """

    argv = sys.argv[1:] if argv is None else argv
    _configure_logging("INFO", None)
    _banner()
    try:
        result = run_generate(load_settings(parse_args(argv)))
    except (ConfigError, GeneratorError, OSError) as exc:
        err_console.print(str(exc), markup=False, soft_wrap=True)
        return 1

    console.print(f"Found {len(result.modules)} gwt modules")
    console.print(f"Wrote {result.output_path}", markup=False, soft_wrap=True)
    return 0


if __name__ == "__main__":
    app()
