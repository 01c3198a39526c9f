#!filepath: rm_preprocessor/cli.py

from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from rm_preprocessor import __version__, init_logging
from rm_preprocessor.config.app_config import AppConfig
from rm_preprocessor.config.preprocess_config import PreprocessConfig, resolve_config
from rm_preprocessor.pipeline.report import RunReport
from rm_preprocessor.utils.errors import ConfigError

app = typer.Typer(help="RapidMiner .dat -> .csv pre-processor")

EXIT_OK = 0
EXIT_ITEM_ERRORS = 1
EXIT_CONFIG_ERROR = 2


@app.command()
def version():
    print(f"v{__version__}")


def _ask_missing(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Prompt for every option the command line left unset."""
    answers = dict(raw)

    if not answers.get("root_directory"):
        answers["root_directory"] = typer.prompt("Please enter the directory")

    if answers.get("delete_non_csv") is None:
        answers["delete_non_csv"] = typer.confirm("Do you want to delete non .csv files after processing them?")

    if answers.get("move_files") is None:
        answers["move_files"] = typer.confirm("Do you want to move the processed files to a new directory?")

    if answers["move_files"] and not answers.get("output_directory"):
        answers["output_directory"] = typer.prompt("Please enter the output directory")

    return answers


def _print_summary(config: PreprocessConfig) -> None:
    print("\n[bold]Summary of options:[/bold]")
    print(f"Directory: {config.root_directory}")
    print(f"Delete non .csv files: {config.delete_non_csv}")
    print(f"Move files to new directory: {config.move_files}")
    print(f"Output directory: {config.output_directory}")


def collect_config(raw: Dict[str, Any], defaults: Dict[str, Any], assume_yes: bool) -> PreprocessConfig:
    """
    Turn command-line values into a PreprocessConfig.

    With ``assume_yes`` nothing is asked: unset flags mean "no". Otherwise
    missing values are prompted for, the summary is confirmed, and a "no"
    starts option entry over (loop, not recursion).
    """
    if assume_yes:
        return resolve_config(raw, defaults)

    while True:
        config = resolve_config(_ask_missing(raw), defaults)

        _print_summary(config)
        if typer.confirm("Do you want to continue?"):
            return config


def _print_report(report: RunReport) -> None:
    table = Table(title="Run report")
    table.add_column("metric")
    table.add_column("value", justify="right")
    for name, value in report.counts().items():
        table.add_row(name, str(value))
    print(table)

    for err in report.errors:
        print(f"[red]{escape(f'[{err.stage}] {err.path}: {err.error_type}: {err.message}')}[/red]")


@app.command()
def run(
        root: Optional[Path] = typer.Argument(None, help="Directory tree holding the RapidMiner datasets"),
        delete_non_csv: Optional[bool] = typer.Option(
            None, "--delete-non-csv/--keep-non-csv", help="Delete every non .csv file after converting"
        ),
        move: Optional[bool] = typer.Option(
            None, "--move/--no-move", help="Move converted .csv files into --output"
        ),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Flat output directory for --move"),
        workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Worker pool size"),
        processes: bool = typer.Option(False, "--processes", help="Use a process pool instead of threads"),
        config_file: Optional[Path] = typer.Option(None, "--config", help="YAML settings file"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not prompt, unset flags mean no"),
):
    """
    Unzip archives, convert <dir>/<dir>.dat files to csv, clean up the tree.
    """
    from rm_preprocessor.workflows.preprocess_workflow import run_preprocess

    settings = AppConfig.load(str(config_file) if config_file else None)
    init_logging(
        log_dir=settings.log.dir,
        rotation=settings.log.rotation,
        retention=settings.log.retention,
        log_level=settings.log.level,
    )

    raw = {
        "root_directory": str(root) if root else None,
        "delete_non_csv": delete_non_csv,
        "move_files": move,
        "output_directory": str(output) if output else None,
        "max_workers": workers,
        "use_processes": processes or None,
    }

    try:
        config = collect_config(raw, settings.pipeline.model_dump(), assume_yes=yes)
        report = run_preprocess(config, app=settings)
    except ConfigError as e:
        print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR)
    except FileExistsError as e:
        print(f"[red]Aborted: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_ITEM_ERRORS)

    _print_report(report)
    print("[green]Done![/green]" if report.ok else "[yellow]Done with errors[/yellow]")
    raise typer.Exit(EXIT_OK if report.ok else EXIT_ITEM_ERRORS)


if __name__ == "__main__":
    app()

# python -m rm_preprocessor.cli run ./Data --keep-non-csv --no-move -y
