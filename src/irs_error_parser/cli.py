"""Command line for the IRS error report."""

import logging
from pathlib import Path
from typing import Optional

import typer

from irs_error_parser.api import ErrorReportPipeline
from irs_error_parser.config import get_app_config

app = typer.Typer(
    name="irs-error-parser",
    help="Match IRS 1094-B/1095-B acknowledgement errors to the names in the submission file.",
    add_completion=False,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@app.command()
def main(
    error_file: Path = typer.Argument(..., help="IRS acknowledgement XML containing error records"),
    name_file: Path = typer.Argument(..., help="Submission XML containing name records"),
    output_file: Path = typer.Argument(..., help="CSV report to write"),
    boundary_policy: Optional[str] = typer.Option(
        None, help="Record boundary policy: last_field or repeat_sentinel"
    ),
    lookup_strategy: Optional[str] = typer.Option(
        None, help="Name lookup strategy: index, sorted or linear"
    ),
    log_level: Optional[str] = typer.Option(None, help="Logging level (default from LOG_LEVEL)"),
):
    """Write one CSV row per IRS error, with the matching first and last name."""
    config = get_app_config()

    try:
        logging.basicConfig(level=(log_level or config.log_level).upper(), format=LOG_FORMAT)
        pipeline = ErrorReportPipeline(
            boundary_policy=boundary_policy,
            lookup_strategy=lookup_strategy,
        )
        stats = pipeline.run(error_file, name_file, output_file)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except UnicodeEncodeError as e:
        typer.echo(f"Error: report text cannot be encoded: {e}", err=True)
        raise typer.Exit(1)
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"Wrote {stats['rows']} rows to {output_file} "
        f"({stats['matched']} matched, {stats['unmatched']} without a name)"
    )
