from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from eppo_reports.config import (
    ConfigError,
    Settings,
    load_settings,
    require_api_key,
    require_team_id,
)
from eppo_reports.logging_utils import (
    JsonlLogger,
    RunContext,
    default_log_path,
    new_run_context,
    run_summary_event,
)
from eppo_reports.report import ReportKind, ReportRunResult, run_report, status_report, team_report
from eppo_reports.sources.eppo import EppoApiError, EppoError

app = typer.Typer(add_completion=False, help="Export Eppo experiments to CSV")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        file_okay=True,
        readable=True,
        help="Path to YAML config (optional)",
    ),
) -> None:
    """Load settings and store them in Typer context."""

    try:
        settings = load_settings(config)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    ctx.obj = {"settings": settings}


@app.command()
def team(
    ctx: typer.Context,
    team_id: Optional[str] = typer.Option(None, "--team-id", help="Team id to filter by (overrides TEAM_ID)"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for the CSV file"),
) -> None:
    """Export the experiments of one team."""

    settings: Settings = ctx.obj["settings"]
    if team_id:
        settings = settings.model_copy(update={"team_id": team_id})

    try:
        require_api_key(settings)
        resolved_team_id = require_team_id(settings)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    _execute(settings, team_report(resolved_team_id), output_dir=output_dir)


@app.command()
def ready(
    ctx: typer.Context,
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for the CSV file"),
) -> None:
    """Export experiments whose status is ready or wrap_up."""

    settings: Settings = ctx.obj["settings"]

    try:
        require_api_key(settings)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    _execute(settings, status_report(), output_dir=output_dir)


def _execute(settings: Settings, kind: ReportKind, *, output_dir: Optional[Path]) -> None:
    run_ctx = new_run_context(kind.name)
    logger = JsonlLogger(default_log_path(settings.paths.logs_dir, now_utc=run_ctx.started_at_utc))

    logger.log(
        run_ctx.event(
            "command_start",
            base_url=settings.eppo.base_url,
            team_id=settings.team_id if kind.name == "team" else None,
        )
    )

    typer.echo("Starting Eppo experiments export...\n")
    typer.echo("Fetching experiments from Eppo API...")

    try:
        result = run_report(settings=settings, kind=kind, run_ctx=run_ctx, output_dir=output_dir)
    except EppoError as exc:
        _report_fetch_failure(exc)
        logger.log(
            run_ctx.event(
                "fetch_failed",
                error_type=type(exc).__name__,
                error_message=str(exc),
                status_code=getattr(exc, "status_code", None),
            )
        )
        logger.log(run_summary_event(ctx=run_ctx, status="error"))
        raise typer.Exit(code=1)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        logger.log(run_summary_event(ctx=run_ctx, status="error", error_message=str(exc)))
        raise typer.Exit(code=1)

    logger.log(
        run_ctx.event(
            "experiments_fetched",
            fetched_count=result.fetched_count,
            matched_count=len(result.matched),
        )
    )

    _print_fetch_overview(result)

    if not result.rows:
        typer.echo(f"\nNo experiments found {kind.match_label}.")
        logger.log(run_ctx.event("no_matches"))
        logger.log(run_summary_event(ctx=run_ctx, status="ok", total=0))
        return

    _print_rows(result)
    _print_written(result, run_ctx=run_ctx, logger=logger)
    _print_summary(result)
    _print_import_instructions(result)

    logger.log(
        run_summary_event(
            ctx=run_ctx,
            status="ok" if result.written else "warn",
            total=result.summary.total,
            unique_owner_emails=result.summary.unique_owner_emails,
        )
    )


def _report_fetch_failure(exc: EppoError) -> None:
    typer.echo("\nError occurred while fetching experiments:", err=True)
    typer.echo(str(exc), err=True)
    if isinstance(exc, EppoApiError):
        typer.echo(f"Response data: {exc.body}", err=True)


def _print_fetch_overview(result: ReportRunResult) -> None:
    fetched = result.fetched_count if result.fetched_count is not None else "Unknown"
    typer.echo(f"Total experiments fetched: {fetched}")

    if result.fetched_count is None:
        return

    typer.echo(f"\n{result.kind.diagnostic_label}:")
    for value in result.distinct_values:
        typer.echo(f"  - {value}")


def _print_rows(result: ReportRunResult) -> None:
    typer.echo(f"\nFound {len(result.rows)} experiment(s) {result.kind.match_label}:\n")
    for line in result.csv_lines[1:]:
        typer.echo(line)


def _print_written(result: ReportRunResult, *, run_ctx: RunContext, logger: JsonlLogger) -> None:
    path = result.output_path
    if result.written and path is not None:
        typer.echo(f"\nCSV file saved: {path.name}")
        typer.echo(f"Full path: {path.resolve()}")
        logger.log(
            run_ctx.event("report_written", path=str(path), rows=len(result.rows))
        )
        return

    typer.echo(f"\nError saving CSV file: {result.write_error}", err=True)
    logger.log(
        run_ctx.event("report_write_failed", path=str(path), error_message=result.write_error)
    )


def _print_summary(result: ReportRunResult) -> None:
    typer.echo("\nSummary:")
    typer.echo(f"   {result.kind.total_label}: {result.summary.total}")
    typer.echo(f"   Unique owner emails: {result.summary.unique_owner_emails}")


def _print_import_instructions(result: ReportRunResult) -> None:
    file_name = result.output_path.name if result.output_path is not None else ""
    typer.echo("\nGoogle Sheets Import Instructions:")
    typer.echo("   1. Open Google Sheets (sheets.google.com)")
    typer.echo("   2. Create a new spreadsheet or open existing one")
    typer.echo("   3. Go to File → Import → Upload")
    typer.echo(f"   4. Upload the file: {file_name}")
    typer.echo('   5. Choose "Comma" as separator')
    typer.echo('   6. Click "Import data"')
    typer.echo("\n   Alternative: Copy the CSV content above and paste into Google Sheets")


if __name__ == "__main__":
    app()
