from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Tuple

from eppo_reports.config import Settings, require_api_key
from eppo_reports.logging_utils import RunContext
from eppo_reports.pipeline.filters import (
    STATUS_PATHS,
    TEAM_ID_PATHS,
    FilterPolicy,
    StatusFilter,
    TeamFilter,
    filter_experiments,
)
from eppo_reports.pipeline.lookup import distinct_values
from eppo_reports.pipeline.normalize import NormalizedRow, normalize_records
from eppo_reports.report.csv_export import (
    STATUS_COLUMNS,
    TEAM_COLUMNS,
    ColumnProjection,
    ReportSummary,
    render_csv_lines,
    summarize_rows,
    write_csv,
)
from eppo_reports.sources.eppo import fetch_experiments

logger = logging.getLogger(__name__)

Fetcher = Callable[..., Any]


@dataclass(frozen=True)
class ReportKind:
    """What distinguishes one report from another.

    Everything else (fetch, normalize, render, write, summarize) is shared.
    """

    name: str
    policy: FilterPolicy
    columns: ColumnProjection
    file_name: Callable[[str], str]
    # Values listed on the console before filtering, to help spot typos in config.
    diagnostic_paths: Tuple[str, ...]
    diagnostic_label: str
    # Phrase completing "experiments found ..." / "Found N experiment(s) ..."
    match_label: str
    total_label: str = "Total experiments"


def team_report(team_id: str) -> ReportKind:
    return ReportKind(
        name="team",
        policy=TeamFilter(team_id=team_id),
        columns=TEAM_COLUMNS,
        file_name=lambda run_date: f"eppo_experiments_team_{team_id}_{run_date}.csv",
        diagnostic_paths=TEAM_ID_PATHS,
        diagnostic_label="Unique team IDs found",
        match_label=f"for team ID {team_id}",
    )


def status_report() -> ReportKind:
    return ReportKind(
        name="ready",
        policy=StatusFilter(),
        columns=STATUS_COLUMNS,
        file_name=lambda run_date: f"eppo_ready_wrap_up_experiments_{run_date}.csv",
        diagnostic_paths=STATUS_PATHS,
        diagnostic_label="Unique statuses found",
        match_label='with "ready" or "wrap up" status',
        total_label="Total experiments (ready/wrap up)",
    )


@dataclass
class ReportRunResult:
    kind: ReportKind
    # None when the payload was not a list
    fetched_count: Optional[int]
    distinct_values: List[Any]
    matched: List[Mapping[str, Any]]
    rows: List[NormalizedRow]
    csv_lines: List[str] = field(default_factory=list)
    output_path: Optional[Path] = None
    written: bool = False
    write_error: Optional[str] = None
    summary: ReportSummary = field(default_factory=lambda: ReportSummary(total=0, unique_owner_emails=0))


def run_report(
    *,
    settings: Settings,
    kind: ReportKind,
    run_ctx: RunContext,
    fetch: Optional[Fetcher] = None,
    output_dir: Optional[Path] = None,
) -> ReportRunResult:
    """Fetch → filter → normalize → write CSV for one report kind.

    Fetch errors propagate. An empty match set writes nothing. A failed write
    is logged and recorded on the result; the summary is still computed from
    the in-memory rows.
    """

    fetcher = fetch or fetch_experiments
    payload = fetcher(
        base_url=settings.eppo.base_url,
        api_key=require_api_key(settings),
        timeout_s=settings.eppo.timeout_s,
    )

    is_list = isinstance(payload, list)
    matched = filter_experiments(payload, kind.policy)
    rows = normalize_records(matched)

    result = ReportRunResult(
        kind=kind,
        fetched_count=len(payload) if is_list else None,
        distinct_values=distinct_values(payload, kind.diagnostic_paths) if is_list else [],
        matched=matched,
        rows=rows,
    )

    if not rows:
        return result

    result.csv_lines = render_csv_lines(rows, kind.columns)
    result.output_path = run_ctx.report_path(output_dir or settings.paths.output_dir, kind.file_name)

    try:
        write_csv(result.output_path, "\n".join(result.csv_lines))
        result.written = True
    except OSError as exc:
        logger.error("Error saving CSV file %s: %s", result.output_path, exc)
        result.write_error = str(exc)

    result.summary = summarize_rows(rows)
    return result
