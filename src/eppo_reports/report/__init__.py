"""CSV report rendering and the shared report pipeline."""

from eppo_reports.report.csv_export import (
    STATUS_COLUMNS,
    TEAM_COLUMNS,
    ReportSummary,
    escape_csv_field,
    render_csv,
    summarize_rows,
)
from eppo_reports.report.run import (
    ReportKind,
    ReportRunResult,
    run_report,
    status_report,
    team_report,
)

__all__ = [
    "ReportKind",
    "ReportRunResult",
    "ReportSummary",
    "STATUS_COLUMNS",
    "TEAM_COLUMNS",
    "escape_csv_field",
    "render_csv",
    "run_report",
    "status_report",
    "summarize_rows",
    "team_report",
]
