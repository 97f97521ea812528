from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

from eppo_reports.pipeline.normalize import NormalizedRow

# (CSV header, NormalizedRow attribute)
ColumnProjection = Tuple[Tuple[str, str], ...]

TEAM_COLUMNS: ColumnProjection = (
    ("experiment_name", "experiment_name"),
    ("experiment_id", "experiment_id"),
    ("owner.name", "owner_name"),
    ("owner.email", "owner_email"),
    ("experiment_url", "experiment_url"),
)

STATUS_COLUMNS: ColumnProjection = (
    ("owner", "owner_name"),
    ("owner_email", "owner_email"),
    ("experiment_name", "experiment_name"),
    ("experiment_id", "experiment_id"),
    ("experiment_status", "status"),
    ("experiment_link", "experiment_url"),
)

_NEEDS_QUOTING = (",", '"', "\n")


@dataclass(frozen=True)
class ReportSummary:
    total: int
    unique_owner_emails: int


def escape_csv_field(value: Any) -> str:
    """Quote a field iff it contains a comma, a double quote or a newline.

    Embedded double quotes are doubled. Non-strings are stringified first.
    """

    if value is None:
        text = ""
    elif isinstance(value, str):
        text = value
    else:
        text = str(value)

    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def render_header(columns: ColumnProjection) -> str:
    return ",".join(escape_csv_field(header) for header, _ in columns)


def render_row(row: NormalizedRow, columns: ColumnProjection) -> str:
    return ",".join(escape_csv_field(getattr(row, attr)) for _, attr in columns)


def render_csv_lines(rows: Iterable[NormalizedRow], columns: ColumnProjection) -> List[str]:
    lines = [render_header(columns)]
    lines.extend(render_row(r, columns) for r in rows)
    return lines


def render_csv(rows: Iterable[NormalizedRow], columns: ColumnProjection) -> str:
    """Header plus one line per row, joined by LF without a trailing newline."""
    return "\n".join(render_csv_lines(rows, columns))


def write_csv(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


def summarize_rows(rows: Sequence[NormalizedRow]) -> ReportSummary:
    emails = {r.owner_email for r in rows if r.owner_email}
    return ReportSummary(total=len(rows), unique_owner_emails=len(emails))
