"""Experiment pipeline (filter → normalize)."""

from eppo_reports.pipeline.filters import (
    StatusFilter,
    TeamFilter,
    filter_experiments,
)
from eppo_reports.pipeline.normalize import (
    NormalizedRow,
    OwnerInfo,
    normalize_record,
    normalize_records,
    resolve_owner,
)

__all__ = [
    "NormalizedRow",
    "OwnerInfo",
    "StatusFilter",
    "TeamFilter",
    "filter_experiments",
    "normalize_record",
    "normalize_records",
    "resolve_owner",
]
