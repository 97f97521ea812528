"""Eppo API access."""

from eppo_reports.sources.eppo import (
    EppoApiError,
    EppoError,
    EppoTransportError,
    fetch_experiments,
)

__all__ = [
    "EppoApiError",
    "EppoError",
    "EppoTransportError",
    "fetch_experiments",
]
