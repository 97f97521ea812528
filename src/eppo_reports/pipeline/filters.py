from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Tuple

from eppo_reports.pipeline.lookup import coerce_int, first_present

logger = logging.getLogger(__name__)

TEAM_ID_PATHS: Tuple[str, ...] = (
    "team_id",
    "teamId",
    "owner_team_id",
    "ownerTeamId",
    "metadata.team_id",
    "metadata.teamId",
)

STATUS_PATHS: Tuple[str, ...] = (
    "status",
    "state",
    "experiment_status",
    "metadata.status",
    "metadata.state",
)

TARGET_STATUSES: Tuple[str, ...] = ("ready", "wrap_up")


class FilterPolicy(Protocol):
    def matches(self, record: Mapping[str, Any]) -> bool:
        ...


@dataclass(frozen=True)
class TeamFilter:
    """Keep experiments owned by one team.

    Both sides go through integer coercion, so "123", 123 and 123.0 are the
    same team. Non-numeric team ids coerce to None and never match.
    """

    team_id: Any

    def resolve(self, record: Mapping[str, Any]) -> Any:
        return first_present(record, TEAM_ID_PATHS)

    def matches(self, record: Mapping[str, Any]) -> bool:
        target = coerce_int(self.team_id)
        if target is None:
            return False
        return coerce_int(self.resolve(record)) == target


@dataclass(frozen=True)
class StatusFilter:
    """Keep experiments whose status, lowercased, is exactly one of `allowed`."""

    allowed: Tuple[str, ...] = TARGET_STATUSES

    def resolve(self, record: Mapping[str, Any]) -> Optional[str]:
        status = first_present(record, STATUS_PATHS)
        if status is None:
            return None
        return str(status)

    def matches(self, record: Mapping[str, Any]) -> bool:
        status = self.resolve(record)
        if not status:
            return False
        return status.lower() in self.allowed


def filter_experiments(experiments: Any, policy: FilterPolicy) -> List[Mapping[str, Any]]:
    """Apply `policy` to the fetched payload.

    A payload that is not a list is logged as a warning and treated as an
    empty collection. Input order is preserved.
    """

    if not isinstance(experiments, list):
        logger.warning("Experiments data is not an array: %s", type(experiments).__name__)
        return []

    return [exp for exp in experiments if isinstance(exp, Mapping) and policy.matches(exp)]
