from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple

from eppo_reports.pipeline.filters import STATUS_PATHS
from eppo_reports.pipeline.lookup import first_present

EXPERIMENT_URL_BASE = "https://eppo.cloud/experiments"
DEFAULT_EXPERIMENT_NAME = "Unnamed Experiment"

NAME_PATHS: Tuple[str, ...] = ("name", "title")
ID_PATHS: Tuple[str, ...] = ("id", "experiment_id")
OWNER_PATHS: Tuple[str, ...] = ("owner", "created_by", "createdBy", "author")
OWNER_NAME_KEYS: Tuple[str, ...] = ("name", "full_name", "displayName")
OWNER_EMAIL_KEYS: Tuple[str, ...] = ("email", "email_address")


@dataclass(frozen=True)
class OwnerInfo:
    name: str = ""
    email: str = ""


@dataclass(frozen=True)
class NormalizedRow:
    experiment_name: str = DEFAULT_EXPERIMENT_NAME
    experiment_id: str = ""
    status: str = ""
    owner_name: str = ""
    owner_email: str = ""
    experiment_url: str = ""


def experiment_url(experiment_id: str) -> str:
    return f"{EXPERIMENT_URL_BASE}/{experiment_id}" if experiment_id else ""


def resolve_owner(record: Mapping[str, Any]) -> OwnerInfo:
    """Resolve owner name/email from whichever owner field the record carries.

    Owner sources, in order: owner, created_by, createdBy, author.
    - mapping: name from name/full_name/displayName, email from email/email_address
    - string with "@": treated as an email, the local part doubles as the name
    - any other string: the name
    """

    source = first_present(record, OWNER_PATHS)

    if isinstance(source, Mapping):
        return OwnerInfo(
            name=_text(first_present(source, OWNER_NAME_KEYS)),
            email=_text(first_present(source, OWNER_EMAIL_KEYS)),
        )

    if isinstance(source, str):
        if "@" in source:
            return OwnerInfo(name=source.split("@", 1)[0], email=source)
        return OwnerInfo(name=source)

    return OwnerInfo()


def normalize_record(record: Mapping[str, Any]) -> NormalizedRow:
    name = first_present(record, NAME_PATHS)
    experiment_id = _text(first_present(record, ID_PATHS))
    owner = resolve_owner(record)

    return NormalizedRow(
        experiment_name=_text(name) if name is not None else DEFAULT_EXPERIMENT_NAME,
        experiment_id=experiment_id,
        status=_text(first_present(record, STATUS_PATHS)),
        owner_name=owner.name,
        owner_email=owner.email,
        experiment_url=experiment_url(experiment_id),
    )


def normalize_records(records: Iterable[Mapping[str, Any]]) -> List[NormalizedRow]:
    return [normalize_record(r) for r in records]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
