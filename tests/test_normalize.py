from __future__ import annotations

from eppo_reports.pipeline.normalize import (
    DEFAULT_EXPERIMENT_NAME,
    NormalizedRow,
    OwnerInfo,
    normalize_record,
    resolve_owner,
)


def test_owner_object() -> None:
    owner = resolve_owner({"owner": {"name": "Jane Smith", "email": "jane@x.com"}})

    assert owner == OwnerInfo(name="Jane Smith", email="jane@x.com")


def test_owner_object_alternate_keys() -> None:
    owner = resolve_owner({"created_by": {"displayName": "Jane", "email_address": "jane@x.com"}})

    assert owner == OwnerInfo(name="Jane", email="jane@x.com")


def test_owner_email_string() -> None:
    assert resolve_owner({"owner": "bob@x.com"}) == OwnerInfo(name="bob", email="bob@x.com")


def test_owner_plain_string() -> None:
    assert resolve_owner({"author": "Bob"}) == OwnerInfo(name="Bob", email="")


def test_owner_source_order() -> None:
    record = {"owner": None, "created_by": "", "createdBy": "carol@x.com", "author": "Dave"}

    assert resolve_owner(record).email == "carol@x.com"


def test_owner_absent_or_unusable() -> None:
    assert resolve_owner({}) == OwnerInfo()
    assert resolve_owner({"owner": 42}) == OwnerInfo()
    assert resolve_owner({"owner": {}}) == OwnerInfo()


def test_normalize_record_full() -> None:
    row = normalize_record(
        {
            "name": "Checkout button",
            "id": "exp_456",
            "state": "WRAP_UP",
            "owner": {"full_name": "Jane Smith", "email": "jane@x.com"},
        }
    )

    assert row == NormalizedRow(
        experiment_name="Checkout button",
        experiment_id="exp_456",
        status="WRAP_UP",
        owner_name="Jane Smith",
        owner_email="jane@x.com",
        experiment_url="https://eppo.cloud/experiments/exp_456",
    )


def test_normalize_record_defaults() -> None:
    row = normalize_record({})

    assert row.experiment_name == DEFAULT_EXPERIMENT_NAME
    assert row.experiment_id == ""
    assert row.experiment_url == ""
    assert row.status == ""


def test_normalize_record_fallback_fields_and_numeric_id() -> None:
    row = normalize_record({"title": "Pricing", "experiment_id": 789})

    assert row.experiment_name == "Pricing"
    assert row.experiment_id == "789"
    assert row.experiment_url == "https://eppo.cloud/experiments/789"


def test_url_empty_iff_id_empty() -> None:
    for record in ({"id": "a"}, {"id": ""}, {"experiment_id": 0}, {}):
        row = normalize_record(record)
        assert (row.experiment_url == "") == (row.experiment_id == "")
