from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from eppo_reports.logging_utils import JsonlLogger, RunContext, run_summary_event

RUN_CTX = RunContext(run_id="r1", started_at_utc=datetime(2024, 3, 5, 23, 30, tzinfo=timezone.utc), command="team")


def test_run_context_stamps_report_path_with_utc_date(tmp_path: Path) -> None:
    path = RUN_CTX.report_path(tmp_path, lambda run_date: f"report_{run_date}.csv")

    assert path == tmp_path / "report_2024-03-05.csv"


def test_events_carry_run_id_and_command(tmp_path: Path) -> None:
    logger = JsonlLogger(tmp_path / "logs" / "run.jsonl")
    logger.log(RUN_CTX.event("report_written", rows=3))
    logger.log(run_summary_event(ctx=RUN_CTX, status="ok", total=3))

    events = [json.loads(line) for line in logger.path.read_text(encoding="utf-8").splitlines()]
    assert events[0] == {"event": "report_written", "run_id": "r1", "command": "team", "rows": 3}
    assert events[1]["event"] == "run_summary"
    assert events[1]["status"] == "ok"
    assert events[1]["total"] == 3


def test_logger_disables_itself_when_dir_is_blocked(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "logs").write_text("", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        logger = JsonlLogger(tmp_path / "logs" / "run.jsonl")
        logger.log(RUN_CTX.event("command_start"))

    assert logger.enabled is False
    assert "Run log disabled" in caplog.text
