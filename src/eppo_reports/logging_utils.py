from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunContext:
    """Identity of one report run.

    `command` is the report kind ("team" / "ready"); every JSONL event of the
    run carries it together with `run_id`.
    """

    run_id: str
    started_at_utc: datetime
    command: str = ""

    @property
    def run_date(self) -> str:
        """UTC start date as YYYY-MM-DD, used to stamp report file names."""
        return self.started_at_utc.date().isoformat()

    def report_path(self, output_dir: Path, file_name_for_date: Callable[[str], str]) -> Path:
        return output_dir / file_name_for_date(self.run_date)

    def event(self, name: str, **fields: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"event": name, "run_id": self.run_id, "command": self.command}
        payload.update(fields)
        return payload


def new_run_context(command: str = "") -> RunContext:
    return RunContext(run_id=str(uuid.uuid4()), started_at_utc=datetime.now(timezone.utc), command=command)


def default_log_path(logs_dir: Path, now_utc: Optional[datetime] = None) -> Path:
    ts = now_utc or datetime.now(timezone.utc)
    return logs_dir / f"run-{ts.strftime('%Y%m%d')}.jsonl"


class JsonlLogger:
    """Append-only JSONL run log.

    The run log is secondary to the report itself: when the log directory or
    file cannot be written, a warning is emitted once and the logger turns
    itself off instead of failing the run.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.enabled = True
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._disable(exc)

    def log(self, event: Dict[str, Any]) -> None:
        if not self.enabled:
            return
        line = json.dumps(event, ensure_ascii=False, sort_keys=True, default=str)
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            self._disable(exc)

    def _disable(self, exc: OSError) -> None:
        logger.warning("Run log disabled, cannot write %s: %s", self.path, exc)
        self.enabled = False


def run_summary_event(*, ctx: RunContext, status: str, **extra: Any) -> Dict[str, Any]:
    ended_at_utc = datetime.now(timezone.utc)
    return ctx.event(
        "run_summary",
        started_at=ctx.started_at_utc.isoformat(),
        ended_at=ended_at_utc.isoformat(),
        duration_s=(ended_at_utc - ctx.started_at_utc).total_seconds(),
        status=status,
        **extra,
    )
