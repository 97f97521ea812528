from __future__ import annotations

from pathlib import Path

import pytest

_ENV_KEYS = ("EPPO_API_KEY", "EPPO_BASE_URL", "EPPO_TIMEOUT_S", "TEAM_ID")


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in its own directory with no Eppo variables set.

    load_dotenv() writes into os.environ, so each key is registered with
    monkeypatch (setenv, then delenv) to get it removed again on teardown.
    """

    monkeypatch.chdir(tmp_path)
    for key in _ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
