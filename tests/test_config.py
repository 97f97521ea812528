from __future__ import annotations

from pathlib import Path

import pytest

from eppo_reports.config import (
    DEFAULT_BASE_URL,
    ConfigError,
    load_settings,
    require_api_key,
    require_team_id,
)


def test_config_loads_defaults() -> None:
    settings = load_settings(config_path=None)
    assert settings.eppo.api_key is None
    assert settings.eppo.base_url == DEFAULT_BASE_URL
    assert settings.team_id is None
    assert settings.paths.output_dir == Path(".")


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPPO_API_KEY", "secret")
    monkeypatch.setenv("EPPO_BASE_URL", "https://example.test/api")
    monkeypatch.setenv("TEAM_ID", " 123 ")

    settings = load_settings()
    assert settings.eppo.api_key == "secret"
    assert settings.eppo.base_url == "https://example.test/api"
    assert settings.team_id == "123"


def test_config_blank_env_counts_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPPO_API_KEY", "   ")
    settings = load_settings()
    assert settings.eppo.api_key is None


def test_config_reads_dotenv_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("EPPO_API_KEY=from-dotenv\nTEAM_ID=7\n", encoding="utf-8")

    settings = load_settings()
    assert settings.eppo.api_key == "from-dotenv"
    assert settings.team_id == "7"


def test_config_yaml_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPPO_API_KEY", "secret")
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "team_id: 123\neppo:\n  timeout_s: 5\npaths:\n  output_dir: 'reports'\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path=cfg)
    assert settings.team_id == "123"
    assert settings.eppo.timeout_s == 5.0
    # deep merge keeps values from the environment
    assert settings.eppo.api_key == "secret"
    assert settings.paths.output_dir.name == "reports"


def test_config_invalid_yaml_shape(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(config_path=cfg)


def test_config_invalid_value_raises_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPPO_TIMEOUT_S", "soon")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()


def test_require_api_key_and_team_id() -> None:
    settings = load_settings()

    with pytest.raises(ConfigError, match="EPPO_API_KEY"):
        require_api_key(settings)
    with pytest.raises(ConfigError, match="TEAM_ID"):
        require_team_id(settings)

    settings = settings.model_copy(update={"team_id": "42"})
    assert require_team_id(settings) == "42"


@pytest.mark.parametrize("timeout", ["0", "-5"])
def test_config_rejects_non_positive_timeout(monkeypatch: pytest.MonkeyPatch, timeout: str) -> None:
    monkeypatch.setenv("EPPO_TIMEOUT_S", timeout)

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()
