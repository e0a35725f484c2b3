"""Tests for configuration loading."""

from pathlib import Path

import pytest

from gracekill.core.config import (
    DEFAULT_GRACE_SECONDS,
    EscalationConfig,
    GracekillConfig,
    load_config,
)
from gracekill.errors.exceptions import ConfigError


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config.escalation.grace_seconds == DEFAULT_GRACE_SECONDS == 30
    assert config.escalation.max_workers == 1
    assert config.logging.level == "INFO"


def test_loads_yaml(tmp_path):
    path = _write(tmp_path / "gracekill.yaml", (
        "escalation:\n"
        "  grace_seconds: 12.5\n"
        "  max_workers: 8\n"
        "logging:\n"
        "  level: debug\n"
        "  use_colors: false\n"
    ))
    config = load_config(path)

    assert config.escalation.grace_seconds == 12.5
    assert config.escalation.max_workers == 8
    assert config.logging.level == "DEBUG"
    assert config.logging.use_colors is False


def test_empty_file_gives_defaults(tmp_path):
    config = load_config(_write(tmp_path / "gracekill.yaml", ""))
    assert config.escalation.grace_seconds == DEFAULT_GRACE_SECONDS


def test_env_var_expansion(tmp_path, monkeypatch):
    monkeypatch.setenv("KILL_GRACE", "7")
    path = _write(tmp_path / "gracekill.yaml", "escalation:\n  grace_seconds: ${KILL_GRACE}\n")
    assert load_config(path).escalation.grace_seconds == 7


def test_environment_overrides_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("GRACEKILL_ESCALATION__GRACE_SECONDS", "3")
    config = load_config(tmp_path / "nope.yaml")
    assert config.escalation.grace_seconds == 3


def test_file_values_take_precedence_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("GRACEKILL_ESCALATION__GRACE_SECONDS", "3")
    path = _write(tmp_path / "gracekill.yaml", "escalation:\n  grace_seconds: 9\n")
    assert load_config(path).escalation.grace_seconds == 9


def test_negative_grace_rejected(tmp_path):
    path = _write(tmp_path / "gracekill.yaml", "escalation:\n  grace_seconds: -1\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(path)
    assert "grace_seconds" in str(exc_info.value)


def test_zero_workers_rejected():
    with pytest.raises(ValueError):
        EscalationConfig(max_workers=0)


def test_invalid_yaml(tmp_path):
    path = _write(tmp_path / "gracekill.yaml", "escalation: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_top_level(tmp_path):
    path = _write(tmp_path / "gracekill.yaml", "- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_nan_grace_rejected(tmp_path):
    path = _write(tmp_path / "gracekill.yaml", "escalation:\n  grace_seconds: .nan\n")
    with pytest.raises(ConfigError, match="finite"):
        load_config(path)


def test_unknown_keys_ignored(tmp_path):
    path = _write(tmp_path / "gracekill.yaml", "daemon: true\n")
    assert isinstance(load_config(path), GracekillConfig)
