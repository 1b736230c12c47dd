"""Tests for session config loading & merging."""

import pytest

from voicevault.config import (
    ConfigurationError,
    SessionConfig,
    SessionConfigLoader,
    _expand_env_vars,
)


class TestSessionConfig:
    def test_defaults(self):
        config = SessionConfig()
        assert (config.min_participants, config.max_participants) == (2, 6)
        assert config.max_needs == 3
        assert config.intensity_scale == 10.0
        assert config.clamp_intensity is False
        assert config.dedupe_needs is False
        assert config.escalation_warning_seconds == 5.0
        assert config.facilitator_name == "Grace"

    def test_from_dict_coerces_types(self):
        config = SessionConfig.from_dict({
            "max_participants": "4",
            "clamp_intensity": "true",
            "escalation_warning_seconds": "2.5",
        })
        assert config.max_participants == 4
        assert config.clamp_intensity is True
        assert config.escalation_warning_seconds == 2.5

    def test_unknown_keys_ignored(self, caplog):
        config = SessionConfig.from_dict({"llm": {"model": "x"}})
        assert config == SessionConfig()
        assert "llm" in caplog.text

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            SessionConfig.from_dict({"max_participants": "many"})

    def test_invalid_bool(self):
        with pytest.raises(ConfigurationError):
            SessionConfig.from_dict({"dedupe_needs": "maybe"})

    @pytest.mark.parametrize("data", [
        {"min_participants": 1},
        {"min_participants": 4, "max_participants": 3},
        {"max_values": -1},
        {"intensity_scale": 0},
        {"escalation_warning_seconds": -1},
    ])
    def test_validate_ranges(self, data):
        with pytest.raises(ConfigurationError):
            SessionConfig.from_dict(data)


class TestSessionConfigLoader:
    def test_no_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert SessionConfigLoader().resolve() == SessionConfig()

    def test_auto_discovers_config_file(self, tmp_path, monkeypatch):
        (tmp_path / "voicevault.yaml").write_text(
            "facilitator_name: Robin\n", encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)
        assert SessionConfigLoader().resolve().facilitator_name == "Robin"

    def test_code_config_overrides_file(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text(
            "max_participants: 4\nfacilitator_name: Robin\n", encoding="utf-8",
        )
        config = SessionConfigLoader(
            config={"max_participants": 3}, config_file=str(path),
        ).resolve()
        assert config.max_participants == 3
        assert config.facilitator_name == "Robin"

    def test_none_values_do_not_override(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text("max_participants: 4\n", encoding="utf-8")
        config = SessionConfigLoader(
            config={"max_participants": None}, config_file=str(path),
        ).resolve()
        assert config.max_participants == 4

    def test_missing_explicit_file_falls_back(self, tmp_path):
        config = SessionConfigLoader(config_file=str(tmp_path / "nope.yaml")).resolve()
        assert config == SessionConfig()

    def test_env_var_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VV_FACILITATOR", "Morgan")
        monkeypatch.delenv("VV_WINDOW", raising=False)
        path = tmp_path / "session.yaml"
        path.write_text(
            "facilitator_name: ${VV_FACILITATOR}\n"
            "escalation_warning_seconds: ${VV_WINDOW:-3}\n",
            encoding="utf-8",
        )
        config = SessionConfigLoader(config_file=str(path)).resolve()
        assert config.facilitator_name == "Morgan"
        assert config.escalation_warning_seconds == 3.0

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SessionConfigLoader(config_file=str(path))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "session.yaml"
        path.write_text("max_participants: [\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SessionConfigLoader(config_file=str(path))


class TestExpandEnvVars:
    def test_nested(self, monkeypatch):
        monkeypatch.setenv("VV_NAME", "Grace")
        data = {"a": ["${VV_NAME}", 1], "b": {"c": "x-${VV_NAME}"}}
        assert _expand_env_vars(data) == {"a": ["Grace", 1], "b": {"c": "x-Grace"}}

    def test_unset_without_default_kept_literal(self, monkeypatch):
        monkeypatch.delenv("VV_UNSET", raising=False)
        assert _expand_env_vars("${VV_UNSET}") == "${VV_UNSET}"
