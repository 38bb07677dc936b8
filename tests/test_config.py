"""Tests for configuration."""

import pytest

from formflow.core.config import DEFAULTS, Config, config, get_config, reset_config


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        cfg = Config(DEFAULTS)
        assert cfg.get("form.required_message") == "This field is required"
        assert cfg.get("logging.level") == "INFO"

    def test_missing_key_default(self):
        cfg = Config()
        assert cfg.get("form.missing", "fallback") == "fallback"
        assert "form.missing" not in cfg
        with pytest.raises(KeyError):
            cfg["form.missing"]

    def test_runtime_overrides_win(self):
        cfg = Config(DEFAULTS)
        cfg.load_env({"FORMFLOW_LOGGING__LEVEL": "WARNING"})
        cfg.set("logging.level", "DEBUG")

        assert cfg.get("logging.level") == "DEBUG"

    def test_env_overrides_defaults(self):
        cfg = Config(DEFAULTS)
        cfg.load_env({
            "FORMFLOW_FORM__REQUIRED_MESSAGE": "Fill me",
            "FORMFLOW_LOGGING__COLORS": "false",
            "UNRELATED": "ignored",
        })

        assert cfg.get("form.required_message") == "Fill me"
        assert cfg.get("logging.colors") is False
        assert cfg.get("logging.format") == "text"

    def test_env_value_parsing(self):
        cfg = Config()
        cfg.load_env({
            "FORMFLOW_A__NUMBER": "42",
            "FORMFLOW_A__LIST": "[1, 2]",
            "FORMFLOW_A__TEXT": "hello",
        })

        assert cfg.get("a.number") == 42
        assert cfg.get("a.list") == [1, 2]
        assert cfg.get("a.text") == "hello"

    def test_env_keeps_string_settings_as_text(self):
        cfg = Config(DEFAULTS)
        cfg.load_env({
            "FORMFLOW_FORM__REQUIRED_MESSAGE": "42",
            "FORMFLOW_LOGGING__LEVEL": "no",
        })

        assert cfg.get("form.required_message") == "42"
        assert cfg.get("logging.level") == "no"

    def test_get_str(self):
        cfg = Config({"a": {"number": 42, "text": "hi"}})
        assert cfg.get_str("a.number") == "42"
        assert cfg.get_str("a.text") == "hi"
        assert cfg.get_str("a.absent", "fallback") == "fallback"

    def test_defaults_are_not_mutated(self):
        cfg = Config(DEFAULTS)
        cfg.set("form.required_message", "Changed")

        assert DEFAULTS["form"]["required_message"] == "This field is required"
        assert Config(DEFAULTS).get("form.required_message") == "This field is required"

    def test_load_python_file(self, tmp_path):
        path = tmp_path / "formflow_settings.py"
        path.write_text('config = {"form": {"required_message": "From file"}}\n')

        cfg = Config(DEFAULTS)
        cfg.load_file(path)

        assert cfg.get("form.required_message") == "From file"
        assert cfg.get("logging.level") == "INFO"

    def test_load_json_file(self, tmp_path):
        path = tmp_path / "formflow.json"
        path.write_text('{"logging": {"format": "json"}}')

        cfg = Config(DEFAULTS)
        cfg.load_file(path)

        assert cfg.get("logging.format") == "json"

    def test_missing_file_is_ignored(self, tmp_path):
        cfg = Config(DEFAULTS)
        cfg.load_file(tmp_path / "absent.py")
        assert cfg.get("logging.level") == "INFO"

    def test_get_bool(self):
        cfg = Config({"flags": {"on": "yes", "off": "no", "real": True}})
        assert cfg.get_bool("flags.on") is True
        assert cfg.get_bool("flags.off") is False
        assert cfg.get_bool("flags.real") is True
        assert cfg.get_bool("flags.absent") is False

    def test_all_returns_copy(self):
        cfg = Config(DEFAULTS)
        snapshot = cfg.all()
        snapshot["form"]["required_message"] = "Mutated"

        assert cfg.get("form.required_message") == "This field is required"


class TestGlobalConfig:
    """Tests for the process configuration."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FORMFLOW_FORM__REQUIRED_MESSAGE", "From env")
        reset_config()

        assert config("form.required_message") == "From env"

    def test_singleton(self):
        assert get_config() is get_config()
