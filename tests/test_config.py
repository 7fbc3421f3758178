"""Tests for Config and its persistence"""
import io
import json
from unittest.mock import patch

import pytest
from rich.console import Console

from slopcannon.config import Config, load_config, save_config
from slopcannon.exceptions import ValidationError
from slopcannon.ui.config_editor import run_config_editor


class TestConfigValidation:
    """Test dataclass validation."""

    def test_defaults(self):
        config = Config()
        assert config.activation_style == "cannon"
        assert config.remote == "origin"
        assert config.assistant_command == ["claude", "--dangerously-skip-permissions"]
        assert config.github_token is None

    def test_invalid_activation_style(self):
        with pytest.raises(ValidationError) as exc_info:
            Config(activation_style="fireworks")
        assert exc_info.value.field == "activation_style"

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            Config(remote="  ")

    def test_remote_is_stripped(self):
        assert Config(remote=" upstream ").remote == "upstream"

    @pytest.mark.parametrize("command", [[], "claude", ["claude", ""], [1]])
    def test_invalid_assistant_command(self, command):
        with pytest.raises(ValidationError):
            Config(assistant_command=command)

    def test_token_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        assert Config().token == "from-env"
        assert Config(github_token="from-config").token == "from-config"

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"activation_style": "off", "unknown": 1, "debug": True})
        assert config.activation_style == "off"
        assert config.debug is True

    def test_to_dict_only_persisted_fields(self):
        data = Config(verbose=True).to_dict()
        assert set(data) == {"activation_style", "remote", "assistant_command", "github_token"}


class TestConfigFile:
    """Test loading and saving the JSON file."""

    def test_missing_file_gives_defaults(self, temp_dir):
        assert load_config(temp_dir / "missing.json") == Config()

    def test_round_trip(self, temp_dir):
        path = temp_dir / "nested" / "config.json"
        save_config(Config(activation_style="typewriter", remote="upstream"), path)

        assert json.loads(path.read_text())["activation_style"] == "typewriter"
        loaded = load_config(path)
        assert loaded.activation_style == "typewriter"
        assert loaded.remote == "upstream"

    def test_invalid_values_fall_back_per_field(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"activation_style": "bogus", "remote": "upstream"}))

        config = load_config(path)

        assert config.activation_style == "cannon"
        assert config.remote == "upstream"

    def test_corrupt_file_gives_defaults(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")
        assert load_config(path) == Config()

    def test_non_object_gives_defaults(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("[1, 2]")
        assert load_config(path) == Config()


class TestConfigEditor:
    """Test the interactive editor with scripted answers."""

    @pytest.fixture
    def console(self):
        return Console(file=io.StringIO(), width=200)

    @pytest.fixture
    def config_path(self, temp_dir, monkeypatch):
        path = temp_dir / ".slopcannon" / "config.json"
        monkeypatch.setattr("slopcannon.ui.config_editor.save_config",
                            lambda config: save_config(config, path))
        return path

    def test_saves_answers(self, console, config_path):
        config = Config()
        answers = ["typewriter", "upstream", "claude --model opus", "ghp_x"]
        with patch("slopcannon.ui.config_editor.Prompt.ask", side_effect=answers):
            assert run_config_editor(config, console) is True

        saved = json.loads(config_path.read_text())
        assert saved["activation_style"] == "typewriter"
        assert saved["remote"] == "upstream"
        assert saved["assistant_command"] == ["claude", "--model", "opus"]
        assert saved["github_token"] == "ghp_x"
        assert "Config saved to" in console.file.getvalue()

    def test_invalid_answer_is_asked_again(self, console, config_path):
        config = Config(github_token="keep")
        answers = ["off", "  ", "origin", "", "claude", ""]
        with patch("slopcannon.ui.config_editor.Prompt.ask", side_effect=answers):
            assert run_config_editor(config, console) is True

        saved = json.loads(config_path.read_text())
        assert saved["remote"] == "origin"
        assert saved["assistant_command"] == ["claude"]
        assert saved["github_token"] == "keep"
        assert "cannot be empty" in console.file.getvalue()

    def test_dash_clears_token(self, console, config_path):
        config = Config(github_token="old")
        answers = ["cannon", "origin", "claude", "-"]
        with patch("slopcannon.ui.config_editor.Prompt.ask", side_effect=answers):
            run_config_editor(config, console)
        assert json.loads(config_path.read_text())["github_token"] is None

    def test_cancel_saves_nothing(self, console, config_path):
        with patch("slopcannon.ui.config_editor.Prompt.ask", side_effect=KeyboardInterrupt):
            assert run_config_editor(Config(), console) is False
        assert not config_path.exists()
