"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from promptforge.cli.main import cli
from conftest import MockLLMProvider, FailingLLMProvider


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def storage(env, tmp_path):
    """Point the library at a temporary directory."""
    env(PF_STORAGE_BACKEND="file", PF_STORAGE_PATH=str(tmp_path), PF_LOG_LEVEL="WARNING")
    return tmp_path


@pytest.fixture
def provider(monkeypatch):
    """Replace provider construction with a mock."""
    mock = MockLLMProvider(default="Model says hi.")
    monkeypatch.setattr("promptforge.providers.get_provider", lambda *args, **kwargs: mock)
    return mock


class TestTemplateCommands:
    """Tests for templates, show, save, delete."""

    def test_templates(self, runner, storage):
        result = runner.invoke(cli, ["templates"])
        assert result.exit_code == 0
        assert "t1" in result.output
        assert "t17" in result.output

    def test_templates_category(self, runner, storage):
        result = runner.invoke(cli, ["templates", "--category", "Education"])
        assert result.exit_code == 0
        assert "t4" in result.output
        assert "t7" not in result.output

    def test_show(self, runner, storage):
        result = runner.invoke(cli, ["show", "t7"])
        assert result.exit_code == 0
        assert "broken_code" in result.output
        assert "error_message" in result.output

    def test_show_unknown(self, runner, storage):
        result = runner.invoke(cli, ["show", "nope"])
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_save_and_delete(self, runner, storage):
        """Test a saved template lands on disk and can be deleted."""
        result = runner.invoke(cli, ["save", "--name", "Greeting"], input="Hello {{name}}")
        assert result.exit_code == 0
        saved = json.loads((storage / "custom_templates.json").read_text(encoding="utf-8"))
        template_id = saved[0]["id"]
        assert template_id.startswith("custom_")
        assert saved[0]["content"] == "Hello {{name}}"

        result = runner.invoke(cli, ["delete", template_id, "--yes"])
        assert result.exit_code == 0
        assert json.loads((storage / "custom_templates.json").read_text(encoding="utf-8")) == []

    def test_save_update(self, runner, storage):
        runner.invoke(cli, ["save", "--name", "Draft"], input="v1")
        template_id = json.loads((storage / "custom_templates.json").read_text(encoding="utf-8"))[0]["id"]

        result = runner.invoke(cli, ["save", "--name", "Draft", "--id", template_id], input="v2")

        assert result.exit_code == 0
        saved = json.loads((storage / "custom_templates.json").read_text(encoding="utf-8"))
        assert [(t["id"], t["content"]) for t in saved] == [(template_id, "v2")]

    def test_save_empty(self, runner, storage):
        result = runner.invoke(cli, ["save", "--name", "Empty"], input="   ")
        assert result.exit_code != 0
        assert "No prompt provided" in result.output

    def test_delete_builtin(self, runner, storage):
        result = runner.invoke(cli, ["delete", "t1", "--yes"])
        assert result.exit_code != 0
        assert "cannot be deleted" in result.output


class TestFillCommand:
    """Tests for fill and variables."""

    def test_fill_template(self, runner, storage):
        result = runner.invoke(cli, ["fill", "t4", "-v", "topic=photosynthesis"])
        assert result.exit_code == 0
        assert "The user wants to learn about: photosynthesis" in result.output

    def test_fill_file_with_output(self, runner, storage, tmp_path):
        source = tmp_path / "prompt.txt"
        source.write_text("Dear {{name}}, due {{ due }}", encoding="utf-8")
        target = tmp_path / "out.txt"

        result = runner.invoke(cli, [
            "fill", "-f", str(source), "-v", "name=Ada", "-v", "due=next Friday", "-o", str(target)
        ])

        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "Dear Ada, due next Friday"

    def test_fill_warns_unfilled(self, runner, storage):
        result = runner.invoke(cli, ["fill", "t7", "-v", "broken_code=print(x)"])
        assert result.exit_code == 0
        assert "unfilled variables: error_message" in result.output

    def test_fill_value_with_equals(self, runner, storage):
        result = runner.invoke(cli, ["fill", "-v", "expr=a=b"], input="Check {{expr}}")
        assert result.exit_code == 0
        assert "Check a=b" in result.output

    def test_fill_bad_assignment(self, runner, storage):
        result = runner.invoke(cli, ["fill", "t4", "-v", "topic"])
        assert result.exit_code == 2
        assert "name=value" in result.output

    def test_variables(self, runner, storage):
        result = runner.invoke(cli, ["variables", "Write a {{tone}} email to {{recipient}} {{tone}}"])
        assert result.exit_code == 0
        assert result.output.count("tone") == 1
        assert "recipient" in result.output


class TestRunCommands:
    """Tests for run and optimize."""

    def test_run(self, runner, storage, provider):
        result = runner.invoke(cli, ["run", "t4", "-v", "topic=tides", "--model", "pro"])
        assert result.exit_code == 0
        assert "Model says hi." in result.output
        call = provider.calls[0]
        assert "learn about: tides" in call["messages"][0]["content"]
        assert call["model"] == "gemini-3-pro-preview"
        assert provider.closed

    def test_run_default_tier_from_settings(self, runner, storage, provider, env):
        env(PF_DEFAULT_TIER="thinking_pro")
        result = runner.invoke(cli, ["run", "t4", "-v", "topic=tides"])
        assert result.exit_code == 0
        assert provider.calls[0]["thinking_budget"] == 4096

    def test_run_invalid_tier(self, runner, storage, provider):
        result = runner.invoke(cli, ["run", "t4", "--model", "ultra"])
        assert result.exit_code == 2

    def test_run_provider_failure(self, runner, storage, monkeypatch):
        monkeypatch.setattr("promptforge.providers.get_provider", lambda *a, **k: FailingLLMProvider())
        result = runner.invoke(cli, ["run", "t4", "-v", "topic=tides"])
        assert result.exit_code != 0
        assert "Ensure API Key is set" in result.output

    def test_run_missing_key(self, runner, storage):
        result = runner.invoke(cli, ["run", "t4"])
        assert result.exit_code != 0
        assert "API key is required" in result.output

    def test_optimize(self, runner, storage, monkeypatch):
        mock = MockLLMProvider(default="```\nYou are a tutor. Teach {{topic}} step by step.\n```")
        monkeypatch.setattr("promptforge.providers.get_provider", lambda *a, **k: mock)

        result = runner.invoke(cli, ["optimize", "t4"])

        assert result.exit_code == 0
        assert "You are a tutor. Teach {{topic}} step by step." in result.output
        assert "```" not in result.output


class TestInfo:
    def test_info(self, runner, storage):
        result = runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "PromptForge" in result.output
        assert "missing" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert "1.0.0" in result.output
