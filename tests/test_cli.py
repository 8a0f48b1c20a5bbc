"""Tests for the agent-sizer CLI."""

import json

import pytest
import yaml
from click.testing import CliRunner

from agent_sizer.cli import main as sizer_cli
from agent_sizer.config import save_default_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def scores_file(tmp_path, baseline_scores):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(baseline_scores), encoding="utf-8")
    return path


class TestAssessCommand:
    """Tests for 'agent-sizer assess'."""

    def test_help(self, runner):
        result = runner.invoke(sizer_cli, ["assess", "--help"])
        assert result.exit_code == 0
        assert "Assess a scenario" in result.output

    def test_json_output(self, runner, scores_file):
        result = runner.invoke(sizer_cli, ["assess", "-s", str(scores_file), "-j"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["sizing"]["total_score"] == 12
        assert data["sizing"]["tier"] == "MEDIUM"
        assert data["risk_profile"]["level"] == "HIGH"

    def test_set_overrides_file(self, runner, scores_file):
        result = runner.invoke(sizer_cli, [
            "assess", "-s", str(scores_file), "-a", "dataSensitivity=1", "-j",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["sizing"]["total_score"] == 10

    def test_formatted_output(self, runner, scores_file):
        result = runner.invoke(sizer_cli, ["assess", "-s", str(scores_file), "--no-interactive", "-v"])
        assert result.exit_code == 0, result.output
        assert "Assessment Summary" in result.output
        assert "orchestrator" in result.output
        assert "Config fingerprint" in result.output

    def test_writes_out_file(self, runner, scores_file, tmp_path):
        out = tmp_path / "result.json"
        result = runner.invoke(sizer_cli, [
            "assess", "-s", str(scores_file), "--no-interactive", "-o", str(out),
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["sizing"]["tier"] == "MEDIUM"

    def test_interactive_prompts_for_missing(self, runner):
        answers = "\n".join(["2"] * 7) + "\n"
        result = runner.invoke(sizer_cli, ["assess", "-a", "userReach=2"], input=answers)
        assert result.exit_code == 0, result.output
        assert "Missing Scores" in result.output
        assert "total score 16" in result.output

    def test_invalid_assignment(self, runner):
        result = runner.invoke(sizer_cli, ["assess", "-a", "userReach=9", "-j"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_custom_config(self, runner, scores_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("sizing_thresholds:\n  MEDIUM: 5\n  LARGE: 10\n", encoding="utf-8")
        result = runner.invoke(sizer_cli, ["assess", "-s", str(scores_file), "-c", str(config), "-j"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["sizing"]["tier"] == "LARGE"

    def test_invalid_config(self, runner, scores_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("sizing_thresholds:\n  MEDIUM: 20\n  LARGE: 10\n", encoding="utf-8")
        result = runner.invoke(sizer_cli, ["assess", "-s", str(scores_file), "-c", str(config), "-j"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestSimulateCommand:
    """Tests for 'agent-sizer simulate'."""

    def test_json_comparison(self, runner, scores_file):
        result = runner.invoke(sizer_cli, [
            "simulate", "-s", str(scores_file), "-a", "dataSensitivity=1", "-j",
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tier_before"] == "MEDIUM"
        assert data["tier_after"] == "SMALL"
        assert data["score_deltas"] == {"dataSensitivity": -2}

    def test_saves_simulation(self, runner, scores_file, tmp_path):
        out = tmp_path / "simulation.json"
        result = runner.invoke(sizer_cli, [
            "simulate", "-s", str(scores_file), "-a", "userReach=3", "-o", str(out),
        ])
        assert result.exit_code == 0, result.output
        saved = json.loads(out.read_text(encoding="utf-8"))
        assert saved["is_simulation"] is True
        assert saved["scores"]["userReach"] == 3

    def test_requires_changes(self, runner, scores_file):
        result = runner.invoke(sizer_cli, ["simulate", "-s", str(scores_file)])
        assert result.exit_code != 0


class TestCatalogCommands:
    """Tests for the read-only catalog commands."""

    def test_dimensions(self, runner):
        result = runner.invoke(sizer_cli, ["dimensions"])
        assert result.exit_code == 0
        assert "workflowComplexity" in result.output

    def test_archetypes(self, runner):
        result = runner.invoke(sizer_cli, ["archetypes"])
        assert result.exit_code == 0
        assert "orchestrator" in result.output

    def test_archetypes_by_tier(self, runner):
        result = runner.invoke(sizer_cli, ["archetypes", "--tier", "extended"])
        assert result.exit_code == 0
        assert "memory-context" in result.output
        assert "orchestrator" not in result.output

    def test_rules(self, runner):
        result = runner.invoke(sizer_cli, ["rules"])
        assert result.exit_code == 0
        assert "Risk Rules" in result.output
        assert "content-safety" in result.output


class TestConfigCommands:
    """Tests for 'validate' and 'init-config'."""

    def test_init_config(self, runner, tmp_path):
        out = tmp_path / "sizer-config.yaml"
        result = runner.invoke(sizer_cli, ["init-config", "-o", str(out)])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(out.read_text(encoding="utf-8"))
        assert data["sizing_thresholds"] == {"MEDIUM": 12, "LARGE": 19}

    def test_init_config_refuses_overwrite(self, runner, tmp_path):
        out = tmp_path / "sizer-config.yaml"
        out.write_text("keep me", encoding="utf-8")
        result = runner.invoke(sizer_cli, ["init-config", "-o", str(out)])
        assert result.exit_code == 1
        assert out.read_text(encoding="utf-8") == "keep me"

    def test_init_config_force(self, runner, tmp_path):
        out = tmp_path / "sizer-config.yaml"
        out.write_text("old", encoding="utf-8")
        result = runner.invoke(sizer_cli, ["init-config", "-o", str(out), "--force"])
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") != "old"

    def test_validate_valid(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        save_default_config(path)
        result = runner.invoke(sizer_cli, ["validate", str(path)])
        assert result.exit_code == 0
        assert "Config valid" in result.output

    def test_validate_invalid(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("risk_thresholds:\n  LOW: 3\n  MEDIUM: 2\n  HIGH: 1\n", encoding="utf-8")
        result = runner.invoke(sizer_cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Config invalid" in result.output
