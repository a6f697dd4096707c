"""Tests for the strategy-advisor and project-forecast CLIs."""

import json

from click.testing import CliRunner

from project_forecast.cli import main as forecast_cli
from strategy_advisor.cli import main as advisor_cli


def analyze_args(files) -> list[str]:
    return [
        "analyze",
        "-p", str(files["project"]),
        "-k", str(files["knowledge"]),
        "-s", str(files["strategies"]),
        "-r", str(files["rules"]),
    ]


class TestAdvisorCLI:
    """Tests for the 'strategy-advisor' commands."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "init-config" in result.output

    def test_analyze_json(self, input_files):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, analyze_args(input_files) + ["--json-output", "--lang", "en"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["language"] == "en"
        assert data["strategies"][0]["strategy"]["id"] == "agile"
        assert data["strategies"][0]["match_score"] == 92
        assert data["similar_projects"][0]["strategy_name"] == "Agile Scrum"

    def test_analyze_text(self, input_files):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, analyze_args(input_files) + ["--lang", "en", "-v"])
        assert result.exit_code == 0, result.output
        assert "Analysis Summary" in result.output
        assert "Agile Scrum" in result.output
        assert "Volatile Requirements" in result.output

    def test_analyze_writes_file(self, input_files, tmp_path):
        out = tmp_path / "result.json"
        runner = CliRunner()
        result = runner.invoke(advisor_cli, analyze_args(input_files) + ["--json-output", "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["language"] == "uk"

    def test_analyze_bad_input(self, input_files, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[{}, {}]", encoding="utf-8")
        files = {**input_files, "project": bad}
        runner = CliRunner()
        result = runner.invoke(advisor_cli, analyze_args(files))
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_validate(self, input_files):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, [
            "validate", "-s", str(input_files["strategies"]), "-r", str(input_files["rules"]),
        ])
        assert result.exit_code == 0, result.output
        assert "Strategies valid" in result.output

    def test_validate_invalid(self, tmp_path):
        path = tmp_path / "strategies.json"
        path.write_text(json.dumps([{"id": "a"}, {"id": "a"}]), encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["validate", "-s", str(path)])
        assert result.exit_code == 1
        assert "Duplicate" in result.output

    def test_init_config(self, tmp_path):
        out = tmp_path / "advisor-config.yaml"
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["init-config", "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

        result = runner.invoke(advisor_cli, ["init-config", "--out", str(out)])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(advisor_cli, ["init-config", "--out", str(out), "--force"])
        assert result.exit_code == 0

    def test_explicit_config(self, input_files, tmp_path):
        config = tmp_path / "advisor-config.yaml"
        config.write_text("default_language: en\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["--config", str(config)] + analyze_args(input_files) + ["-j"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["language"] == "en"


class TestForecastCLI:
    """Tests for the 'project-forecast' commands."""

    def test_run_json(self, input_files):
        runner = CliRunner()
        result = runner.invoke(forecast_cli, [
            "run", "-p", str(input_files["project"]), "-m", "bugs", "-M", "sma", "--k", "2",
            "--seed", "42", "--json-output",
        ])
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["params"]["k"] == 2
        assert data["weeks"] == 26
        assert len(data["future_forecasts"]) == 4
        assert len(data["insights"]) == 1

    def test_run_is_reproducible(self, input_files):
        runner = CliRunner()
        args = ["run", "-p", str(input_files["project"]), "-m", "spend", "--seed", "7", "-j"]
        first = json.loads(runner.invoke(forecast_cli, args).stdout)
        second = json.loads(runner.invoke(forecast_cli, args).stdout)
        assert first["baseline"] == second["baseline"]

    def test_run_text(self, input_files):
        runner = CliRunner()
        result = runner.invoke(forecast_cli, [
            "run", "-p", str(input_files["project"]), "-m", "velocity", "-M", "holt",
            "--seed", "1", "--lang", "en", "-v",
        ])
        assert result.exit_code == 0, result.output
        assert "Forecast Summary" in result.output
        assert "Velocity Trend" in result.output

    def test_run_invalid_alpha(self, input_files):
        runner = CliRunner()
        result = runner.invoke(forecast_cli, [
            "run", "-p", str(input_files["project"]), "-m", "spend", "-M", "ema", "--alpha", "2",
        ])
        assert result.exit_code == 1
        assert "alpha" in result.output

    def test_run_unknown_metric(self, input_files):
        runner = CliRunner()
        result = runner.invoke(forecast_cli, ["run", "-p", str(input_files["project"]), "-m", "cost"])
        assert result.exit_code != 0

    def test_tune(self, input_files):
        runner = CliRunner()
        result = runner.invoke(forecast_cli, [
            "tune", "-p", str(input_files["project"]), "-m", "velocity", "-M", "holt", "--seed", "3",
        ])
        assert result.exit_code == 0, result.output
        assert "Parameter Selection" in result.output
        assert "beta=" in result.output

    def test_init_config(self, tmp_path):
        out = tmp_path / "forecast-config.yaml"
        runner = CliRunner()
        result = runner.invoke(forecast_cli, ["init-config", "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert "selection:" in out.read_text(encoding="utf-8")
