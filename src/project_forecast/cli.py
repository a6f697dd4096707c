"""CLI for the Project Forecaster.

Provides command-line interface for generating weekly metric baselines,
fitting smoothing models and tuning their parameters.
"""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from strategy_advisor.engine import load_project

from .baseline import BaselineGenerator
from .config import find_config_file, get_config, load_config
from .forecaster import Forecaster
from .insights import generate_insights
from .schema import ForecastParams, ForecastResult, Insight, InsightLevel
from .selector import adaptive_selection

console = Console()

METRICS = ["spend", "velocity", "bugs"]
SCENARIOS = ["optimistic", "realistic", "pessimistic"]
MODELS = ["sma", "ema", "holt"]

LEVEL_STYLES = {
    InsightLevel.SUCCESS: "green",
    InsightLevel.INFO: "cyan",
    InsightLevel.WARNING: "yellow",
}


def configure_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed) if seed is not None else random.Random()


@click.group()
@click.version_option(version="1.0.0", prog_name="project-forecast")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to forecast-config.yaml (default: auto-detected)"
)
def main(config_path: Optional[str]):
    """Project Forecaster for weekly spend, velocity and open bugs.

    Simulates a baseline from project parameters and forecasts it with
    SMA, EMA or Holt's linear trend.
    """
    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


@main.command("run")
@click.option("--project", "-p", required=True, type=click.Path(exists=True), help="Path to project JSON file")
@click.option("--metric", "-m", required=True, type=click.Choice(METRICS), help="Metric to forecast")
@click.option("--scenario", "-s", default="realistic", type=click.Choice(SCENARIOS), help="Outcome scenario")
@click.option("--model", "-M", "model", default="ema", type=click.Choice(MODELS), help="Smoothing model")
@click.option("--k", "k", type=int, help="SMA window")
@click.option("--alpha", type=float, help="Level smoothing factor (EMA, Holt)")
@click.option("--beta", type=float, help="Trend smoothing factor (Holt)")
@click.option("--auto", is_flag=True, help="Select parameters automatically")
@click.option("--horizon", "-H", type=int, help="Weeks to forecast beyond the baseline")
@click.option("--seed", type=int, help="Random seed for a reproducible baseline")
@click.option("--lang", "-l", default="uk", help="Language for insights (en, uk)")
@click.option("--out", "-o", type=click.Path(), help="Output file for JSON results (default: stdout)")
@click.option("--json-output", "-j", is_flag=True, help="Output raw JSON instead of formatted text")
@click.option("--verbose", "-v", is_flag=True, help="Show the full series and debug logging")
def run_cmd(
    project: str,
    metric: str,
    scenario: str,
    model: str,
    k: Optional[int],
    alpha: Optional[float],
    beta: Optional[float],
    auto: bool,
    horizon: Optional[int],
    seed: Optional[int],
    lang: str,
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Run a forecast for a project.

    Without explicit parameters the model parameters are selected
    automatically.

    Examples:
        project-forecast run -p project.json -m spend
        project-forecast run -p project.json -m velocity -M holt --alpha 0.5 --beta 0.3 --seed 42
        project-forecast run -p project.json -m bugs -M sma --k 3 --json-output
    """
    configure_logging(verbose)

    try:
        proj = load_project(project)
        explicit = any(value is not None for value in (k, alpha, beta))
        params = ForecastParams(k=k, alpha=alpha, beta=beta, auto=auto or not explicit)

        result = Forecaster(_rng(seed)).run(proj, metric, scenario, model, params, horizon)
        insights = generate_insights(result, proj, lang)

        if json_output:
            output_json(result, insights, out)
        else:
            display_result(result, insights, verbose)
            if out:
                output_json(result, insights, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("tune")
@click.option("--project", "-p", required=True, type=click.Path(exists=True), help="Path to project JSON file")
@click.option("--metric", "-m", required=True, type=click.Choice(METRICS), help="Metric to simulate")
@click.option("--scenario", "-s", default="realistic", type=click.Choice(SCENARIOS), help="Outcome scenario")
@click.option("--model", "-M", "model", default="ema", type=click.Choice(["ema", "holt"]), help="Smoothing model")
@click.option("--seed", type=int, help="Random seed for a reproducible baseline")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def tune_cmd(project: str, metric: str, scenario: str, model: str, seed: Optional[int], verbose: bool):
    """Select smoothing parameters for a project's baseline.

    Example:
        project-forecast tune -p project.json -m velocity -M holt --seed 7
    """
    configure_logging(verbose)

    try:
        proj = load_project(project)
        baseline = BaselineGenerator(_rng(seed)).generate(proj, metric, scenario)
        selection = adaptive_selection(baseline, model)

        config = get_config().selection
        console.print(Panel(
            f"Model: [bold cyan]{model.upper()}[/bold cyan]\n"
            f"Best Parameters: [bold]{_format_params(selection.best_params)}[/bold]\n"
            f"Validation MAE: {selection.best_mae:.2f} | MAPE: {selection.best_mape:.2f}%\n"
            f"Weeks: {len(baseline)} | Validation Split: {config.validation_split:.0%}",
            title=f"Parameter Selection ({metric}, {scenario})",
        ))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def _format_params(params: ForecastParams) -> str:
    values = params.model_dump(exclude={"auto"}, exclude_none=True)
    return ", ".join(f"{name}={value}" for name, value in values.items()) or "-"


def _format_value(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:,.2f}"


def display_result(result: ForecastResult, insights: list[Insight], verbose: bool):
    """Display forecast result in formatted text."""
    console.print(Panel(
        f"Metric: [bold cyan]{result.metric.value}[/bold cyan] ({result.unit}) | "
        f"Scenario: {result.scenario.value} | Model: {result.model.value.upper()}\n"
        f"Parameters: [bold]{_format_params(result.params)}[/bold]\n"
        f"MAE: {result.mae:.2f} | MAPE: {result.mape:.2f}% | Weeks: {result.weeks}",
        title="Forecast Summary",
    ))

    if verbose:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Week", justify="right")
        table.add_column("Baseline", justify="right")
        table.add_column("Smoothed", justify="right")
        table.add_column("Forecast", justify="right")
        table.add_column("Error", justify="right")

        for week, values in enumerate(
            zip(result.baseline, result.smoothed, result.forecast, result.errors), 1
        ):
            table.add_row(str(week), *(_format_value(v) for v in values))

        console.print(table)

    if result.future_forecasts:
        console.print(f"\n[bold]Next {result.horizon} Weeks:[/bold]")
        for offset, value in enumerate(result.future_forecasts, 1):
            console.print(f"  Week {result.weeks + offset}: {value:,.2f} {result.unit}")

    if insights:
        console.print("\n[bold]Insights:[/bold]")
        for insight in insights:
            style = LEVEL_STYLES.get(insight.level, "white")
            console.print(f"  [{style}]•[/{style}] {insight.title}: [bold]{insight.value}[/bold]")
            console.print(f"    [dim]{insight.description}[/dim]")


def output_json(result: ForecastResult, insights: list[Insight], out_path: Optional[str]):
    """Output result and insights as JSON."""
    payload = result.model_dump(mode="json")
    payload["insights"] = [insight.model_dump(mode="json") for insight in insights]
    json_str = json.dumps(payload, indent=2, ensure_ascii=False)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="forecast-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default forecaster configuration file.

    Example:
        project-forecast init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • multipliers - Scenario, risk, complexity and experience multipliers")
        console.print("  • baseline - Baseline shape and noise")
        console.print("  • selection - Validation split and parameter grids")
        console.print("\nThe forecaster will look for config in this order:")
        console.print("  1. PROJECT_FORECAST_CONFIG environment variable")
        console.print("  2. ./forecast-config.yaml (current directory)")
        console.print("  3. ~/.config/project-forecast/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
