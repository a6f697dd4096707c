"""CLI for the Strategy Advisor.

Provides command-line interface for analyzing a project against a
knowledge base, strategy set and rule set.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import find_config_file, load_config
from .engine import (
    InferenceEngine,
    load_knowledge_projects,
    load_project,
    load_rules,
    load_strategies,
    validate_input,
)
from .schema import AnalysisResult

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version="1.0.0", prog_name="strategy-advisor")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to advisor-config.yaml (default: auto-detected)"
)
def main(config_path: Optional[str]):
    """Strategy Advisor for IT project management.

    Scores delivery strategies for a project using rule-based inference
    and similar historical projects, with outcome scenarios per strategy.
    """
    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


@main.command("analyze")
@click.option(
    "--project", "-p",
    required=True,
    type=click.Path(exists=True),
    help="Path to project JSON file"
)
@click.option(
    "--knowledge", "-k",
    required=True,
    type=click.Path(exists=True),
    help="Path to knowledge-base projects JSON file"
)
@click.option(
    "--strategies", "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to strategies JSON file"
)
@click.option(
    "--rules", "-r",
    required=True,
    type=click.Path(exists=True),
    help="Path to strategy rules JSON file"
)
@click.option(
    "--lang", "-l",
    default=None,
    help="Language for reasoning and labels (en, uk)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results (default: stdout)"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output and debug logging"
)
def analyze_cmd(
    project: str,
    knowledge: str,
    strategies: str,
    rules: str,
    lang: Optional[str],
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Analyze a project and rank candidate strategies.

    Examples:
        strategy-advisor analyze -p project.json -k knowledge.json -s strategies.json -r rules.json
        strategy-advisor analyze -p project.json -k kb.json -s s.json -r r.json --lang en -v
    """
    configure_logging(verbose)

    try:
        engine = InferenceEngine()
        result = engine.run_analysis(
            load_project(project),
            load_knowledge_projects(knowledge),
            load_strategies(strategies),
            load_rules(rules),
            lang,
        )

        if json_output:
            output_json(result, out)
        else:
            display_result(result, verbose)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option("--project", "-p", type=click.Path(), help="Path to project JSON file")
@click.option("--knowledge", "-k", type=click.Path(), help="Path to knowledge-base JSON file")
@click.option("--strategies", "-s", type=click.Path(), help="Path to strategies JSON file")
@click.option("--rules", "-r", type=click.Path(), help="Path to rules JSON file")
def validate_cmd(
    project: Optional[str],
    knowledge: Optional[str],
    strategies: Optional[str],
    rules: Optional[str],
):
    """Validate input files.

    Examples:
        strategy-advisor validate -p project.json
        strategy-advisor validate -s strategies.json -r rules.json
    """
    inputs = [
        ("project", "Project", project),
        ("knowledge", "Knowledge base", knowledge),
        ("strategies", "Strategies", strategies),
        ("rules", "Rules", rules),
    ]
    inputs = [(kind, label, path) for kind, label, path in inputs if path]

    if not inputs:
        console.print("[yellow]Please specify at least one of --project, --knowledge, --strategies, --rules[/yellow]")
        return

    all_valid = True

    for kind, label, path in inputs:
        is_valid, issues = validate_input(path, kind)
        if is_valid:
            console.print(f"[green]✓ {label} valid: {path}[/green]")
        else:
            console.print(f"[red]✗ {label} invalid: {path}[/red]")
            all_valid = False
        for issue in issues:
            console.print(f"  - {issue}")

    sys.exit(0 if all_valid else 1)


def display_result(result: AnalysisResult, verbose: bool):
    """Display analysis result in formatted text."""
    language = result.language
    top = result.strategies[0] if result.strategies else None

    console.print(Panel(
        f"Top Strategy: [bold cyan]{top.strategy.name.get(language) if top else 'None'}[/bold cyan]\n"
        f"Match Score: [bold]{top.match_score if top else 0}%[/bold]\n"
        f"Strategies: {len(result.strategies)} | Similar Projects: {len(result.similar_projects)}",
        title="Analysis Summary",
    ))

    if result.key_factors:
        console.print("\n[bold]Key Decision Factors:[/bold]")
        for factor in result.key_factors:
            console.print(f"  [yellow]•[/yellow] {factor}")

    if result.strategies:
        console.print("\n[bold]Strategies:[/bold]\n")

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Strategy", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Optimistic", justify="right")
        table.add_column("Realistic", justify="right")
        table.add_column("Pessimistic", justify="right")
        table.add_column("Rules", justify="right")
        table.add_column("Cases", justify="right")

        for i, item in enumerate(result.strategies, 1):
            scenarios = item.scenarios
            table.add_row(
                str(i),
                item.strategy.name.get(language)[:40],
                f"{item.match_score}%",
                f"{scenarios.optimistic.success_rate}%",
                f"{scenarios.realistic.success_rate}%",
                f"{scenarios.pessimistic.success_rate}%",
                str(item.matched_rules_count),
                str(item.similar_projects_count),
            )

        console.print(table)

        if verbose:
            for item in result.strategies[:3]:
                console.print(f"\n  [bold cyan]{item.strategy.name.get(language)}[/bold cyan]")
                for reason in item.reasoning:
                    console.print(f"     [green]•[/green] {reason}")
                for kind, scenario in item.scenarios:
                    console.print(
                        f"     [dim]{kind}: budget {scenario.budget_variance:+d}%, "
                        f"time {scenario.time_variance:+d}% - {scenario.description.get(language)}[/dim]"
                    )

    if result.similar_projects:
        console.print("\n[bold]Similar Projects:[/bold]")
        for case in result.similar_projects:
            strategy = f" → {case.strategy_name}" if case.strategy_name else ""
            outcome = f" ({case.outcome})" if case.outcome else ""
            console.print(f"  {case.similarity:>3}%  {case.name or case.id}{outcome}{strategy}")


def output_json(result: AnalysisResult, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="advisor-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default advisor configuration file.

    Example:
        strategy-advisor init-config --out my-config.yaml
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
        console.print("  • similarity - Feature weights and number of similar cases")
        console.print("  • scoring - How rule points and similar cases form the match score")
        console.print("  • key_factors - Thresholds for team size, duration and budget")
        console.print("\nThe advisor will look for config in this order:")
        console.print("  1. STRATEGY_ADVISOR_CONFIG environment variable")
        console.print("  2. ./advisor-config.yaml (current directory)")
        console.print("  3. ~/.config/strategy-advisor/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
