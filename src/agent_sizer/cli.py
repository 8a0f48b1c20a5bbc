"""CLI for the Agent Sizing Engine.

Provides command-line interface for sizing an agent solution from
dimension scores, running what-if simulations and managing the rules
configuration.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .archetypes import get_archetypes, map_archetype_to_role_type
from .config import (
    CONFIG_ENV_VAR,
    RulesConfig,
    find_config_file,
    get_config,
    load_config,
    validate_config_file,
)
from .dimensions import DIMENSIONS
from .engine import ENGINE_VERSION, SizingEngine
from .scenario import (
    Scenario,
    compare_assessments,
    create_scenario,
    create_simulation,
    load_scenario,
    parse_score_assignments,
    save_scenario,
    with_scores,
)
from .schema import (
    ArchetypeTier,
    AssessmentResult,
    ImpactLevel,
    Necessity,
    RiskLevel,
    Rule,
    TShirtSize,
)

console = Console()

TIER_COLORS = {
    TShirtSize.SMALL: "green",
    TShirtSize.MEDIUM: "yellow",
    TShirtSize.LARGE: "red",
}

RISK_COLORS = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
}

IMPACT_COLORS = {
    ImpactLevel.LOW: "green",
    ImpactLevel.MODERATE: "yellow",
    ImpactLevel.HIGH: "red",
}

NECESSITY_BADGES = {
    Necessity.DEFINITELY_NEEDED: "[bold green]Definitely needed[/bold green]",
    Necessity.RECOMMENDED: "[cyan]Recommended[/cyan]",
    Necessity.OPTIONAL: "[dim]Optional[/dim]",
}


@click.group()
@click.version_option(version=ENGINE_VERSION, prog_name="agent-sizer")
def main():
    """Agent Sizing and Governance Engine.

    Sizes an AI agent solution from eight scored dimensions, rates its
    risk, selects governance controls and recommends agent archetypes.
    """
    pass


def resolve_config(config_path: Optional[str]) -> RulesConfig:
    """Load an explicit config file, else a discovered one, else defaults."""
    if config_path:
        return load_config(Path(config_path))
    found = find_config_file()
    if found:
        return load_config(found)
    return get_config()


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")


def build_scenario(scores_path: Optional[str], assignments: tuple) -> Scenario:
    scenario = load_scenario(scores_path) if scores_path else create_scenario("Assessment")
    if assignments:
        scenario = with_scores(scenario, parse_score_assignments(assignments))
    return scenario


@main.command("assess")
@click.option(
    "--scores", "-s",
    type=click.Path(exists=True),
    help="Path to a scenario or scores JSON file"
)
@click.option(
    "--set", "-a", "assignments",
    multiple=True,
    help="Dimension score (format: dimensionId=value, value 1-3)"
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True),
    help="Path to a rules configuration YAML file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results (default: stdout)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output and debug logging"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--interactive/--no-interactive", "-i/-I",
    default=True,
    help="Prompt for dimensions that have no score (default: interactive)"
)
def assess_cmd(
    scores: Optional[str],
    assignments: tuple,
    config_path: Optional[str],
    out: Optional[str],
    verbose: bool,
    json_output: bool,
    interactive: bool,
):
    """Assess a scenario: size, risk, governance and recommendations.

    Examples:
        agent-sizer assess -s scenario.json
        agent-sizer assess -a workflowComplexity=3 -a dataSensitivity=3 --no-interactive
        agent-sizer assess -s scenario.json -c sizer-config.yaml -j
    """
    configure_logging(verbose)

    try:
        config = resolve_config(config_path)
        scenario = build_scenario(scores, assignments)

        if interactive and scenario.missing_dimensions and not json_output:
            scenario = prompt_for_scores(scenario)

        engine = SizingEngine(config)
        result = engine.assess(scenario.scores)

        if json_output:
            output_json(result, out)
        else:
            display_result(scenario, result, verbose)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("simulate")
@click.option(
    "--scores", "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to the baseline scenario or scores JSON file"
)
@click.option(
    "--set", "-a", "assignments",
    multiple=True,
    required=True,
    help="What-if score change (format: dimensionId=value)"
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True),
    help="Path to a rules configuration YAML file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Save the simulated scenario to this JSON file"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output the comparison as JSON"
)
def simulate_cmd(
    scores: str,
    assignments: tuple,
    config_path: Optional[str],
    out: Optional[str],
    json_output: bool,
):
    """Compare a baseline scenario with a what-if variant.

    Example:
        agent-sizer simulate -s scenario.json -a dataSensitivity=1 -a userReach=2
    """
    try:
        config = resolve_config(config_path)
        baseline = load_scenario(scores)
        simulation = with_scores(create_simulation(baseline), parse_score_assignments(assignments))

        engine = SizingEngine(config)
        comparison = compare_assessments(engine.assess(baseline.scores), engine.assess(simulation.scores))

        if out:
            save_scenario(simulation, out)

        if json_output:
            print(comparison.model_dump_json(indent=2))
            return

        console.print(f"\n[bold blue]What-if: {simulation.name}[/bold blue]\n")

        table = Table(show_header=True, header_style="bold")
        table.add_column("")
        table.add_column("Baseline")
        table.add_column("Simulation")
        table.add_row("Tier", comparison.tier_before.value, comparison.tier_after.value)
        table.add_row("Risk", comparison.risk_before.value, comparison.risk_after.value)
        console.print(table)

        if comparison.score_deltas:
            console.print("\n[bold]Score Changes:[/bold]")
            for dimension_id, delta in comparison.score_deltas.items():
                color = "red" if delta > 0 else "green"
                console.print(f"  • {dimension_id}: [{color}]{delta:+d}[/{color}]")
            console.print(f"  Total: {comparison.total_score_delta:+d}")

        for archetype_id in comparison.archetypes_added:
            console.print(f"  [green]+[/green] {archetype_id}")
        for archetype_id in comparison.archetypes_removed:
            console.print(f"  [red]-[/red] {archetype_id}")
        for change in comparison.necessity_changes:
            console.print(f"  [yellow]~[/yellow] {change.archetype_id}: {change.before.value} → {change.after.value}")

        if not comparison.has_changes:
            console.print("[dim]No differences from the baseline.[/dim]")

        if out:
            console.print(f"\n[green]Simulation saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("dimensions")
def dimensions_cmd():
    """List the scoring dimensions and their options."""
    for dimension in DIMENSIONS:
        tree = Tree(f"[bold cyan]{dimension.label}[/bold cyan] [dim]({dimension.id.value})[/dim]")
        for score, option in sorted(dimension.options.items()):
            tree.add(f"[bold]{score}[/bold]. {option.title} - {option.description}")
        console.print(tree)
        console.print()


@main.command("archetypes")
@click.option(
    "--tier", "-t",
    type=click.Choice([t.value for t in ArchetypeTier]),
    help="Filter by archetype tier"
)
def archetypes_cmd(tier: Optional[str]):
    """List the agent archetype catalog."""
    archetypes = get_archetypes(get_config().risk_thresholds)
    if tier:
        archetypes = [a for a in archetypes if a.tier.value == tier]

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Tier")
    table.add_column("Role Type")
    table.add_column("Typical Trigger")

    for archetype in archetypes:
        table.add_row(
            archetype.id,
            archetype.name,
            archetype.tier.value,
            map_archetype_to_role_type(archetype.id).value,
            archetype.trigger_condition or "",
        )

    console.print(table)


def describe_conditions(rule: Rule) -> str:
    if not rule.conditions:
        return "[dim]always[/dim]"
    return " AND ".join(condition.describe() for condition in rule.conditions)


@main.command("rules")
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True),
    help="Path to a rules configuration YAML file"
)
def rules_cmd(config_path: Optional[str]):
    """Show the thresholds and rules currently in effect."""
    try:
        config = resolve_config(config_path)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    sizing = config.sizing_thresholds
    risk = config.risk_thresholds
    console.print(Panel(
        f"Sizing: MEDIUM >= {sizing.MEDIUM}, LARGE >= {sizing.LARGE}\n"
        f"Risk thresholds: LOW={risk.LOW}, MEDIUM={risk.MEDIUM}, HIGH={risk.HIGH}\n"
        f"Fingerprint: {config.fingerprint()}",
        title="Rules Configuration",
    ))

    table = Table(title="Risk Rules", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("When")
    table.add_column("Level")
    table.add_column("Reason")
    for rule in config.risk_rules:
        table.add_row(rule.id, describe_conditions(rule), rule.level.value, rule.reason)
    console.print(table)

    table = Table(title="Governance Rules", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("When")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Priority")
    for rule in config.governance_rules:
        table.add_row(rule.id, describe_conditions(rule), rule.title, rule.category, rule.priority.value)
    console.print(table)

    table = Table(title="Archetype Triggers", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("When")
    table.add_column("Archetype")
    table.add_column("Necessity")
    for rule in config.archetype_triggers:
        table.add_row(rule.id, describe_conditions(rule), rule.archetype_id, rule.necessity.value)
    console.print(table)


@main.command("validate")
@click.argument("config_file", type=click.Path())
def validate_cmd(config_file: str):
    """Validate a rules configuration file.

    Example:
        agent-sizer validate sizer-config.yaml
    """
    is_valid, issues = validate_config_file(Path(config_file))
    if is_valid:
        console.print(f"[green]✓ Config valid: {config_file}[/green]")
    else:
        console.print(f"[red]✗ Config invalid: {config_file}[/red]")
        for issue in issues:
            console.print(f"  - {issue}")

    sys.exit(0 if is_valid else 1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="sizer-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default rules configuration file.

    Example:
        agent-sizer init-config --out my-config.yaml
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
        console.print("  • sizing_thresholds - Total scores where MEDIUM and LARGE begin")
        console.print("  • risk_thresholds - Scores meant by LOW/MEDIUM/HIGH in rule conditions")
        console.print("  • risk_rules, governance_rules, archetype_triggers - The rule tables")
        console.print("  • test_plan_templates - Test cases per recommended archetype")
        console.print("\nThe engine will look for config in this order:")
        console.print(f"  1. {CONFIG_ENV_VAR} environment variable")
        console.print("  2. ./sizer-config.yaml (current directory)")
        console.print("  3. ~/.config/agent-sizer/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def prompt_for_scores(scenario: Scenario) -> Scenario:
    """Interactively prompt for every dimension the scenario has not scored."""
    answers = {}

    console.print("\n[bold yellow]━━━ Missing Scores ━━━[/bold yellow]")
    console.print("[dim]Pick the option that best describes the solution.[/dim]\n")

    for dimension in DIMENSIONS:
        if dimension.id.value not in scenario.missing_dimensions:
            continue

        console.print(f"[bold cyan]{dimension.label}[/bold cyan]")
        console.print(f"   [dim]{dimension.description}[/dim]\n")
        for score, option in sorted(dimension.options.items()):
            console.print(f"     [bold]{score}[/bold]. {option.title} - {option.description}")
        console.print()

        try:
            answers[dimension.id.value] = click.prompt(
                "   Select [1-3]",
                type=click.IntRange(1, 3),
                default=1,
            )
        except click.Abort:
            console.print("\n[yellow]Skipping remaining dimensions...[/yellow]")
            break

    console.print("[bold yellow]━━━━━━━━━━━━━━━━━━━━━━[/bold yellow]\n")
    return with_scores(scenario, answers)


def display_result(scenario: Scenario, result: AssessmentResult, verbose: bool):
    """Display an assessment in formatted text."""
    sizing = result.sizing
    risk = result.risk_profile
    governance = result.governance

    tier_color = TIER_COLORS[sizing.tier]
    risk_color = RISK_COLORS[risk.level]
    impact_color = IMPACT_COLORS[governance.impact_level]

    console.print(Panel(
        f"[bold]{scenario.name}[/bold]\n\n"
        f"Size: [{tier_color}]{sizing.tier.value}[/{tier_color}] (total score {sizing.total_score})\n"
        f"Risk: [{risk_color}]{risk.level.value}[/{risk_color}]\n"
        f"Impact: [{impact_color}]{governance.impact_level.value}[/{impact_color}]",
        title="Assessment Summary",
    ))

    if scenario.missing_dimensions:
        console.print(
            f"\n[yellow]⚠ {len(scenario.missing_dimensions)} dimensions not scored (counted as 0)[/yellow]"
        )

    if risk.reasons:
        console.print("\n[bold]Risk Factors:[/bold]")
        for reason in risk.reasons:
            console.print(f"  [yellow]•[/yellow] {reason}")

    console.print("\n[bold]Recommended Patterns:[/bold]")
    for pattern in sizing.recommended_patterns:
        console.print(f"  [green]•[/green] {pattern}")
    for note in sizing.notes:
        console.print(f"  [dim]• {note}[/dim]")

    if sizing.agent_recommendations:
        table = Table(title="Agent Recommendations", show_header=True, header_style="bold")
        table.add_column("Archetype", style="cyan", no_wrap=True)
        table.add_column("Role Type")
        table.add_column("Necessity")
        if verbose:
            table.add_column("Reason")
        for rec in sizing.agent_recommendations:
            row = [rec.archetype_id, rec.role_type.value, NECESSITY_BADGES[rec.necessity]]
            if verbose:
                row.append(rec.reason)
            table.add_row(*row)
        console.print()
        console.print(table)

    tiers = sizing.architecture_tiers
    tree = Tree("[bold]Architecture Tiers[/bold]")
    tree.add(f"Experience Agents: {tiers.experience_agents}")
    tree.add(f"Value Stream Agents: {tiers.value_stream_agents}")
    tree.add(f"Function Agents: {tiers.function_agents}")
    tree.add(f"Process Agents: {tiers.process_agents}")
    tree.add(f"Task Agents: {tiers.task_agents}")
    tree.add(f"Control Agents: {tiers.control_agents}")
    tree.add(f"Platform: {tiers.platform_requirement}")
    console.print()
    console.print(tree)

    if governance.requirements:
        console.print("\n[bold]Governance Requirements:[/bold]")
        for req in governance.requirements:
            console.print(f"  • [bold]{req.title}[/bold] [dim]({req.category}, {req.priority.value})[/dim]")
            if verbose:
                console.print(f"    {req.description}")

    console.print("\n[bold]Human Oversight:[/bold]")
    for point in governance.oversight_points:
        console.print(f"  • {point}")
    console.print(f"  [dim]Monitoring: {governance.monitoring_cadence}[/dim]")

    if verbose:
        advisory = result.advisory
        for title, lines in [
            ("Architecture", advisory.architecture),
            ("Delivery", advisory.delivery),
            ("Team", advisory.team),
            ("Risk Controls", advisory.risks),
        ]:
            console.print(f"\n[bold]{title}:[/bold]")
            for line in lines:
                console.print(f"  • {line}")

        if sizing.test_cases:
            console.print(f"\n[dim]{len(sizing.test_cases)} test cases generated (use --json-output to export)[/dim]")

        console.print(f"\n[dim]Config fingerprint: {result.config_fingerprint}[/dim]")


def output_json(result: AssessmentResult, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
