"""
Command-Line Interface for FundModel.

Purpose
-------
Runs the funding model without writing Python code: simulate one
parameter set year by year, search the feasible cohort counts, and
manage parameter files.

Commands
--------
- timeline: Simulate one parameter set and print the year-by-year table
- search: Enumerate feasible (accelerator, incubator) counts
- config: Create, validate and display parameter files
- info: Show package and dependency versions

Example Usage
-------------
    # Default v1 timeline
    $ fundmodel timeline

    # v2 timeline with 4 accelerators and 12 incubators, saved as
    # results/v2.json (relative paths land under FUNDMODEL_OUTPUT_DIR)
    $ fundmodel timeline --model-version v2 -a 4 -b 12 -o v2.json

    # Feasibility search with a frontier plot
    $ fundmodel search --model-version v1 --plot frontier.png

    # Show version
    $ fundmodel --version
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .constants import MAX_ACCEL_COUNT, MAX_INCUB_COUNT
from .exceptions import FundModelError
from .utils import format_millions, format_thousands


# Version
__version__ = "0.1.0"

_STATUS_STYLES = {
    "sustainable": "green",
    "clawback_risk": "yellow",
    "infeasible": "red",
    "steady_state_exceeded": "red",
}


def _output_path(path: Optional[Path], settings) -> Optional[Path]:
    """Resolve a relative output path against settings.output_dir."""
    if path is None or path.is_absolute():
        return path
    return settings.output_dir / path


@click.group()
@click.version_option(version=__version__, prog_name="fundmodel")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: FUNDMODEL_LOG_LEVEL or WARNING)"
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, log_level: Optional[str]) -> None:
    """
    FundModel - Rolling Research Funding Model.

    Checks whether overlapping multi-year grant cohorts stay within the
    available accrual and budget in every year, and finds the largest
    sustainable cohort counts.

    Use 'fundmodel COMMAND --help' for command-specific help.
    """
    from .config import AppSettings

    settings = AppSettings()
    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    logging.getLogger("fundmodel").setLevel((log_level or settings.log_level).upper())

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["settings"] = settings


@main.command()
@click.option(
    "--accel", "-a",
    type=int,
    default=None,
    help="Accelerator cohorts per year (default: version default)"
)
@click.option(
    "--incub", "-b",
    type=int,
    default=None,
    help="Incubator cohorts per year (default: version default)"
)
@click.option(
    "--model-version", "-m",
    type=click.Choice(["v1", "v2"]),
    default=None,
    help="Model version (default: FUNDMODEL_DEFAULT_VERSION or v1)"
)
@click.option("--capital", type=float, default=None, help="Capital spend per year (millions)")
@click.option("--ug-research", type=float, default=None, help="UG research spend per year (millions)")
@click.option(
    "--params", "-p",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Parameter file (JSON); replaces the options above"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Save the timeline as JSON (relative to FUNDMODEL_OUTPUT_DIR)"
)
@click.option(
    "--csv", "csv_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Save the timeline as CSV (relative to FUNDMODEL_OUTPUT_DIR)"
)
@click.option(
    "--plot",
    type=click.Path(path_type=Path),
    default=None,
    help="Save a timeline chart as PNG (relative to FUNDMODEL_OUTPUT_DIR)"
)
@click.pass_context
def timeline(
    ctx: click.Context,
    accel: Optional[int],
    incub: Optional[int],
    model_version: Optional[str],
    capital: Optional[float],
    ug_research: Optional[float],
    params: Optional[Path],
    output: Optional[Path],
    csv_path: Optional[Path],
    plot: Optional[Path],
) -> None:
    """
    Simulate one parameter set over the calendar.

    Prints available funds, spend, carried balances, feasibility and
    clawback risk per year, followed by the steady-state check.

    Example:
        fundmodel timeline -m v2 -a 4 -b 12
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    settings = ctx.obj.get("settings")

    from .config import ModelParameters
    from .serialization import load_parameters, save_timeline, save_timeline_csv
    from .timeline import run_timeline

    try:
        if params:
            model_params = load_parameters(params)
        else:
            model_params = ModelParameters(
                version=model_version or settings.default_version,
                accel_count=accel,
                incub_count=incub,
                capital=capital,
                ug_research=ug_research,
            )
    except (FundModelError, ValueError) as e:
        click.echo(f"Error: invalid parameters: {e}", err=True)
        sys.exit(1)

    try:
        tl = run_timeline(model_params)
    except FundModelError as e:
        click.echo(f"Error during simulation: {e}", err=True)
        sys.exit(1)

    if console and not quiet:
        table = Table(
            title=f"Funding Timeline ({model_params.version}: "
                  f"{model_params.accel_count} accel + {model_params.incub_count} incub / yr)",
            show_header=True,
        )
        table.add_column("Year", style="cyan")
        for col in ("Available", "Spend", "Accrued Out", "Allocated Out"):
            table.add_column(col, justify="right")
        table.add_column("Feasible", justify="center")
        table.add_column("Clawback", justify="right")

        for r in tl:
            table.add_row(
                str(r.year),
                format_millions(r.available, 3),
                format_millions(r.total_spend, 3),
                format_millions(r.accrual_out, 3),
                format_millions(r.allocated_out, 3),
                "[green]yes[/green]" if r.feasible else "[red]NO[/red]",
                f"[yellow]{format_millions(r.clawback_amount, 3)}[/yellow]"
                if r.clawback_risk else "-",
            )
        console.print(table)

        style = _STATUS_STYLES[tl.status]
        console.print(
            f"Steady-state spend: {format_millions(tl.steady_state_spend, 3)} "
            f"(ceiling {format_millions(tl.model.steady_state_ceiling)})"
        )
        console.print(f"Status: [{style}]{tl.status}[/{style}]")
    else:
        for r in tl:
            click.echo(
                f"{r.year}: available={r.available:.3f} spend={r.total_spend:.3f} "
                f"accrual_out={r.accrual_out:.3f} allocated_out={r.allocated_out:.3f} "
                f"feasible={r.feasible} clawback={r.clawback_risk}"
            )
        click.echo(f"steady_state_spend={tl.steady_state_spend:.3f}")
        click.echo(f"status={tl.status}")

    output = _output_path(output, settings)
    csv_path = _output_path(csv_path, settings)
    plot = _output_path(plot, settings)

    if output:
        save_timeline(tl, output)
        if not quiet:
            click.echo(f"Timeline saved to {output}")
    if csv_path:
        save_timeline_csv(tl, csv_path)
        if not quiet:
            click.echo(f"Timeline CSV saved to {csv_path}")
    if plot:
        from .plotting import plot_timeline

        plot.parent.mkdir(parents=True, exist_ok=True)
        plot_timeline(tl, save_path=plot)
        if not quiet:
            click.echo(f"Chart saved to {plot}")


@main.command()
@click.option(
    "--model-version", "-m",
    type=click.Choice(["v1", "v2"]),
    default=None,
    help="Model version (default: FUNDMODEL_DEFAULT_VERSION or v1)"
)
@click.option("--accel-min", type=int, default=0, help="Smallest accelerator count (default: 0)")
@click.option(
    "--accel-max", type=int, default=MAX_ACCEL_COUNT,
    help=f"Largest accelerator count (default: {MAX_ACCEL_COUNT})"
)
@click.option("--incub-min", type=int, default=0, help="Smallest incubator count (default: 0)")
@click.option(
    "--incub-max", type=int, default=MAX_INCUB_COUNT,
    help=f"Largest incubator count (default: {MAX_INCUB_COUNT})"
)
@click.option("--capital", type=float, default=None, help="Capital spend per year (millions)")
@click.option("--ug-research", type=float, default=None, help="UG research spend per year (millions)")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Save the search result as JSON (relative to FUNDMODEL_OUTPUT_DIR)"
)
@click.option(
    "--plot",
    type=click.Path(path_type=Path),
    default=None,
    help="Save a feasible-region chart as PNG (relative to FUNDMODEL_OUTPUT_DIR)"
)
@click.pass_context
def search(
    ctx: click.Context,
    model_version: Optional[str],
    accel_min: int,
    accel_max: int,
    incub_min: int,
    incub_max: int,
    capital: Optional[float],
    ug_research: Optional[float],
    output: Optional[Path],
    plot: Optional[Path],
) -> None:
    """
    Search feasible cohort counts.

    Simulates every (accelerator, incubator) pair in the given bounds and
    reports the largest incubator count for each accelerator count.

    Example:
        fundmodel search -m v2 --accel-max 8 -o search_v2.json
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    settings = ctx.obj.get("settings")

    import pydantic

    from .config import SearchConfig
    from .serialization import save_search_result
    from .search import run_feasibility_search

    try:
        config = SearchConfig(
            version=model_version or settings.default_version,
            accel_min=accel_min,
            accel_max=accel_max,
            incub_min=incub_min,
            incub_max=incub_max,
            capital=capital,
            ug_research=ug_research,
        )
    except pydantic.ValidationError as e:
        click.echo(f"Error: invalid search bounds: {e}", err=True)
        sys.exit(1)

    if not quiet and console:
        n = len(config.accel_range) * len(config.incub_range)
        console.print(f"[bold blue]Searching {n} combinations ({config.version})...[/bold blue]")

    try:
        result = run_feasibility_search(config=config)
    except FundModelError as e:
        click.echo(f"Error during search: {e}", err=True)
        sys.exit(1)

    if console and not quiet:
        table = Table(title="Pareto Frontier", show_header=True)
        table.add_column("Accelerators", style="cyan", justify="right")
        table.add_column("Max Incubators", style="green", justify="right")
        for a, b in result.pareto:
            table.add_row(str(a), str(b))
        console.print(table)
        console.print(f"Feasible combinations: {len(result.all)} of {result.n_evaluated}")
    else:
        for a, b in result.pareto:
            click.echo(f"{a} {b}")
        click.echo(f"feasible={len(result.all)} evaluated={result.n_evaluated}")

    output = _output_path(output, settings)
    plot = _output_path(plot, settings)

    if output:
        save_search_result(result, output)
        if not quiet:
            click.echo(f"Search result saved to {output}")
    if plot:
        from .plotting import plot_feasible_region

        plot.parent.mkdir(parents=True, exist_ok=True)
        plot_feasible_region(result, save_path=plot)
        if not quiet:
            click.echo(f"Chart saved to {plot}")


@main.group()
def config() -> None:
    """
    Parameter file commands.

    Create, validate and display model parameter files.
    """
    pass


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option(
    "--model-version", "-m",
    type=click.Choice(["v1", "v2"]),
    default="v1",
    help="Version whose defaults fill the file (default: v1)"
)
@click.pass_context
def config_create(ctx: click.Context, output_file: Path, model_version: str) -> None:
    """
    Create a parameter file holding the version defaults.

    Example:
        fundmodel config create params.json -m v2
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    from .config import ModelParameters
    from .serialization import save_parameters

    save_parameters(ModelParameters(version=model_version), output_file)

    if not quiet:
        if console:
            console.print(f"[green]Created parameter file: {output_file}[/green]")
        else:
            click.echo(f"Created parameter file: {output_file}")


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path) -> None:
    """
    Validate a parameter file.

    Checks that the file is valid JSON, that every value is in bounds and
    runs a timeline to report the resulting status.

    Example:
        fundmodel config validate params.json
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    from .serialization import load_parameters
    from .timeline import run_timeline

    try:
        params = load_parameters(config_file)
    except (json.JSONDecodeError, ValueError, FundModelError) as e:
        click.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)

    tl = run_timeline(params)
    if console and not quiet:
        style = _STATUS_STYLES[tl.status]
        body = (
            f"[bold]Parameters Valid[/bold]\n\n"
            f"[cyan]Version:[/cyan] {params.version}\n"
            f"[cyan]Accelerators / yr:[/cyan] {params.accel_count}\n"
            f"[cyan]Incubators / yr:[/cyan] {params.incub_count}\n"
            f"[cyan]Capital / yr:[/cyan] {format_thousands(params.capital)}\n"
            f"[cyan]UG research / yr:[/cyan] {format_thousands(params.ug_research)}\n"
            f"[cyan]Status:[/cyan] [{style}]{tl.status}[/{style}]"
        )
        console.print(Panel(body, title="Configuration Summary", border_style="green"))
    else:
        click.echo("Configuration is valid")
        click.echo(f"Status: {tl.status}")


@config.command("show")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def config_show(ctx: click.Context, config_file: Path, format: str) -> None:
    """
    Display a parameter file.

    Example:
        fundmodel config show params.json --format json
    """
    console = ctx.obj.get("console")

    with open(config_file, "r") as f:
        config_data = json.load(f)

    if format == "json" or not console:
        click.echo(json.dumps(config_data, indent=2))
        return

    table = Table(title="Model Parameters")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in config_data.items():
        table.add_row(key, str(value))
    console.print(table)


@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency information.
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    from importlib.metadata import PackageNotFoundError, version

    info_lines = [
        f"FundModel Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
    ]
    for name in ("numpy", "pandas", "pydantic", "matplotlib", "rich", "click"):
        try:
            info_lines.append(f"{name}: {version(name)}")
        except PackageNotFoundError:
            info_lines.append(f"{name}: not installed")

    if console and not quiet:
        console.print(Panel("\n".join(info_lines), title="System Information"))
    else:
        for line in info_lines:
            click.echo(line)


if __name__ == "__main__":
    main()
