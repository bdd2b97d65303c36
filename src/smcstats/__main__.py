"""
smcstats command-line interface entry point.

Summarizes weighted particle sets stored in JSON or CSV files: moment
statistics, quantiles and mode, weighted frequency tables of discrete values,
and effective sample size diagnostics. Accumulation behavior is configured
through SMCSTATS__ environment variables and the options of each command.

Example:
::
    # Mean, variance and 95% interval of weighted particles
    smcstats summary particles.csv --order 2 --probs 0.025,0.975

    # Weighted frequency table of a discrete component
    smcstats table states.json --normalize --output-format console

    # Check the effective sample size of the particle weights
    smcstats diagnosis particles.csv --ess-threshold 50
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from smcstats.errors import StatisticsError
from smcstats.facade import AccumulationFacade
from smcstats.schemas import StandardBaseModel
from smcstats.settings import print_config, settings
from smcstats.summary import diagnose_particles, summarize_particles
from smcstats.utils import cli as cli_tools
from smcstats.utils import load_observations

__all__ = ["cli", "config", "diagnosis", "summary", "table"]

OUTPUT_FORMATS = ("json", "console")

input_path_argument = click.argument(
    "path",
    type=click.Path(file_okay=True, dir_okay=False, exists=True, path_type=Path),
)
output_format_option = click.option(
    "--output-format",
    type=click.Choice(OUTPUT_FORMATS),
    default="json",
    show_default=True,
    help="Print results as JSON or as a console table.",
)


def _load(path: Path) -> tuple[list[float], list[float]]:
    try:
        return load_observations(path)
    except (OSError, ValueError) as err:
        raise click.ClickException(f"Could not load {path}: {err}") from err


def _emit(
    title: str,
    result: StandardBaseModel,
    rows: Iterable[tuple[str, Any]],
    fmt: str,
):
    if fmt == "json":
        click.echo(result.model_dump_json(indent=2))
        return

    console_table = Table(title=title)
    console_table.add_column("statistic")
    console_table.add_column("value", justify="right")
    for name, value in rows:
        display = (
            f"{value:.{settings.float_precision}g}"
            if isinstance(value, float)
            else str(value)
        )
        console_table.add_row(name, display)
    Console().print(console_table)


@click.group()
@click.version_option(package_name="smcstats", message="smcstats version: %(version)s")
def cli():
    """smcstats CLI for weighted statistics of particle sets."""


@cli.command(
    help=(
        "Summarize a weighted particle set with moments, quantiles and mode.\n\n"
        "PATH: JSON or CSV file with values and weights."
    ),
)
@input_path_argument
@click.option(
    "--order",
    type=click.IntRange(0, 4),
    default=None,
    help="Moment statistics up to this order (default: 0 with --mode, else 1).",
)
@click.option(
    "--probs",
    callback=cli_tools.parse_list_floats,
    default=None,
    help="Comma-separated probability levels for quantiles, e.g. 0.025,0.975.",
)
@click.option(
    "--mode/--no-mode",
    default=None,
    help="Compute the weighted mode (default: on for --discrete).",
)
@click.option(
    "--discrete",
    is_flag=True,
    help="Treat the values as a discrete component.",
)
@output_format_option
def summary(path, order, probs, mode, discrete, output_format):
    values, weights = _load(path)
    try:
        result = summarize_particles(
            values,
            weights,
            probs=probs or (),
            order=order,
            mode=mode,
            discrete=discrete,
            facade=AccumulationFacade(settings.accumulation),
        )
    except StatisticsError as err:
        raise click.ClickException(str(err)) from err

    rows: list[tuple[str, Any]] = [("n_part", result.n_part), ("ess", result.ess)]
    rows.extend(result.moments.as_dict().items())
    if result.quantiles is not None:
        rows.extend((f"q{label}", val) for label, val in result.quantiles.as_pairs())
    if result.mode is not None:
        rows.append(("mode", result.mode))
    _emit(f"Summary of {path.name}", result, rows, output_format)


@cli.command(
    help=(
        "Weighted frequency table of the exact values of a discrete component.\n\n"
        "PATH: JSON or CSV file with values and weights."
    ),
)
@input_path_argument
@click.option(
    "--normalize/--no-normalize",
    default=None,
    help="Scale frequencies to sum to one (default: from settings).",
)
@output_format_option
def table(path, normalize, output_format):
    values, weights = _load(path)
    facade = AccumulationFacade(settings.accumulation)
    result = facade.table(values, weights, normalize=normalize)
    if not result.ok:
        raise click.ClickException(result.error.message)  # type: ignore[union-attr]

    histogram = result.value
    _emit(
        f"Table of {path.name}",
        histogram,
        histogram.as_dict().items(),
        output_format,
    )


@cli.command(
    help=(
        "Check the effective sample size of particle weights against a "
        "threshold.\n\nPATH: JSON or CSV file with values and weights."
    ),
)
@input_path_argument
@click.option(
    "--ess-threshold",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Threshold the ESS must exceed (default: from settings).",
)
@output_format_option
def diagnosis(path, ess_threshold, output_format):
    _, weights = _load(path)
    try:
        result = diagnose_particles(
            weights,
            ess_threshold=ess_threshold,
            facade=AccumulationFacade(settings.accumulation),
        )
    except StatisticsError as err:
        raise click.ClickException(str(err)) from err

    rows = [
        ("ess", result.ess),
        ("threshold", result.threshold),
        ("diagnosis", "GOOD" if result.valid else "BAD"),
    ]
    _emit(f"Diagnosis of {path.name}", result, rows, output_format)


@cli.command(
    short_help="Show configuration settings.",
    help="Display environment variables for configuring smcstats behavior.",
)
def config():
    print_config()


if __name__ == "__main__":
    cli()
