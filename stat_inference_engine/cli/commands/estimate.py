"""Estimate CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from stat_inference_engine.cli.validation import parse_distribution_spec, write_json
from stat_inference_engine.config.loader import load_config_with_precedence
from stat_inference_engine.distributions.factory import generate
from stat_inference_engine.estimation.intervals import (
    NormalIntervalEstimates,
    calculate_normal_intervals,
    estimate_intervals_from_samples,
)
from stat_inference_engine.estimation.point import ParameterSet, estimate_all as run_estimate_all
from stat_inference_engine.exceptions import ConfigValidationError
from stat_inference_engine.interfaces.distribution import (
    BinomialParameters,
    NormalParameters,
    UniformParameters,
)
from stat_inference_engine.schema.run_config import RunConfig
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="cli_estimate")
console = Console()


def _render_intervals(estimates: NormalIntervalEstimates) -> None:
    table = Table(title=f"Confidence intervals ({estimates.confidence_level:g})")
    for column in ("parameter", "lower", "upper", "width"):
        table.add_column(column, justify="right")
    for interval in estimates.intervals:
        table.add_row(
            interval.parameter_name,
            f"{interval.lower_bound:.6f}",
            f"{interval.upper_bound:.6f}",
            f"{interval.width:.6f}",
        )
    console.print(table)


def estimate(
    mean: float | None = typer.Option(None, "--mean", help="Sample mean"),
    sigma: float | None = typer.Option(None, "--sigma", help="Corrected sample standard deviation"),
    size: int | None = typer.Option(None, "--size", help="Sample size"),
    from_sample: str | None = typer.Option(None, "--from-sample", help="Draw a normal sample instead, e.g. normal:5,2"),
    theoretical_sigma: float | None = typer.Option(None, "--theoretical-sigma", help="Known population sigma"),
    confidence: float | None = typer.Option(None, "--confidence", help="Confidence level in (0, 1)"),
    sample_size: int | None = typer.Option(None, "--sample-size", help="Draws for --from-sample"),
    seed: int | None = typer.Option(None, help="Random seed"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    output: Path | None = typer.Option(None, "--output", help="Write the intervals as JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Confidence intervals for a normal mean and variance."""

    defaults = RunConfig().to_dict()
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="SIE_",
        cli_values={"confidence_level": confidence, "sample_size": sample_size, "seed": seed},
        defaults={key: defaults[key] for key in ("confidence_level", "sample_size", "seed")},
        casters={"confidence_level": float, "sample_size": int, "seed": int},
    )
    run_config = RunConfig.from_dict(cfg)

    if from_sample is not None:
        params = parse_distribution_spec(from_sample)
        if not isinstance(params, NormalParameters):
            raise ConfigValidationError("--from-sample expects a normal spec, e.g. normal:5,2")
        values = [v.value for v in generate(params, run_config.sample_size, seed=run_config.seed)]
        estimates = estimate_intervals_from_samples(
            values,
            theoretical_sigma=theoretical_sigma if theoretical_sigma is not None else params.sigma,
            confidence_level=run_config.confidence_level,
        )
    else:
        if mean is None or sigma is None or size is None:
            raise ConfigValidationError("--mean, --sigma and --size are required without --from-sample")
        estimates = calculate_normal_intervals(
            mean,
            sigma,
            size,
            theoretical_sigma=theoretical_sigma,
            confidence_level=run_config.confidence_level,
        )

    if output is not None:
        write_json(estimates.to_dict(), output)
    if as_json:
        typer.echo(json.dumps(estimates.to_dict()))
    else:
        _render_intervals(estimates)


def estimate_all(
    binomial: str = typer.Option("binomial:10,0.5", "--binomial", help="Binomial spec"),
    uniform: str = typer.Option("uniform:0,1", "--uniform", help="Uniform spec"),
    normal: str = typer.Option("normal:0,1", "--normal", help="Normal spec"),
    sample_size: int | None = typer.Option(None, "--sample-size", help="Draws per distribution"),
    seed: int | None = typer.Option(None, help="Random seed"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    output: Path | None = typer.Option(None, "--output", help="Write the estimates as JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Sample moments against theoretical moments for all three distributions."""

    defaults = RunConfig().to_dict()
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="SIE_",
        cli_values={"sample_size": sample_size, "seed": seed},
        defaults={key: defaults[key] for key in ("sample_size", "seed")},
        casters={"sample_size": int, "seed": int},
    )
    run_config = RunConfig.from_dict(cfg)

    parsed = {name: parse_distribution_spec(spec) for name, spec in (("binomial", binomial), ("uniform", uniform), ("normal", normal))}
    expected = {"binomial": BinomialParameters, "uniform": UniformParameters, "normal": NormalParameters}
    for name, params in parsed.items():
        if not isinstance(params, expected[name]):
            raise ConfigValidationError(f"--{name} expects a {name} spec")

    parameter_set = ParameterSet(
        binomial=parsed["binomial"],
        uniform=parsed["uniform"],
        normal=parsed["normal"],
        binomial_sample_size=run_config.sample_size,
        uniform_sample_size=run_config.sample_size,
        normal_sample_size=run_config.sample_size,
    )
    estimates = run_estimate_all(parameter_set, seed=run_config.seed)

    if output is not None:
        write_json(estimates.to_dict(), output)
    if as_json:
        typer.echo(json.dumps(estimates.to_dict()))
        return

    table = Table(title=f"Point estimates (total n={estimates.total_sample_size})")
    for column in ("distribution", "mean", "theoretical mean", "s^2", "theoretical var", "sigma", "theoretical sigma"):
        table.add_column(column, justify="right")
    for item in (estimates.binomial, estimates.uniform, estimates.normal):
        table.add_row(
            item.distribution_name,
            f"{item.sample_mean:.4f}",
            f"{item.theoretical_mean:.4f}",
            f"{item.corrected_sample_variance:.4f}",
            f"{item.theoretical_variance:.4f}",
            f"{item.sample_sigma:.4f}",
            f"{item.theoretical_sigma:.4f}",
        )
    console.print(table)
