"""Generate CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from stat_inference_engine.cli.validation import parse_distribution_spec, write_json
from stat_inference_engine.config.loader import load_config_with_precedence
from stat_inference_engine.distributions.factory import generate_result
from stat_inference_engine.interfaces.distribution import describe_parameters
from stat_inference_engine.schema.generation_result import GenerationResult
from stat_inference_engine.schema.run_config import RunConfig
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="cli_generate")
console = Console()


def _render(result: GenerationResult) -> None:
    console.print(f"[bold cyan]{describe_parameters(result.parameters)}[/bold cyan]  n={result.sample_size}")
    if result.interval_data is None:
        return
    table = Table(title="Frequencies")
    for column in ("#", "start", "end", "frequency", "relative"):
        table.add_column(column, justify="right")
    total = result.interval_data.sample_size
    for interval in result.interval_data.intervals:
        table.add_row(
            str(interval.index),
            f"{interval.start:.4f}",
            f"{interval.end:.4f}",
            str(interval.frequency),
            f"{interval.relative_frequency(total):.4f}",
        )
    console.print(table)


def generate(
    distribution: str = typer.Argument(..., help="Distribution spec, e.g. normal:0,1 | uniform:3,5 | binomial:10,0.5"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    sample_size: int | None = typer.Option(None, "--sample-size", help="Number of values to draw"),
    intervals: int | None = typer.Option(None, "--intervals", help="Histogram interval count (Sturges rule when omitted)"),
    seed: int | None = typer.Option(None, help="Random seed"),
    normal_method: str | None = typer.Option(None, "--normal-method", help="box_muller | clt12"),
    output: Path | None = typer.Option(None, "--output", help="Write the full result as JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Draw a sample and summarize it as a frequency table."""

    defaults = RunConfig().to_dict()
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="SIE_",
        cli_values={
            "sample_size": sample_size,
            "number_of_intervals": intervals,
            "seed": seed,
            "normal_method": normal_method,
        },
        defaults={key: defaults[key] for key in ("sample_size", "number_of_intervals", "seed", "normal_method")},
        casters={"sample_size": int, "number_of_intervals": int, "seed": int, "normal_method": str},
    )
    run_config = RunConfig.from_dict(cfg)
    params = parse_distribution_spec(distribution)

    log.info("Starting generate run", extra={"distribution": params.kind, "sample_size": run_config.sample_size})
    result = generate_result(
        params,
        run_config.sample_size,
        number_of_intervals=run_config.number_of_intervals,
        seed=run_config.seed,
        normal_method=run_config.normal_method,
    )

    if output is not None:
        write_json(result.to_dict(), output)
        log.info("Saved generation result", extra={"path": str(output)})
    if as_json:
        typer.echo(json.dumps(result.to_dict(), default=str))
    else:
        _render(result)
