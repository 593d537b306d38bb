"""Classify CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from stat_inference_engine.classifier.bayes import BayesianClassifier
from stat_inference_engine.classifier.models import AnalysisDomain
from stat_inference_engine.cli.validation import parse_distribution_spec, resolve_priors, write_json
from stat_inference_engine.config.loader import load_config_with_precedence
from stat_inference_engine.schema.run_config import RunConfig
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="cli_classify")
console = Console()

_KEYS = ("seed", "samples_per_class", "error_mode", "normal_method", "domain_lower_limit", "domain_upper_limit")


def classify(
    class1: str = typer.Option(..., "--class1", help="Class 1 spec, e.g. uniform:3,5"),
    class2: str = typer.Option(..., "--class2", help="Class 2 spec, e.g. normal:5,1"),
    p1: float = typer.Option(0.5, "--p1", help="Prior of class 1"),
    p2: float | None = typer.Option(None, "--p2", help="Prior of class 2 (defaults to 1 - p1)"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    mode: str | None = typer.Option(None, "--mode", help="Theoretical error mode: numeric | analytic | table"),
    samples_per_class: int | None = typer.Option(None, "--samples-per-class", help="Empirical draws per class"),
    seed: int | None = typer.Option(None, help="Random seed"),
    output: Path | None = typer.Option(None, "--output", help="Write the report as JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
) -> None:
    """Find decision boundaries and compare theoretical and empirical error."""

    defaults = RunConfig().to_dict()
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="SIE_",
        cli_values={"seed": seed, "samples_per_class": samples_per_class, "error_mode": mode},
        defaults={key: defaults[key] for key in _KEYS},
        casters={
            "seed": int,
            "samples_per_class": int,
            "error_mode": str,
            "normal_method": str,
            "domain_lower_limit": float,
            "domain_upper_limit": float,
        },
    )
    run_config = RunConfig.from_dict(cfg)
    prior1, prior2 = resolve_priors(p1, p2)
    classifier = BayesianClassifier(
        class1=parse_distribution_spec(class1),
        class2=parse_distribution_spec(class2),
        p1=prior1,
        p2=prior2,
        domain=AnalysisDomain(
            lower_limit=run_config.domain_lower_limit,
            upper_limit=run_config.domain_upper_limit,
        ),
    )

    log.info("Starting classify run", extra={"mode": run_config.error_mode})
    theoretical = None
    if classifier.supports_theoretical_analysis:
        theoretical = classifier.theoretical_error(run_config.error_mode)
    else:
        log.warning("Theoretical error skipped for discrete or out-of-domain classes")
    empirical = classifier.empirical_error(
        run_config.samples_per_class,
        seed=run_config.seed,
        normal_method=run_config.normal_method,
    )

    report = {
        "class1": classifier.class1.to_dict(),
        "class2": classifier.class2.to_dict(),
        "p1": classifier.p1,
        "p2": classifier.p2,
        "theoretical": theoretical.to_dict() if theoretical else None,
        "empirical": empirical.to_dict(),
    }
    if output is not None:
        write_json(report, output)
    if as_json:
        typer.echo(json.dumps(report, default=str))
        return

    if theoretical is not None:
        table = Table(title=f"Theoretical error ({theoretical.mode})")
        for column in ("start", "end", "losing class", "error"):
            table.add_column(column, justify="right")
        for interval in theoretical.error_intervals:
            table.add_row(
                f"{interval.start:.4f}",
                f"{interval.end:.4f}",
                interval.losing_class_name,
                f"{interval.error:.6f}",
            )
        console.print(table)
        points = ", ".join(f"{p:.4f}" for p in theoretical.intersection_points) or "none"
        console.print(f"Intersection points: {points}")
        console.print(f"[bold]Total theoretical error:[/bold] {theoretical.total_error:.6f}")

    matrix = empirical.confusion_matrix
    console.print(
        f"[bold]Empirical error:[/bold] {empirical.error_rate:.6f} "
        f"({empirical.total_samples - empirical.correct_classifications}/{empirical.total_samples} misclassified)"
    )
    if matrix is not None:
        console.print(
            f"TP={matrix.true_positive} FN={matrix.false_negative} "
            f"FP={matrix.false_positive} TN={matrix.true_negative}"
        )
