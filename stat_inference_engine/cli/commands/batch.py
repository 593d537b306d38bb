"""Batch CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from stat_inference_engine.classifier.batch import evaluate_classifiers
from stat_inference_engine.classifier.bayes import BayesianClassifier
from stat_inference_engine.classifier.models import AnalysisDomain
from stat_inference_engine.cli.validation import parse_distribution_spec, resolve_priors, write_json
from stat_inference_engine.config.loader import load_config_with_precedence
from stat_inference_engine.exceptions import ConfigValidationError
from stat_inference_engine.interfaces.distribution import describe_parameters
from stat_inference_engine.schema.run_config import RunConfig
from stat_inference_engine.utils.logging import get_logger

log = get_logger(__name__, component="cli_batch")
console = Console()

_KEYS = ("seed", "samples_per_class", "error_mode", "domain_lower_limit", "domain_upper_limit", "max_workers")


def parse_pair(pair: str, domain: AnalysisDomain) -> BayesianClassifier:
    """Parse ``CLASS1;CLASS2[;P1]``, e.g. ``uniform:3,5;normal:5,1;0.4``."""

    parts = [part.strip() for part in pair.split(";")]
    if len(parts) not in (2, 3):
        raise ConfigValidationError(f"Pair {pair!r} must look like CLASS1;CLASS2[;P1]")
    try:
        p1 = float(parts[2]) if len(parts) == 3 else 0.5
    except ValueError as exc:
        raise ConfigValidationError(f"Pair {pair!r} has a non-numeric prior") from exc
    prior1, prior2 = resolve_priors(p1, None)
    return BayesianClassifier(
        class1=parse_distribution_spec(parts[0]),
        class2=parse_distribution_spec(parts[1]),
        p1=prior1,
        p2=prior2,
        domain=domain,
    )


def batch(
    pair: list[str] = typer.Option(..., "--pair", help="CLASS1;CLASS2[;P1], repeatable"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    mode: str | None = typer.Option(None, "--mode", help="Theoretical error mode: numeric | analytic | table"),
    samples_per_class: int | None = typer.Option(None, "--samples-per-class", help="Empirical draws per class"),
    seed: int | None = typer.Option(None, help="Root seed; each pair gets a spawned child"),
    max_workers: int | None = typer.Option(None, "--max-workers", help="Thread pool size"),
    output: Path | None = typer.Option(None, "--output", help="Write the evaluations as JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Evaluate several classifier configurations in parallel."""

    defaults = RunConfig().to_dict()
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="SIE_",
        cli_values={
            "seed": seed,
            "samples_per_class": samples_per_class,
            "error_mode": mode,
            "max_workers": max_workers,
        },
        defaults={key: defaults[key] for key in _KEYS},
        casters={
            "seed": int,
            "samples_per_class": int,
            "error_mode": str,
            "domain_lower_limit": float,
            "domain_upper_limit": float,
            "max_workers": int,
        },
    )
    run_config = RunConfig.from_dict(cfg)
    domain = AnalysisDomain(lower_limit=run_config.domain_lower_limit, upper_limit=run_config.domain_upper_limit)
    classifiers = [parse_pair(item, domain) for item in pair]

    log.info("Starting batch run", extra={"evaluated": len(classifiers), "mode": run_config.error_mode})
    evaluations = evaluate_classifiers(
        classifiers,
        samples_per_class=run_config.samples_per_class,
        seed=run_config.seed,
        max_workers=run_config.max_workers,
        mode=run_config.error_mode,
    )

    payload = {"evaluations": [evaluation.to_dict() for evaluation in evaluations]}
    if output is not None:
        write_json(payload, output)
    if as_json:
        typer.echo(json.dumps(payload, default=str))
        return

    table = Table(title=f"Batch evaluation ({run_config.error_mode})")
    for column in ("#", "class 1", "class 2", "p1", "status", "theoretical", "empirical"):
        table.add_column(column, justify="right")
    for evaluation in evaluations:
        clf = evaluation.classifier
        table.add_row(
            str(evaluation.index),
            describe_parameters(clf.class1),
            describe_parameters(clf.class2),
            f"{clf.p1:g}",
            evaluation.status if evaluation.error is None else f"{evaluation.status}: {evaluation.error}",
            f"{evaluation.theoretical.total_error:.6f}" if evaluation.theoretical else "-",
            f"{evaluation.empirical.error_rate:.6f}" if evaluation.empirical else "-",
        )
    console.print(table)
