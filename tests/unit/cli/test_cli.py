import json
import sys

import pytest

pytest.importorskip("typer")
import typer
from typer.testing import CliRunner

from stat_inference_engine.classifier.models import AnalysisDomain
from stat_inference_engine.cli import main as cli_main
from stat_inference_engine.cli.commands import batch as batch_command
from stat_inference_engine.cli.main import app
from stat_inference_engine.cli.validation import parse_distribution_spec, resolve_priors
from stat_inference_engine.exceptions import ConfigValidationError, InvalidParameterError
from stat_inference_engine.interfaces.distribution import BinomialParameters, NormalParameters

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "SIE_SEED",
        "SIE_SAMPLE_SIZE",
        "SIE_SAMPLES_PER_CLASS",
        "SIE_ERROR_MODE",
        "SIE_CONFIDENCE_LEVEL",
        "SIE_MAX_WORKERS",
    ):
        monkeypatch.delenv(key, raising=False)


def test_parse_distribution_spec():
    assert parse_distribution_spec("normal:5,1") == NormalParameters(m=5.0, sigma=1.0)
    assert parse_distribution_spec(" Binomial:10, 0.5") == BinomialParameters(n=10, p=0.5)
    for bad in ("normal", "cauchy:0,1", "normal:1", "normal:a,b"):
        with pytest.raises(ConfigValidationError):
            parse_distribution_spec(bad)
    with pytest.raises(InvalidParameterError):
        parse_distribution_spec("uniform:5,3")


def test_resolve_priors():
    assert resolve_priors(0.3, None) == (0.3, pytest.approx(0.7))
    with pytest.raises(ConfigValidationError):
        resolve_priors(0.7, 0.7)
    with pytest.raises(ConfigValidationError):
        resolve_priors(1.5, None)


def test_generate_json_and_output(tmp_path):
    target = tmp_path / "out" / "result.json"
    res = runner.invoke(
        app,
        ["generate", "binomial:10,0.5", "--sample-size", "30", "--seed", "1", "--json", "--output", str(target)],
    )
    assert res.exit_code == 0
    payload = json.loads(res.stdout)
    assert payload["sample_size"] == 30
    assert payload["parameters"] == {"type": "binomial", "n": 10, "p": 0.5}
    assert json.loads(target.read_text()) == payload


def test_generate_table_output():
    res = runner.invoke(app, ["generate", "uniform:3,5", "--sample-size", "40", "--intervals", "4", "--seed", "2"])
    assert res.exit_code == 0
    assert "Uniform: [3.00, 5.00]" in res.stdout
    assert "Frequencies" in res.stdout


def test_classify_json_report():
    res = runner.invoke(
        app,
        [
            "classify",
            "--class1", "normal:0,1",
            "--class2", "normal:2,1",
            "--samples-per-class", "200",
            "--seed", "3",
            "--mode", "analytic",
            "--json",
        ],
    )
    assert res.exit_code == 0
    report = json.loads(res.stdout)
    assert report["p1"] == 0.5 and report["p2"] == 0.5
    assert report["theoretical"]["mode"] == "analytic"
    assert report["theoretical"]["intersection_points"] == [pytest.approx(1.0, abs=1e-2)]
    assert report["theoretical"]["total_error"] == pytest.approx(0.1587, abs=1e-3)
    assert report["empirical"]["total_samples"] == 400


def test_classify_discrete_skips_theoretical():
    res = runner.invoke(
        app,
        ["classify", "--class1", "binomial:10,0.3", "--class2", "binomial:10,0.7", "--samples-per-class", "50"],
    )
    assert res.exit_code == 0
    assert "Empirical error" in res.stdout
    assert "Total theoretical error" not in res.stdout


def test_estimate_from_summary_statistics():
    res = runner.invoke(app, ["estimate", "--mean", "5", "--sigma", "1", "--size", "100", "--json"])
    assert res.exit_code == 0
    payload = json.loads(res.stdout)
    assert payload["sigma_known"]["center"] == pytest.approx(5.0)
    assert payload["sigma_known"]["width"] < payload["sigma_unknown"]["width"]


def test_estimate_requires_inputs():
    res = runner.invoke(app, ["estimate", "--mean", "5"])
    assert res.exit_code != 0
    assert isinstance(res.exception, ConfigValidationError)


def test_estimate_from_sample_rejects_non_normal():
    res = runner.invoke(app, ["estimate", "--from-sample", "uniform:0,1"])
    assert isinstance(res.exception, ConfigValidationError)


def test_estimate_all_json():
    res = runner.invoke(app, ["estimate-all", "--sample-size", "100", "--seed", "4", "--json"])
    assert res.exit_code == 0
    payload = json.loads(res.stdout)
    assert payload["total_sample_size"] == 300
    assert payload["normal"]["distribution_name"] == "Normal"


@pytest.mark.parametrize(
    "argv, code",
    [
        (["generate", "uniform:5,3"], 2),
        (["generate", "cauchy:0,1"], 1),
        (["classify", "--class1", "normal:0,1", "--class2", "normal:2,1", "--p1", "0.7", "--p2", "0.7"], 1),
        (["estimate", "--mean", "0", "--sigma", "1", "--size", "1"], 2),
    ],
)
def test_main_maps_errors_to_exit_codes(monkeypatch, argv, code):
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr(sys, "argv", ["sie", *argv])
    with pytest.raises(typer.Exit) as excinfo:
        cli_main.main()
    assert excinfo.value.exit_code == code


def test_parse_pair():
    clf = batch_command.parse_pair("uniform:3,5; normal:5,1; 0.4", AnalysisDomain())
    assert clf.p1 == pytest.approx(0.4) and clf.p2 == pytest.approx(0.6)
    assert clf.class2 == NormalParameters(m=5.0, sigma=1.0)
    assert batch_command.parse_pair("normal:0,1;normal:2,1", AnalysisDomain()).p1 == 0.5
    with pytest.raises(ConfigValidationError):
        batch_command.parse_pair("normal:0,1", AnalysisDomain())
    with pytest.raises(ConfigValidationError):
        batch_command.parse_pair("normal:0,1;normal:2,1;half", AnalysisDomain())


def test_batch_json():
    res = runner.invoke(
        app,
        [
            "batch",
            "--pair", "uniform:3,5;normal:5,1",
            "--pair", "normal:0,1;normal:2,1;0.5",
            "--samples-per-class", "50",
            "--seed", "1",
            "--max-workers", "2",
            "--json",
        ],
    )
    assert res.exit_code == 0
    evaluations = json.loads(res.stdout)["evaluations"]
    assert [item["status"] for item in evaluations] == ["success", "success"]
    assert [item["index"] for item in evaluations] == [0, 1]


def test_batch_passes_max_workers_from_env(monkeypatch):
    seen = {}

    def fake_evaluate(classifiers, **kwargs):
        seen.update(kwargs)
        return []

    monkeypatch.setattr(batch_command, "evaluate_classifiers", fake_evaluate)
    monkeypatch.setenv("SIE_MAX_WORKERS", "3")
    res = runner.invoke(app, ["batch", "--pair", "normal:0,1;normal:2,1", "--json"])
    assert res.exit_code == 0
    assert seen["max_workers"] == 3
    assert json.loads(res.stdout) == {"evaluations": []}

    res = runner.invoke(app, ["batch", "--pair", "normal:0,1;normal:2,1", "--max-workers", "1", "--json"])
    assert seen["max_workers"] == 1


def test_batch_rejects_non_positive_workers(monkeypatch):
    monkeypatch.setenv("SIE_MAX_WORKERS", "0")
    res = runner.invoke(app, ["batch", "--pair", "normal:0,1;normal:2,1"])
    assert isinstance(res.exception, ConfigValidationError)
