"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys

import typer

from stat_inference_engine.cli.commands.batch import batch
from stat_inference_engine.cli.commands.classify import classify
from stat_inference_engine.cli.commands.estimate import estimate, estimate_all
from stat_inference_engine.cli.commands.generate import generate
from stat_inference_engine.exceptions import (
    ConfigError,
    InvalidParameterError,
    NumericDegenerateError,
    PersistenceError,
    UnsupportedVariantError,
)
from stat_inference_engine.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Statistical Inference Engine CLI")


app.command()(generate)
app.command()(classify)
app.command()(estimate)
app.command(name="estimate-all")(estimate_all)
app.command()(batch)


log = get_logger(__name__, component="cli")


def main() -> None:
    configure_logging(component="cli")
    try:
        app()
    except ConfigError as exc:
        log.error(str(exc))
        raise typer.Exit(code=1)
    except InvalidParameterError as exc:
        log.error(f"Invalid parameters: {exc}")
        raise typer.Exit(code=2)
    except NumericDegenerateError as exc:
        log.error(f"Numeric failure: {exc}")
        raise typer.Exit(code=3)
    except UnsupportedVariantError as exc:
        log.error(f"Unsupported distribution: {exc}")
        raise typer.Exit(code=4)
    except PersistenceError as exc:
        log.error(f"Storage failure: {exc}")
        raise typer.Exit(code=5)
    except KeyboardInterrupt:
        log.info("Shutdown requested")
        raise typer.Exit(code=130)
    except Exception:
        log.exception("Unhandled exception")
        raise typer.Exit(code=255)


if __name__ == "__main__":
    sys.exit(main())
