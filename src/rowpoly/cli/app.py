"""Typer CLI entrypoints."""

from __future__ import annotations

from typing import Annotated

import typer
from loguru import logger

from rowpoly.config.settings import load_settings
from rowpoly.core.context import InferenceContext
from rowpoly.examples import EXAMPLES, Example, find_example
from rowpoly.logging_utils import configure_logging

app = typer.Typer(name="rowpoly", help="Type inference for extensible records", add_completion=False)


def _run(example: Example, ctx: InferenceContext) -> bool:
    result = example.run(ctx)
    logger.debug("example.done name={} ok={}", example.name, result.ok)
    typer.echo(f"{example.name}: {example.expr} :: {result}")
    return result.ok


@app.command()
def examples(
    trace: Annotated[bool, typer.Option("--trace", help="Log every unification step")] = False,
) -> None:
    """Infer every built-in example expression."""
    settings = load_settings(trace=trace or None)
    configure_logging(profile="cli", log_filter="debug" if settings.trace else settings.log_filter)
    logger.info("examples.start count={}", len(EXAMPLES))
    for example in EXAMPLES:
        _run(example, InferenceContext.from_settings(settings))


@app.command()
def show(
    name: Annotated[str, typer.Argument(help="Example name, e.g. e4")],
    trace: Annotated[bool, typer.Option("--trace", help="Log every unification step")] = False,
) -> None:
    """Infer one built-in example; exit status 1 when it has no type."""
    settings = load_settings(trace=trace or None)
    configure_logging(profile="cli", log_filter="debug" if settings.trace else settings.log_filter)
    example = find_example(name)
    if example is None:
        typer.echo(f"unknown example: {name}", err=True)
        raise typer.Exit(2)
    if not _run(example, InferenceContext.from_settings(settings)):
        raise typer.Exit(1)


def main() -> None:
    app()
