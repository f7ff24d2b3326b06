from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fluentgen.config import generator_config, generator_defaults, merge_payload
from fluentgen.exceptions import FluentGenError
from fluentgen.schema import load_schema_document
from fluentgen.synthesis.generator import BuilderSynthesizer
from fluentgen.synthesis.model import (
    BatchReport,
    BuilderPlan,
    GeneratorConfig,
    RecordSchema,
)
from fluentgen.synthesis.sinks import DirectorySink, MemorySink

app = typer.Typer(add_completion=False)
console = Console(stderr=True)
logger = logging.getLogger(__name__)

_MARKERS_HELP = (
    "'error' rejects fields marked both required and excluded; "
    "'exclude' keeps them excluded."
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_config(
    root: Path,
    config: Optional[Path],
    overrides: dict[str, object],
) -> GeneratorConfig:
    defaults = generator_defaults(root=root, config_path=config)
    return generator_config(merge_payload(overrides, defaults))


def _load_or_exit(schema: Path) -> List[RecordSchema]:
    try:
        return load_schema_document(schema)
    except FluentGenError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _report_diagnostics(report: BatchReport) -> None:
    for diagnostic in report.diagnostics:
        typer.echo(f"{diagnostic.record}: {diagnostic.message}", err=True)


@app.command()
def generate(
    schema: Path = typer.Argument(..., help="JSON or TOML schema document."),
    out_dir: Optional[Path] = typer.Option(
        None, "--out-dir", help="Write modules under this directory instead of stdout."
    ),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    conflicting_markers: Optional[str] = typer.Option(
        None,
        "--conflicting-markers",
        help=_MARKERS_HELP,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    debug: bool = typer.Option(False, "--debug"),
) -> None:
    """Generate one builder module per record in SCHEMA."""
    setup_logging(verbose=verbose, debug=debug)
    resolved = _resolve_config(
        root, config, {"conflicting_markers": conflicting_markers}
    )
    records = _load_or_exit(schema)
    synthesizer = BuilderSynthesizer(config=resolved)
    if out_dir is not None:
        report = synthesizer.generate_batch(records, DirectorySink(out_dir))
        for unit in report.units:
            logger.info("wrote %s", unit.qualified_name)
    else:
        sink = MemorySink()
        report = synthesizer.generate_batch(records, sink)
        for unit in sink.ordered():
            typer.echo(f"# {unit.qualified_name}")
            typer.echo(unit.code)
    _report_diagnostics(report)
    if report.failed:
        raise typer.Exit(code=1)


def plan_payload(plan: BuilderPlan) -> dict[str, object]:
    fields = plan.fields
    return {
        "record": plan.record.name,
        "builder": plan.builder_name,
        "module": plan.module_name,
        "required": [field.name for field in fields.required],
        "optional": [field.name for field in fields.optional],
        "excluded": [field.name for field in fields.excluded],
        "states": [
            {
                "name": state.name,
                "missing": [
                    fields.required[pos].name for pos in state.node.missing_positions
                ],
                "transitions": {
                    transition.field.name: transition.target
                    for transition in state.transitions
                },
                "finish": state.finish,
            }
            for state in plan.states
        ],
    }


@app.command()
def plan(
    schema: Path = typer.Argument(..., help="JSON or TOML schema document."),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    conflicting_markers: Optional[str] = typer.Option(
        None,
        "--conflicting-markers",
        help=_MARKERS_HELP,
    ),
) -> None:
    """Print the builder-state lattice of each record as JSON."""
    setup_logging()
    resolved = _resolve_config(
        root, config, {"conflicting_markers": conflicting_markers}
    )
    synthesizer = BuilderSynthesizer(config=resolved)
    payloads: List[dict[str, object]] = []
    failed = False
    for record in _load_or_exit(schema):
        try:
            payloads.append(plan_payload(synthesizer.plan(record)))
        except FluentGenError as exc:
            typer.echo(f"{exc.record or record.name}: {exc}", err=True)
            failed = True
    typer.echo(json.dumps({"records": payloads}, indent=2))
    if failed:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
