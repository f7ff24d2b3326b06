from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from fluentgen.exceptions import (
    AmbiguityError,
    EmissionError,
    FluentGenError,
    LatticeTooLargeError,
    UsageError,
)
from fluentgen.synthesis.carrier import build_carrier
from fluentgen.synthesis.classify import classify_fields, validate_schema
from fluentgen.synthesis.construction import build_construction
from fluentgen.synthesis.emission import render_builder_module
from fluentgen.synthesis.lattice import enumerate_lattice
from fluentgen.synthesis.model import (
    BatchReport,
    BuilderPlan,
    Diagnostic,
    GeneratorConfig,
    RecordSchema,
    SourceUnit,
)
from fluentgen.synthesis.naming import builder_name, module_name
from fluentgen.synthesis.sinks import EmissionSink
from fluentgen.synthesis.states import plan_states

logger = logging.getLogger(__name__)


def _diagnostic_kind(exc: FluentGenError) -> str:
    if isinstance(exc, UsageError):
        return "usage"
    if isinstance(exc, EmissionError):
        return "emission"
    if isinstance(exc, AmbiguityError):
        return "ambiguity"
    if isinstance(exc, LatticeTooLargeError):
        return "lattice"
    return "schema"


@dataclass
class BuilderSynthesizer:
    config: GeneratorConfig = field(default_factory=GeneratorConfig)

    def plan(self, schema: RecordSchema) -> BuilderPlan:
        validate_schema(schema, self.config)
        fields = classify_fields(schema)
        lattice = enumerate_lattice(len(fields.required))
        carrier = build_carrier(fields)
        states = plan_states(fields, lattice, carrier)
        logger.debug(
            "%s: %d required, %d optional, %d excluded -> %d states",
            schema.name,
            len(fields.required),
            len(fields.optional),
            len(fields.excluded),
            len(states),
        )
        return BuilderPlan(
            record=schema,
            builder_name=builder_name(schema.name, self.config.builder_suffix),
            module_name=module_name(schema.name, self.config.builder_suffix),
            fields=fields,
            lattice=lattice,
            states=states,
            carrier=carrier,
            construction=build_construction(schema.name, fields),
            factory_name=self.config.factory_name,
            finish_name=self.config.finish_name,
        )

    def generate(self, schema: RecordSchema) -> SourceUnit:
        plan = self.plan(schema)
        return SourceUnit(
            record=schema.name,
            scope=schema.scope,
            module_name=plan.module_name,
            builder_name=plan.builder_name,
            code=render_builder_module(plan),
        )

    def generate_batch(
        self, schemas: Iterable[RecordSchema], sink: EmissionSink
    ) -> BatchReport:
        """Generate and emit every schema independently.

        A failing schema contributes one diagnostic and does not stop the
        rest of the batch.
        """
        report = BatchReport()
        for schema in schemas:
            try:
                unit = self.generate(schema)
                sink.emit(unit)
            except FluentGenError as exc:
                diagnostic = Diagnostic(
                    record=exc.record or schema.name,
                    kind=_diagnostic_kind(exc),
                    message=exc.message,
                )
                logger.warning("%s: %s", diagnostic.record, diagnostic.message)
                report.diagnostics.append(diagnostic)
                continue
            report.units.append(unit)
        return report
