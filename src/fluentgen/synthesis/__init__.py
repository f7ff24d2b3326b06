"""Type-state builder synthesis for fluentgen."""

from fluentgen.synthesis.classify import classify_fields, validate_schema
from fluentgen.synthesis.construction import build_construction, default_value
from fluentgen.synthesis.emission import render_builder_module
from fluentgen.synthesis.generator import BuilderSynthesizer
from fluentgen.synthesis.lattice import enumerate_lattice
from fluentgen.synthesis.model import (
    BatchReport,
    BuilderPlan,
    ClassifiedFields,
    Diagnostic,
    FieldDecl,
    FieldSpec,
    GeneratorConfig,
    Lattice,
    LatticeNode,
    RecordSchema,
    Role,
    SourceUnit,
)
from fluentgen.synthesis.naming import state_name
from fluentgen.synthesis.sinks import DirectorySink, EmissionSink, MemorySink

__all__ = [
    "BatchReport",
    "BuilderPlan",
    "BuilderSynthesizer",
    "ClassifiedFields",
    "Diagnostic",
    "DirectorySink",
    "EmissionSink",
    "FieldDecl",
    "FieldSpec",
    "GeneratorConfig",
    "Lattice",
    "LatticeNode",
    "MemorySink",
    "RecordSchema",
    "Role",
    "SourceUnit",
    "build_construction",
    "classify_fields",
    "default_value",
    "enumerate_lattice",
    "render_builder_module",
    "state_name",
    "validate_schema",
]
