from __future__ import annotations

from pathlib import Path

import pytest

from fluentgen.exceptions import EmissionError
from fluentgen.synthesis.generator import BuilderSynthesizer
from fluentgen.synthesis.model import FieldDecl, SourceUnit
from fluentgen.synthesis.sinks import DirectorySink, MemorySink
from tests.builder_helpers import opt, record, req


def test_batch_continues_past_usage_errors() -> None:
    sink = MemorySink()
    report = BuilderSynthesizer().generate_batch(
        [
            record("Good", req("a")),
            record("NotARecord", req("a"), kind="enum"),
            record("AlsoGood", opt("b")),
        ],
        sink,
    )
    assert [unit.record for unit in report.units] == ["Good", "AlsoGood"]
    assert sorted(sink.units) == ["also_good_builder", "good_builder"]
    assert report.failed
    assert len(report.diagnostics) == 1
    diagnostic = report.diagnostics[0]
    assert diagnostic.record == "NotARecord"
    assert diagnostic.kind == "usage"
    assert diagnostic.message == "@fluent_builder can only be applied to records"


def test_batch_reports_schema_problems_per_record() -> None:
    report = BuilderSynthesizer().generate_batch(
        [
            record("Dup", req("a"), opt("a")),
            record("Both", FieldDecl("x", "int", required=True, excluded=True)),
            record("Hint", req("x", "dict[")),
        ],
        MemorySink(),
    )
    assert [(d.record, d.kind) for d in report.diagnostics] == [
        ("Dup", "ambiguity"),
        ("Both", "ambiguity"),
        ("Hint", "schema"),
    ]
    assert report.units == []


def test_batch_without_problems_succeeds() -> None:
    report = BuilderSynthesizer().generate_batch([record("A", req("x"))], MemorySink())
    assert not report.failed
    assert report.diagnostics == []


def test_memory_sink_rejects_name_collisions() -> None:
    sink = MemorySink()
    report = BuilderSynthesizer().generate_batch(
        [record("Pair", req("a"), scope="pkg"), record("Pair", req("b"), scope="pkg")],
        sink,
    )
    assert len(report.units) == 1
    assert [(d.record, d.kind) for d in report.diagnostics] == [("Pair", "emission")]
    assert "pkg.pair_builder" in report.diagnostics[0].message


def test_directory_sink_writes_under_scope(tmp_path: Path) -> None:
    sink = DirectorySink(tmp_path)
    report = BuilderSynthesizer().generate_batch(
        [record("Pair", req("a"), scope="example.models")], sink
    )
    target = tmp_path / "example" / "models" / "pair_builder.py"
    assert sink.written == [target]
    assert target.read_text(encoding="utf-8") == report.units[0].code


def test_directory_sink_wraps_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "example"
    blocker.write_text("not a directory", encoding="utf-8")
    sink = DirectorySink(tmp_path)
    unit = SourceUnit(
        record="Pair",
        scope="example",
        module_name="pair_builder",
        builder_name="PairBuilder",
        code="",
    )
    with pytest.raises(EmissionError) as info:
        sink.emit(unit)
    assert info.value.record == "Pair"
    assert isinstance(info.value.__cause__, OSError)


def test_emission_error_aborts_only_that_schema(tmp_path: Path) -> None:
    (tmp_path / "broken").write_text("", encoding="utf-8")
    report = BuilderSynthesizer().generate_batch(
        [record("A", req("x"), scope="broken"), record("B", req("y"), scope="fine")],
        DirectorySink(tmp_path),
    )
    assert [unit.record for unit in report.units] == ["B"]
    assert [(d.record, d.kind) for d in report.diagnostics] == [("A", "emission")]
    assert (tmp_path / "fine" / "b_builder.py").exists()


def test_directory_sink_refuses_module_scope(tmp_path: Path) -> None:
    (tmp_path / "example").mkdir()
    (tmp_path / "example" / "notes.py").write_text("class Note: ...\n", encoding="utf-8")
    report = BuilderSynthesizer().generate_batch(
        [record("Note", req("id"), scope="example.notes")], DirectorySink(tmp_path)
    )
    assert report.units == []
    assert [(d.record, d.kind) for d in report.diagnostics] == [("Note", "emission")]
    assert "not a package" in report.diagnostics[0].message
    assert not (tmp_path / "example" / "notes").exists()
