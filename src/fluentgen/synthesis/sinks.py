from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Protocol

from fluentgen.exceptions import EmissionError
from fluentgen.synthesis.model import SourceUnit


class EmissionSink(Protocol):
    def emit(self, unit: SourceUnit) -> None: ...


@dataclass
class MemorySink:
    """Collects generated units in memory, keyed by qualified module name."""

    units: Dict[str, SourceUnit] = field(default_factory=dict)

    def emit(self, unit: SourceUnit) -> None:
        key = unit.qualified_name
        if key in self.units:
            raise EmissionError(
                f"Generated module '{key}' is already registered", record=unit.record
            )
        self.units[key] = unit

    def ordered(self) -> List[SourceUnit]:
        return [self.units[key] for key in sorted(self.units)]


@dataclass
class DirectorySink:
    """Writes each unit into its scope package under ``root``.

    The scope must be a package; a sibling ``<scope>.py`` module would shadow
    the directory the builder is written to.
    """

    root: Path
    written: List[Path] = field(default_factory=list)

    def target_for(self, unit: SourceUnit) -> Path:
        parts = unit.scope.split(".") if unit.scope else []
        return self.root.joinpath(*parts, f"{unit.module_name}.py")

    def emit(self, unit: SourceUnit) -> None:
        path = self.target_for(unit)
        shadow = path.parent.with_suffix(".py")
        if unit.scope and shadow.is_file():
            raise EmissionError(
                f"Scope '{unit.scope}' is the module {shadow}, not a package; "
                f"cannot place '{unit.module_name}' inside it",
                record=unit.record,
            )
        if path in self.written:
            raise EmissionError(
                f"Generated module '{unit.qualified_name}' was already written this run",
                record=unit.record,
            )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(unit.code, encoding="utf-8")
        except OSError as exc:
            raise EmissionError(
                f"Failed to write {path}: {exc}", record=unit.record
            ) from exc
        self.written.append(path)
