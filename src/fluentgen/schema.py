from __future__ import annotations

import json
from pathlib import Path
from typing import List
import tomllib

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fluentgen.exceptions import SchemaError
from fluentgen.synthesis.model import FieldDecl, RecordSchema


class FieldDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type_hint: str = Field(default="object", alias="type")
    required: bool = False
    excluded: bool = False


class RecordDTO(BaseModel):
    name: str
    scope: str = ""
    kind: str = "record"
    imports: List[str] = []
    fields: List[FieldDTO] = []

    def to_schema(self) -> RecordSchema:
        return RecordSchema(
            name=self.name,
            scope=self.scope,
            kind=self.kind,
            imports=tuple(self.imports),
            fields=tuple(
                FieldDecl(
                    name=field.name,
                    type_hint=field.type_hint,
                    required=field.required,
                    excluded=field.excluded,
                )
                for field in self.fields
            ),
        )


class SchemaDocumentDTO(BaseModel):
    records: List[RecordDTO] = []


def parse_schema_document(payload: object) -> List[RecordSchema]:
    try:
        document = SchemaDocumentDTO.model_validate(payload)
    except ValidationError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc
    return [record.to_schema() for record in document.records]


def load_schema_document(path: Path) -> List[RecordSchema]:
    """Read a JSON or TOML schema document (chosen by file suffix)."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Failed to read {path}: {exc}") from exc
    try:
        if path.suffix == ".toml":
            payload: object = tomllib.loads(raw)
        else:
            payload = json.loads(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise SchemaError(f"Failed to parse {path}: {exc}") from exc
    return parse_schema_document(payload)
