"""A small structural schema checker for JSON handles.

Covers type, required keys, per-property and per-item schemas, string
length and number bounds.  Anything beyond that is left to a real JSON
Schema implementation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .document import JSON
from .errors import SchemaValidationError, TypeMismatchError


@dataclass
class Schema:
    type: str = ""  # object|array|string|number|boolean|null; "" accepts anything
    properties: dict[str, "Schema"] = field(default_factory=dict)
    items: "Schema | None" = None
    required: list[str] = field(default_factory=list)
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Schema":
        """Build a Schema from its JSON form (``minLength``, ``maxLength`` ...)."""
        if not isinstance(data, Mapping):
            raise TypeMismatchError("schema must be an object")
        props = data.get("properties") or {}
        items = data.get("items")
        return cls(
            type=data.get("type", ""),
            properties={k: cls.from_dict(v) for k, v in props.items()},
            items=cls.from_dict(items) if items is not None else None,
            required=list(data.get("required") or []),
            min_length=data.get("minLength"),
            max_length=data.get("maxLength"),
            minimum=data.get("minimum"),
            maximum=data.get("maximum"),
        )

    @classmethod
    def from_json(cls, doc: JSON) -> "Schema":
        mapping, err = doc.to_dict()
        if err is not None:
            raise err
        return cls.from_dict(mapping)

    def validate(self, doc: JSON) -> SchemaValidationError | None:
        """Return the first violation, or None when *doc* conforms."""
        return self._check(doc, "")

    def _check(self, doc: JSON, path: str) -> SchemaValidationError | None:
        where = path or "$"

        if self.type == "object":
            if not doc.is_object():
                return SchemaValidationError("expected object", where)
            for name in self.required:
                if not doc.has(name):
                    return SchemaValidationError(f"missing required field '{name}'", where)
            for name in sorted(self.properties):
                if doc.has(name):
                    child = f"{path}.{name}" if path else name
                    err = self.properties[name]._check(doc.get(name), child)
                    if err is not None:
                        return err

        elif self.type == "array":
            if not doc.is_array():
                return SchemaValidationError("expected array", where)
            if self.items is not None:
                for i in range(doc.length()):
                    err = self.items._check(doc.index(i), f"{where}[{i}]")
                    if err is not None:
                        return err

        elif self.type == "string":
            if not doc.is_string():
                return SchemaValidationError("expected string", where)
            n = doc.length()
            if self.min_length is not None and n < self.min_length:
                return SchemaValidationError("string too short", where)
            if self.max_length is not None and n > self.max_length:
                return SchemaValidationError("string too long", where)

        elif self.type == "number":
            if not doc.is_number():
                return SchemaValidationError("expected number", where)
            num = doc.as_float()
            if self.minimum is not None and num < self.minimum:
                return SchemaValidationError("number too small", where)
            if self.maximum is not None and num > self.maximum:
                return SchemaValidationError("number too large", where)

        elif self.type == "boolean":
            if not doc.is_bool():
                return SchemaValidationError("expected boolean", where)

        elif self.type == "null":
            if not doc.is_null():
                return SchemaValidationError("expected null", where)

        return None
