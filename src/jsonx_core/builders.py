"""Builders and whole-document helpers layered on JSON."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Callable

from .codec import decode, encode
from .document import JSON, new_array, new_object, parse
from .errors import JSONXError, TypeMismatchError
from .values import JArray, JObject, Null, Value, to_native


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class Builder:
    """Fluent accumulator over an object (default) or an array.

    Usage::

        doc = (Builder()
               .add_string("name", "test")
               .add_int("age", 25)
               .add_bool("active", True)
               .build())

        arr = Builder.array().append_string("a").append_int(1).build()

    Keys are paths, so ``add_string("user.name", ...)`` nests.  The first
    failing call makes ``build()`` return a handle carrying its error.
    """

    def __init__(self, doc: JSON | None = None) -> None:
        self._doc = doc if doc is not None else new_object()

    @classmethod
    def array(cls) -> Builder:
        return cls(new_array())

    # -- Object mode ----------------------------------------------------

    def add_raw(self, key: str, value: Any) -> Builder:
        self._doc = self._doc.set(key, value)
        return self

    def add_string(self, key: str, value: str) -> Builder:
        return self.add_raw(key, str(value))

    def add_int(self, key: str, value: int) -> Builder:
        return self.add_raw(key, int(value))

    add_int64 = add_int

    def add_float(self, key: str, value: float) -> Builder:
        return self.add_raw(key, float(value))

    def add_bool(self, key: str, value: bool) -> Builder:
        return self.add_raw(key, bool(value))

    def add_object(self, key: str, value: JSON) -> Builder:
        return self.add_raw(key, value)

    def add_array(self, key: str, value: JSON) -> Builder:
        return self.add_raw(key, value)

    def add_null(self, key: str) -> Builder:
        return self.add_raw(key, None)

    def add_if(self, condition: bool, key: str, value: Any) -> Builder:
        if condition:
            self.add_raw(key, value)
        return self

    def add_string_if(self, condition: bool, key: str, value: str) -> Builder:
        if condition:
            self.add_string(key, value)
        return self

    def add_many(self, fields: Mapping[str, Any]) -> Builder:
        for key, value in fields.items():
            self.add_raw(key, value)
        return self

    # -- Array mode -----------------------------------------------------

    def append_raw(self, value: Any) -> Builder:
        self._doc = self._doc.append(value)
        return self

    def append_string(self, value: str) -> Builder:
        return self.append_raw(str(value))

    def append_int(self, value: int) -> Builder:
        return self.append_raw(int(value))

    def append_float(self, value: float) -> Builder:
        return self.append_raw(float(value))

    def append_bool(self, value: bool) -> Builder:
        return self.append_raw(bool(value))

    def append_object(self, value: JSON) -> Builder:
        return self.append_raw(value)

    def append_array(self, value: JSON) -> Builder:
        return self.append_raw(value)

    def append_null(self) -> Builder:
        return self.append_raw(None)

    def append_many(self, *values: Any) -> Builder:
        self._doc = self._doc.append(*values)
        return self

    # -- Output ---------------------------------------------------------

    def build(self) -> JSON:
        return self._doc

    def build_string(self) -> tuple[str, JSONXError | None]:
        return self._doc.to_text()

    def build_pretty_string(self) -> tuple[str, JSONXError | None]:
        return self._doc.to_pretty_text()


def new_builder() -> Builder:
    return Builder()


def new_array_builder() -> Builder:
    return Builder.array()


def quick_object(fields: Mapping[str, Any]) -> JSON:
    return Builder().add_many(fields).build()


def quick_array(*values: Any) -> JSON:
    return Builder.array().append_many(*values).build()


# ---------------------------------------------------------------------------
# TemplateBuilder
# ---------------------------------------------------------------------------

class TemplateBuilder:
    """Fill ``{{name}}`` placeholders in JSON text, then parse it.

    Each value is written as its JSON encoding, so strings arrive quoted
    and escaped::

        TemplateBuilder('{"user": {{name}}, "age": {{age}}}')
            .set("name", "Li").set("age", 30).build()
    """

    def __init__(self, template: str) -> None:
        self.template = template
        self.values: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> TemplateBuilder:
        self.values[key] = value
        return self

    def set_many(self, values: Mapping[str, Any]) -> TemplateBuilder:
        self.values.update(values)
        return self

    def build(self) -> JSON:
        text = self.template
        for key, value in self.values.items():
            try:
                replacement = json.dumps(_plain(value), ensure_ascii=False)
            except (TypeError, ValueError, JSONXError) as exc:
                return JSON._wrap(Null, TypeMismatchError(f"template value {key!r}: {exc}"))
            text = text.replace("{{" + key + "}}", replacement)
        return parse(text)


def _plain(value: Any) -> Any:
    if isinstance(value, JSON):
        return value.to_native()
    return value


# ---------------------------------------------------------------------------
# Whole-document helpers
# ---------------------------------------------------------------------------

def merge_all(*docs: JSON) -> JSON:
    """Shallow-merge left to right; the first error stops the fold."""
    if not docs:
        return new_object()
    result = docs[0].clone()
    for doc in docs[1:]:
        result = result.merge(doc)
        if result.error is not None:
            return result
    return result


def deep_merge_all(*docs: JSON) -> JSON:
    if not docs:
        return new_object()
    result = docs[0].clone()
    for doc in docs[1:]:
        result = result.deep_merge(doc)
        if result.error is not None:
            return result
    return result


def compare(a: JSON, b: JSON) -> bool:
    """Structural equality; False when either side carries an error."""
    if a.error is not None or b.error is not None:
        return False
    return a.value == b.value


def flatten(doc: JSON) -> dict[str, Any]:
    """Map dot paths to leaf values.

    Object keys and array indexes both become plain segments, so
    ``{"a": [{"b": 1}]}`` flattens to ``{"a.0.b": 1}``.  Empty objects and
    arrays produce no entry.  A scalar root maps the empty path to itself.
    """
    result: dict[str, Any] = {}
    if doc.error is not None:
        return result
    _flatten_into(doc.value, "", result)
    return result


def _flatten_into(value: Value, prefix: str, out: dict[str, Any]) -> None:
    if isinstance(value, JObject):
        for key, child in value.entries.items():
            _flatten_into(child, f"{prefix}.{key}" if prefix else key, out)
    elif isinstance(value, JArray):
        for i, child in enumerate(value.items):
            _flatten_into(child, f"{prefix}.{i}" if prefix else str(i), out)
    else:
        out[prefix] = to_native(value)


def unflatten(flat: Mapping[str, Any]) -> JSON:
    """Rebuild a tree by replaying every entry through ``set``.

    Integer-looking segments create arrays, so object keys such as ``"0"``
    do not survive a flatten/unflatten round trip.
    """
    if not flat:
        return new_object()
    result = JSON(None)
    for path, value in flat.items():
        result = result.set(path, value)
        if result.error is not None:
            return result
    return result


def transform(doc: JSON, fn: Callable[[str, JSON], Any]) -> JSON:
    return doc.map(fn)


def pick(doc: JSON, *fields: str) -> JSON:
    """New object with only *fields* (paths); absent fields are skipped.

    Picked values are shared with *doc*, not copied.
    """
    if doc.error is not None:
        return doc
    if not doc.is_object():
        return JSON._wrap(Null, TypeMismatchError("not an object"))
    result = new_object()
    for field in fields:
        if doc.has(field):
            result = result.set(field, doc.get(field).value)
    return result


def omit(doc: JSON, *fields: str) -> JSON:
    """Deep copy of *doc* without *fields* (paths); missing ones are ignored."""
    if doc.error is not None:
        return doc
    if not doc.is_object():
        return JSON._wrap(Null, TypeMismatchError("not an object"))
    result = doc.clone()
    for field in fields:
        deleted = result.delete(field)
        if deleted.error is None:
            result = deleted
    return result


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def pretty(text: str) -> tuple[str, JSONXError | None]:
    try:
        return encode(decode(text), pretty=True), None
    except JSONXError as exc:
        return "", exc


def minify(text: str) -> tuple[str, JSONXError | None]:
    try:
        return encode(decode(text)), None
    except JSONXError as exc:
        return "", exc


def is_valid(text: str) -> bool:
    return parse(text).error is None


def get_type(doc: JSON) -> str:
    if doc.is_object():
        return "object"
    if doc.is_array():
        return "array"
    if doc.is_string():
        return "string"
    if doc.is_number():
        return "number"
    if doc.is_bool():
        return "boolean"
    if doc.is_null():
        return "null"
    return "unknown"


def size(doc: JSON) -> int:
    """Byte length of the compact text (0 when it cannot be encoded)."""
    data, err = doc.to_bytes()
    if err is not None:
        return 0
    return len(data)


def depth(doc: JSON) -> int:
    """Nesting depth; scalars and empty containers are 0."""
    if doc.error is not None:
        return 0
    return _depth(doc.value, 0)


def _depth(value: Value, current: int) -> int:
    if isinstance(value, JObject):
        children = value.entries.values()
    elif isinstance(value, JArray):
        children = value.items
    else:
        return current
    deepest = current
    for child in children:
        deepest = max(deepest, _depth(child, current + 1))
    return deepest
