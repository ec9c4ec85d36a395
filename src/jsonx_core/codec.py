"""Text codec: JSON text and native objects <-> Value trees."""

from __future__ import annotations

import dataclasses
import json
import logging
import math
from typing import Any

from .config import get_settings
from .errors import EncodeError, ParseError
from .values import Value, from_native, to_native

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _parse_number(raw: str) -> float:
    number = float(raw)
    if not math.isfinite(number):
        raise ParseError(f"number out of range: {raw}")
    return number


def _reject_constant(raw: str) -> Any:
    raise ParseError(f"invalid literal: {raw}")


def decode(text: str | bytes | bytearray) -> Value:
    """Parse JSON text into a Value.  Raises ParseError on malformed input.

    Numbers are read as 64-bit floats; NaN/Infinity literals and numbers
    that overflow a float are rejected.
    """
    try:
        data = json.loads(
            text,
            parse_int=_parse_number,
            parse_float=_parse_number,
            parse_constant=_reject_constant,
        )
    except ParseError:
        raise
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.debug("decode failed: %s", exc)
        raise ParseError(str(exc)) from exc
    except TypeError as exc:
        raise ParseError(f"cannot parse {type(text).__name__}") from exc
    except RecursionError as exc:
        raise ParseError("nesting too deep") from exc
    return from_native(data)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode(value: Value, *, pretty: bool = False) -> str:
    """Write *value* as compact (or indented) JSON text.

    Object keys are sorted unless the settings turn that off.
    """
    settings = get_settings()
    try:
        if pretty:
            return json.dumps(
                to_native(value),
                indent=settings.indent,
                sort_keys=settings.sort_keys,
                ensure_ascii=False,
                allow_nan=False,
            )
        return json.dumps(
            to_native(value),
            separators=(",", ":"),
            sort_keys=settings.sort_keys,
            ensure_ascii=False,
            allow_nan=False,
        )
    except ValueError as exc:
        raise EncodeError(str(exc)) from exc
    except RecursionError as exc:
        raise EncodeError("nesting too deep") from exc


# ---------------------------------------------------------------------------
# Struct capture
# ---------------------------------------------------------------------------

def _struct_default(obj: Any) -> Any:
    """json.dumps hook: dataclass instances become dicts.

    A field's JSON name comes from ``field(metadata={"json": "name"})``;
    ``"-"`` leaves the field out.  Fields without metadata keep their name.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out: dict[str, Any] = {}
        for f in dataclasses.fields(obj):
            name = f.metadata.get("json", f.name)
            if name == "-":
                continue
            out[name] = getattr(obj, f.name)
        return out
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def marshal_struct(obj: Any) -> str:
    try:
        return json.dumps(obj, default=_struct_default, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodeError(str(exc)) from exc


def struct_to_value(obj: Any) -> Value:
    """Marshal *obj* through the text codec and parse the result back."""
    return decode(marshal_struct(obj))
