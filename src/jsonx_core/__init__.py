"""jsonx-core — dynamic JSON values with dot-path access and sticky errors."""

import logging

from .document import (
    JSON,
    from_dict,
    from_list,
    from_struct,
    new_array,
    new_object,
    parse,
    parse_bytes,
)
from .values import (
    Null,
    Value,
    JArray,
    JBool,
    JNumber,
    JObject,
    JString,
    _NullType,
)
from .builders import (
    Builder,
    TemplateBuilder,
    compare,
    deep_merge_all,
    depth,
    flatten,
    get_type,
    is_valid,
    merge_all,
    minify,
    new_array_builder,
    new_builder,
    omit,
    pick,
    pretty,
    quick_array,
    quick_object,
    size,
    transform,
    unflatten,
)
from .schema import Schema
from .config import Settings, configure, get_settings
from .errors import (
    EncodeError,
    IndexOutOfRangeError,
    InvalidIndexError,
    JSONXError,
    ParseError,
    PathNotFoundError,
    SchemaValidationError,
    TypeMismatchError,
)
from .repl import JSONRepl

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "JSON",
    "parse",
    "parse_bytes",
    "new_object",
    "new_array",
    "from_dict",
    "from_list",
    "from_struct",
    "Null",
    "Value",
    "JArray",
    "JBool",
    "JNumber",
    "JObject",
    "JString",
    "_NullType",
    "Builder",
    "TemplateBuilder",
    "new_builder",
    "new_array_builder",
    "quick_object",
    "quick_array",
    "merge_all",
    "deep_merge_all",
    "compare",
    "flatten",
    "unflatten",
    "transform",
    "pick",
    "omit",
    "pretty",
    "minify",
    "is_valid",
    "get_type",
    "size",
    "depth",
    "Schema",
    "Settings",
    "configure",
    "get_settings",
    "JSONXError",
    "ParseError",
    "PathNotFoundError",
    "IndexOutOfRangeError",
    "TypeMismatchError",
    "InvalidIndexError",
    "EncodeError",
    "SchemaValidationError",
    "JSONRepl",
]
