"""Tests for builders and whole-document helpers."""

import pytest

from jsonx_core import (
    JSON,
    Builder,
    TemplateBuilder,
    TypeMismatchError,
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
    new_object,
    omit,
    parse,
    pick,
    pretty,
    quick_array,
    quick_object,
    size,
    transform,
    unflatten,
)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class TestBuilder:
    def test_object_builder(self):
        doc = (
            new_builder()
            .add_string("name", "test")
            .add_int("age", 25)
            .add_int64("big", 2**40)
            .add_bool("active", True)
            .add_float("score", 98.5)
            .add_null("nothing")
            .build()
        )
        assert doc.get("name").as_string() == "test"
        assert doc.get("age").as_int() == 25
        assert doc.get("big").as_int64() == 2**40
        assert doc.get("score").as_float() == 98.5
        assert doc.get("nothing").is_null()

    def test_nested_keys_and_sub_documents(self):
        tags = quick_array("a", "b")
        doc = (
            Builder()
            .add_string("user.name", "Li")
            .add_object("user.meta", quick_object({"id": 7}))
            .add_array("user.tags", tags)
            .build()
        )
        assert doc.get("user.meta.id").as_int() == 7
        assert doc.get("user.tags.1").as_string() == "b"

    def test_conditional_adds(self):
        doc = (
            Builder()
            .add_if(True, "kept", 1)
            .add_if(False, "dropped", 2)
            .add_string_if(True, "s", "x")
            .add_string_if(False, "t", "y")
            .build()
        )
        assert doc.keys() == ["kept", "s"]

    def test_add_many(self):
        doc = Builder().add_many({"a": 1, "b.c": 2}).build()
        assert doc.to_native() == {"a": 1, "b": {"c": 2}}

    def test_array_builder(self):
        arr = (
            new_array_builder()
            .append_string("first")
            .append_int(42)
            .append_float(1.5)
            .append_bool(True)
            .append_null()
            .append_object(quick_object({"k": "v"}))
            .append_array(quick_array(1))
            .append_raw("raw")
            .build()
        )
        assert arr.to_native() == ["first", 42, 1.5, True, None, {"k": "v"}, [1], "raw"]

    def test_first_failure_sticks(self):
        b = Builder().add_string("a", "text").add_int("a.b", 1).add_int("c", 2)
        doc = b.build()
        assert isinstance(doc.error, TypeMismatchError)
        text, err = b.build_string()
        assert text == ""
        assert err is doc.error

    def test_append_in_object_mode_fails(self):
        assert Builder().append_int(1).build().error is not None

    def test_build_strings(self):
        b = Builder().add_int("a", 1)
        assert b.build_string() == ('{"a":1}', None)
        assert b.build_pretty_string() == ('{\n  "a": 1\n}', None)


def test_quick_object_and_array():
    obj = quick_object({"name": "test", "age": 30})
    assert obj.get("name").as_string() == "test"
    arr = quick_array("a", "b", "c")
    assert arr.length() == 3
    assert arr.index(0).as_string() == "a"


# ---------------------------------------------------------------------------
# TemplateBuilder
# ---------------------------------------------------------------------------

class TestTemplateBuilder:
    def test_placeholders(self):
        doc = (
            TemplateBuilder('{"name": {{name}}, "age": {{age}}, "ok": {{ok}}, "x": {{x}}}')
            .set("name", 'Li "the" first')
            .set_many({"age": 30, "ok": True, "x": None})
            .build()
        )
        assert doc.error is None
        assert doc.get("name").as_string() == 'Li "the" first'
        assert doc.get("age").as_int() == 30
        assert doc.get("ok").as_bool() is True
        assert doc.get("x").is_null()

    def test_unfilled_placeholder_is_parse_error(self):
        assert TemplateBuilder('{"a": {{missing}}}').build().error is not None

    def test_handle_values(self):
        doc = TemplateBuilder('{"inner": {{v}}}').set("v", quick_object({"k": 1})).build()
        assert doc.get("inner.k").as_int() == 1


# ---------------------------------------------------------------------------
# Merge helpers and compare
# ---------------------------------------------------------------------------

def test_merge_all():
    merged = merge_all(JSON({"a": 1}), JSON({"b": 2}), JSON({"a": 3}))
    assert merged.to_native() == {"a": 3, "b": 2}
    assert merge_all().to_native() == {}


def test_merge_all_stops_on_error():
    result = merge_all(JSON({"a": 1}), JSON([1]), JSON({"b": 2}))
    assert isinstance(result.error, TypeMismatchError)


def test_merge_all_leaves_first_untouched():
    first = JSON({"a": 1})
    merge_all(first, JSON({"b": 2}))
    assert first.to_native() == {"a": 1}


def test_deep_merge_all():
    merged = deep_merge_all(JSON({"a": {"x": 1}}), JSON({"a": {"y": 2}}), JSON({"a": {"z": 3}}))
    assert merged.to_native() == {"a": {"x": 1, "y": 2, "z": 3}}


def test_compare():
    assert compare(JSON({"a": [1, 2]}), parse('{"a": [1.0, 2]}'))
    assert not compare(JSON({"a": 1}), JSON({"a": 2}))
    assert not compare(parse("{"), parse("{"))


# ---------------------------------------------------------------------------
# Flatten / unflatten
# ---------------------------------------------------------------------------

class TestFlatten:
    def test_flatten(self):
        doc = JSON({"user": {"name": "Li", "tags": ["a", {"b": True}]}, "n": None})
        assert flatten(doc) == {
            "user.name": "Li",
            "user.tags.0": "a",
            "user.tags.1.b": True,
            "n": None,
        }

    def test_empty_containers_are_dropped(self):
        assert flatten(JSON({"a": {}, "b": [], "c": 1})) == {"c": 1}

    def test_scalar_root(self):
        assert flatten(JSON(5)) == {"": 5}

    def test_errored(self):
        assert flatten(parse("{")) == {}

    def test_unflatten(self):
        doc = unflatten({"a.b": 1, "a.c.0": "x", "a.c.1": "y"})
        assert doc.to_native() == {"a": {"b": 1, "c": ["x", "y"]}}

    def test_unflatten_out_of_order_indexes(self):
        doc = unflatten({"list.2": "c", "list.0": "a", "list.1": "b"})
        assert doc.to_native() == {"list": ["a", "b", "c"]}

    def test_unflatten_empty(self):
        assert unflatten({}).to_native() == {}

    @pytest.mark.parametrize(
        "data",
        [
            {"a": {"b": [1, {"c": "d"}], "e": None}, "f": True},
            [{"x": 1}, [2, 3], "s"],
            {"deep": {"er": {"est": [[1], [2, [3]]]}}},
        ],
    )
    def test_round_trip(self, data):
        doc = JSON(data)
        assert compare(unflatten(flatten(doc)), doc)

    def test_integer_looking_keys_do_not_round_trip(self):
        doc = JSON({"a": {"0": "x"}})
        assert unflatten(flatten(doc)).to_native() == {"a": ["x"]}


# ---------------------------------------------------------------------------
# Pick / omit / transform
# ---------------------------------------------------------------------------

class TestPickOmit:
    def test_pick(self):
        src = JSON({"id": 1, "name": "x", "secret": "s"})
        picked = pick(src, "id", "name", "absent")
        assert picked.length() == 2
        assert not picked.has("secret")

    def test_pick_shares_sub_values(self):
        src = JSON({"profile": {"a": 1}})
        picked = pick(src, "profile")
        picked.set("profile.b", 2)
        assert src.has("profile.b")

    def test_pick_nested_path(self):
        picked = pick(JSON({"a": {"b": 1, "c": 2}}), "a.b")
        assert picked.to_native() == {"a": {"b": 1}}

    def test_pick_non_object(self):
        assert isinstance(pick(JSON([1]), "0").error, TypeMismatchError)

    def test_omit(self):
        src = JSON({"id": 1, "name": "x", "secret": {"k": "s"}})
        result = omit(src, "secret", "missing", "nope.deeper")
        assert result.to_native() == {"id": 1, "name": "x"}
        assert src.has("secret.k")

    def test_omit_is_deep_copy(self):
        src = JSON({"a": {"b": 1}})
        result = omit(src)
        result.set("a.b", 2)
        assert src.get("a.b").as_int() == 1

    def test_omit_non_object(self):
        assert isinstance(omit(JSON("s")).error, TypeMismatchError)


def test_transform():
    assert transform(JSON([1, 2]), lambda k, v: int(k)).to_native() == [0, 1]


# ---------------------------------------------------------------------------
# Text helpers and metrics
# ---------------------------------------------------------------------------

def test_pretty_and_minify():
    assert minify('{ "b" : 1, "a" : [ 1 , 2 ] }') == ('{"a":[1,2],"b":1}', None)
    assert pretty('{"a":1}') == ('{\n  "a": 1\n}', None)
    text, err = minify("{")
    assert text == ""
    assert err is not None


def test_is_valid():
    assert is_valid('{"a": 1}')
    assert is_valid("42")
    assert not is_valid("")
    assert not is_valid("{'a': 1}")


def test_get_type():
    assert get_type(JSON({})) == "object"
    assert get_type(JSON([])) == "array"
    assert get_type(JSON("")) == "string"
    assert get_type(JSON(1)) == "number"
    assert get_type(JSON(False)) == "boolean"
    assert get_type(JSON(None)) == "null"
    assert get_type(parse("{")) == "unknown"


def test_size():
    assert size(JSON({"a": 1})) == len('{"a":1}')
    assert size(JSON("é")) == 4
    assert size(parse("{")) == 0


def test_depth():
    assert depth(JSON(1)) == 0
    assert depth(JSON({})) == 0
    assert depth(JSON({"a": 1})) == 1
    assert depth(JSON({"a": {"b": [1]}})) == 3


def test_builder_on_existing_document():
    doc = new_object().set("a", 1)
    Builder(doc).add_int("b", 2)
    assert doc.to_native() == {"a": 1, "b": 2}
