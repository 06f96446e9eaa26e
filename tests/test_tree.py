"""Tests for JSON tree nodes."""

import pytest
from decimal import Decimal

from json_processor.tree import JSONObject, JSONArray, JSONTreeError, wrap, unwrap


class TestJSONObject:
    """Tests for JSONObject class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.node = JSONObject({
            "name": "Alice",
            "age": 30,
            "ratio": 0.5,
            "flag": "true",
            "nested": {"a": 1},
            "items": [1, 2],
        })

    def test_nested_containers_are_wrapped(self):
        """Test that nested dicts and lists become tree nodes."""
        assert isinstance(self.node.get("nested"), JSONObject)
        assert isinstance(self.node.get("items"), JSONArray)

    def test_keys_keep_insertion_order(self):
        """Test key order."""
        assert self.node.keys() == ["name", "age", "ratio", "flag", "nested", "items"]

    def test_get_missing_key_raises(self):
        """Test that reading a missing key fails."""
        with pytest.raises(JSONTreeError, match="missing"):
            self.node.get("missing")

    def test_opt_returns_default(self):
        """Test optional reads."""
        assert self.node.opt("missing") is None
        assert self.node.opt("missing", 5) == 5
        assert self.node.opt("age") == 30

    def test_put_none_removes_key(self):
        """Test that None is never stored."""
        self.node.put("name", None)
        assert not self.node.has("name")
        assert "name" not in self.node

    def test_put_rejects_non_text_key(self):
        """Test key type check."""
        with pytest.raises(JSONTreeError):
            self.node.put(1, "x")

    def test_put_is_chainable(self):
        """Test fluent put."""
        node = JSONObject().put("a", 1).put("b", 2)
        assert node == {"a": 1, "b": 2}

    def test_remove(self):
        """Test key removal."""
        assert self.node.remove("age") == 30
        assert self.node.remove("age") is None
        assert len(self.node) == 5

    def test_typed_accessors(self):
        """Test narrowing accessors."""
        assert self.node.get_string("name") == "Alice"
        assert self.node.get_int("age") == 30
        assert self.node.get_float("age") == 30.0
        assert self.node.get_decimal("ratio") == Decimal("0.5")
        assert self.node.get_boolean("flag") is True
        assert self.node.get_json_object("nested").get_int("a") == 1
        assert self.node.get_json_array("items").length() == 2

    def test_accessor_type_mismatch(self):
        """Test that mismatched accessors raise JSONTreeError."""
        with pytest.raises(JSONTreeError, match="not a string"):
            self.node.get_string("age")
        with pytest.raises(JSONTreeError, match="not a JSONObject"):
            self.node.get_json_object("items")
        with pytest.raises(JSONTreeError, match="not a JSONArray"):
            self.node.get_json_array("nested")

    def test_to_dict_unwraps(self):
        """Test conversion back to plain values."""
        data = self.node.to_dict()
        assert type(data["nested"]) is dict
        assert type(data["items"]) is list

    def test_parse_and_to_json(self):
        """Test text round trip."""
        node = JSONObject.parse('{"b": 1, "a": [true, null]}')
        assert node.keys() == ["b", "a"]
        assert node.to_json() == '{"b": 1, "a": [true, null]}'

    def test_parse_drops_null_members(self):
        """Test that null members are not stored."""
        node = JSONObject.parse('{"a": null, "b": 1}')
        assert node.keys() == ["b"]

    def test_parse_invalid(self):
        """Test parse failures."""
        with pytest.raises(JSONTreeError, match="Invalid JSON"):
            JSONObject.parse('{"a": ')
        with pytest.raises(JSONTreeError, match="must be an object"):
            JSONObject.parse('[1, 2]')

    def test_to_json_encodes_decimal(self):
        """Test Decimal encoding."""
        assert JSONObject({"d": Decimal("1.5")}).to_json() == '{"d": 1.5}'

    def test_equality(self):
        """Test node equality."""
        assert JSONObject({"a": [1]}) == JSONObject({"a": [1]})
        assert JSONObject({"a": [1]}) == {"a": [1]}
        assert JSONObject({"a": 1}) != JSONObject({"a": 2})


class TestJSONArray:
    """Tests for JSONArray class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.array = JSONArray(["x", 1, 2.5, False, {"k": "v"}, [1]])

    def test_length_and_iteration(self):
        """Test size and order."""
        assert self.array.length() == 6
        assert len(self.array) == 6
        assert list(self.array)[:2] == ["x", 1]

    def test_get_out_of_range(self):
        """Test index bounds."""
        with pytest.raises(JSONTreeError, match=r"JSONArray\[6\]"):
            self.array.get(6)
        with pytest.raises(JSONTreeError):
            self.array.get(-1)

    def test_opt(self):
        """Test optional reads."""
        assert self.array.opt(0) == "x"
        assert self.array.opt(10, "d") == "d"

    def test_typed_accessors(self):
        """Test narrowing accessors by index."""
        assert self.array.get_string(0) == "x"
        assert self.array.get_int(1) == 1
        assert self.array.get_float(2) == 2.5
        assert self.array.get_boolean(3) is False
        assert self.array.get_json_object(4).get_string("k") == "v"
        assert self.array.get_json_array(5).get_int(0) == 1

    def test_append_and_put_alias(self):
        """Test appending values."""
        array = JSONArray().append(1).put({"a": 2})
        assert array.length() == 2
        assert isinstance(array.get(1), JSONObject)

    def test_parse(self):
        """Test parsing array text."""
        assert JSONArray.parse("[1, 2]") == [1, 2]
        with pytest.raises(JSONTreeError, match="must be an array"):
            JSONArray.parse('{"a": 1}')

    def test_to_json(self):
        """Test serialization with indentation."""
        assert JSONArray([1, "a"]).to_json() == '[1, "a"]'
        assert JSONArray([1]).to_json(indent=2) == "[\n  1\n]"


class TestNarrowing:
    """Tests for scalar narrowing rules."""

    def test_int_from_numbers_and_text(self):
        """Test integer narrowing."""
        node = JSONObject({"i": 42, "f": 42.9, "s": "42", "d": "42.7", "bad": "abc", "b": True})
        assert node.get_int("i") == 42
        assert node.get_int("f") == 42
        assert node.get_int("s") == 42
        assert node.get_int("d") == 42
        with pytest.raises(JSONTreeError):
            node.get_int("bad")
        with pytest.raises(JSONTreeError):
            node.get_int("b")

    def test_boolean_from_text(self):
        """Test boolean narrowing."""
        node = JSONObject({"t": "TRUE", "f": "false", "n": 1})
        assert node.get_boolean("t") is True
        assert node.get_boolean("f") is False
        with pytest.raises(JSONTreeError):
            node.get_boolean("n")

    def test_number_from_text(self):
        """Test generic number narrowing."""
        node = JSONObject({"i": "7", "d": "7.25", "n": 3.5})
        assert node.get_number("i") == 7
        assert node.get_number("d") == Decimal("7.25")
        assert node.get_number("n") == 3.5

    def test_float_rejects_text_garbage(self):
        """Test float narrowing failure."""
        with pytest.raises(JSONTreeError, match="not a float"):
            JSONObject({"x": "abc"}).get_float("x")


class TestWrapUnwrap:
    """Tests for wrap and unwrap helpers."""

    def test_wrap(self):
        """Test normalization of plain values."""
        assert isinstance(wrap({"a": 1}), JSONObject)
        assert isinstance(wrap((1, 2)), JSONArray)
        assert wrap("text") == "text"
        node = JSONObject()
        assert wrap(node) is node

    def test_unwrap(self):
        """Test conversion of nodes to plain values."""
        assert unwrap(JSONObject({"a": [1]})) == {"a": [1]}
        assert unwrap(JSONArray([{"a": 1}])) == [{"a": 1}]
        assert unwrap(5) == 5
