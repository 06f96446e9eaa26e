"""JSON tree node types with typed accessors."""

import json
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from numbers import Number
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union


class JSONTreeError(ValueError):
    """Raised when a tree value is missing or cannot be narrowed to a requested type."""


def wrap(value: Any) -> Any:
    """
    Normalize a Python value for storage in a tree node.

    Mappings become JSONObject and lists or tuples become JSONArray, recursively.
    Tree nodes and every other value are returned unchanged.
    """
    if isinstance(value, (JSONObject, JSONArray)):
        return value
    if isinstance(value, Mapping):
        return JSONObject.from_dict(value)
    if isinstance(value, (list, tuple)):
        return JSONArray.from_list(value)
    return value


def unwrap(value: Any) -> Any:
    """Convert tree nodes back to plain dicts and lists, recursively."""
    if isinstance(value, JSONObject):
        return value.to_dict()
    if isinstance(value, JSONArray):
        return value.to_list()
    return value


def _encode_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class _TypedAccessors:
    """Typed accessors shared by object nodes (by key) and array nodes (by index)."""

    def get(self, locator: Any) -> Any:
        raise NotImplementedError

    def _describe(self, locator: Any) -> str:
        raise NotImplementedError

    def _narrow(self, locator: Any, expected: str, narrow: Callable[[Any], Any]) -> Any:
        value = self.get(locator)
        try:
            return narrow(value)
        except (TypeError, ValueError, ArithmeticError, InvalidOperation) as e:
            raise JSONTreeError(
                f"{self._describe(locator)} is not {expected}: {value!r}"
            ) from e

    def get_string(self, locator: Any) -> str:
        """Get a text value."""
        return self._narrow(locator, "a string", _narrow_string)

    def get_boolean(self, locator: Any) -> bool:
        """Get a boolean value; "true" and "false" text is accepted."""
        return self._narrow(locator, "a boolean", _narrow_boolean)

    def get_int(self, locator: Any) -> int:
        """Get an integer value; numbers are truncated toward zero."""
        return self._narrow(locator, "an int", _narrow_int)

    def get_float(self, locator: Any) -> float:
        """Get a floating point value."""
        return self._narrow(locator, "a float", _narrow_float)

    def get_decimal(self, locator: Any) -> Decimal:
        """Get an arbitrary-precision decimal value."""
        return self._narrow(locator, "a decimal", _narrow_decimal)

    def get_number(self, locator: Any) -> Number:
        """Get a number; numeric text is parsed to int or Decimal."""
        return self._narrow(locator, "a number", _narrow_number)

    def get_json_object(self, locator: Any) -> "JSONObject":
        """Get a nested object node."""
        return self._narrow(locator, "a JSONObject", _narrow_object)

    def get_json_array(self, locator: Any) -> "JSONArray":
        """Get a nested array node."""
        return self._narrow(locator, "a JSONArray", _narrow_array)


def _narrow_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise TypeError("not a string")


def _narrow_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() == "true":
            return True
        if value.lower() == "false":
            return False
    raise ValueError("not a boolean")


def _narrow_int(value: Any) -> int:
    if _is_number(value):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return int(Decimal(value))
    raise TypeError("not a number")


def _narrow_float(value: Any) -> float:
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise TypeError("not a number")


def _narrow_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if _is_number(value) or isinstance(value, str):
        return Decimal(str(value))
    raise TypeError("not a number")


def _narrow_number(value: Any) -> Number:
    if _is_number(value):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return Decimal(value)
    raise TypeError("not a number")


def _narrow_object(value: Any) -> "JSONObject":
    if isinstance(value, JSONObject):
        return value
    raise TypeError("not an object node")


def _narrow_array(value: Any) -> "JSONArray":
    if isinstance(value, JSONArray):
        return value
    raise TypeError("not an array node")


class JSONObject(_TypedAccessors):
    """
    JSON object node.

    Keys are text and iterate in insertion order. Putting None removes a key,
    so an object node never stores an explicit null.
    """

    def __init__(self, values: Optional[Mapping] = None):
        """
        Initialize the object node.

        Args:
            values: Optional mapping whose entries are copied into the node
        """
        self._values: Dict[str, Any] = {}
        for key, value in (values or {}).items():
            self.put(key, value)

    @classmethod
    def from_dict(cls, values: Mapping) -> "JSONObject":
        """Build an object node from a mapping, wrapping nested containers."""
        return cls(values)

    @classmethod
    def parse(cls, text: str) -> "JSONObject":
        """
        Parse JSON text whose root is an object.

        Raises:
            JSONTreeError: If the text is not valid JSON or its root is not an object
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise JSONTreeError(f"Invalid JSON: {e.msg} at line {e.lineno}, column {e.colno}") from e
        if not isinstance(data, dict):
            raise JSONTreeError(f"JSON root must be an object, got {type(data).__name__}")
        return cls.from_dict(data)

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str) -> Any:
        """
        Get the value stored under key.

        Raises:
            JSONTreeError: If the key is not present
        """
        try:
            return self._values[key]
        except KeyError:
            raise JSONTreeError(f"JSONObject[{key!r}] not found") from None

    def opt(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def put(self, key: str, value: Any) -> "JSONObject":
        if not isinstance(key, str):
            raise JSONTreeError(f"JSONObject keys must be text, got {type(key).__name__}")
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = wrap(value)
        return self

    def remove(self, key: str) -> Any:
        return self._values.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._values.items())

    def to_dict(self) -> Dict[str, Any]:
        return {key: unwrap(value) for key, value in self._values.items()}

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False, default=_encode_default)

    def _describe(self, key: Any) -> str:
        return f"JSONObject[{key!r}]"

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JSONObject):
            return self._values == other._values
        if isinstance(other, dict):
            return self.to_dict() == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"JSONObject({self.to_dict()!r})"


class JSONArray(_TypedAccessors):
    """JSON array node."""

    def __init__(self, values: Optional[Union[list, tuple]] = None):
        """
        Initialize the array node.

        Args:
            values: Optional sequence whose items are appended in order
        """
        self._values: List[Any] = []
        for value in values or ():
            self.append(value)

    @classmethod
    def from_list(cls, values: Union[list, tuple]) -> "JSONArray":
        """Build an array node from a list, wrapping nested containers."""
        return cls(values)

    @classmethod
    def parse(cls, text: str) -> "JSONArray":
        """
        Parse JSON text whose root is an array.

        Raises:
            JSONTreeError: If the text is not valid JSON or its root is not an array
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise JSONTreeError(f"Invalid JSON: {e.msg} at line {e.lineno}, column {e.colno}") from e
        if not isinstance(data, list):
            raise JSONTreeError(f"JSON root must be an array, got {type(data).__name__}")
        return cls.from_list(data)

    def get(self, index: int) -> Any:
        """
        Get the value stored at index.

        Raises:
            JSONTreeError: If the index is out of range
        """
        if not 0 <= index < len(self._values):
            raise JSONTreeError(f"JSONArray[{index}] not found")
        return self._values[index]

    def opt(self, index: int, default: Any = None) -> Any:
        if 0 <= index < len(self._values):
            return self._values[index]
        return default

    def append(self, value: Any) -> "JSONArray":
        self._values.append(wrap(value))
        return self

    put = append

    def length(self) -> int:
        return len(self._values)

    def to_list(self) -> List[Any]:
        return [unwrap(value) for value in self._values]

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_list(), indent=indent, ensure_ascii=False, default=_encode_default)

    def _describe(self, index: Any) -> str:
        return f"JSONArray[{index}]"

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JSONArray):
            return self._values == other._values
        if isinstance(other, list):
            return self.to_list() == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"JSONArray({self.to_list()!r})"
