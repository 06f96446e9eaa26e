"""Helpers for building and reading JSON trees by hand."""

from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from ..tree import JSONArray, JSONObject, JSONTreeError

E = TypeVar("E")
K = TypeVar("K")
V = TypeVar("V")


class JSONTools:
    """
    Utility class for converting between plain collections and tree nodes.

    Extractors receive the node and a key or index, so the typed accessors
    can be passed unbound, e.g. ``JSONTools.to_list(array, JSONArray.get_int)``.
    """

    @staticmethod
    def to_json_array(values: Iterable[E], element_mapper: Optional[Callable[[E], Any]] = None) -> JSONArray:
        """
        Build an array node from an iterable.

        Args:
            values: Elements in order
            element_mapper: Optional function applied to every element first

        Returns:
            JSONArray of the (mapped) elements
        """
        array = JSONArray()
        for value in values:
            array.append(element_mapper(value) if element_mapper else value)
        return array

    @staticmethod
    def to_json_object(values: Mapping[K, Any], key_mapper: Optional[Callable[[K], str]] = None) -> JSONObject:
        """
        Build an object node from a mapping.

        Args:
            values: Mapping to copy
            key_mapper: Optional function turning each key into text

        Returns:
            JSONObject in the mapping's iteration order

        Raises:
            JSONTreeError: If a key is not text and no key_mapper is given
        """
        node = JSONObject()
        for key, value in values.items():
            node.put(key_mapper(key) if key_mapper else key, value)
        return node

    @staticmethod
    def to_list(array: JSONArray, extractor: Callable[[JSONArray, int], E]) -> List[E]:
        """Extract every element of an array node in order."""
        return [extractor(array, index) for index in range(array.length())]

    @staticmethod
    def to_map(node: JSONObject, extractor: Callable[[JSONObject, str], V],
               key_mapper: Optional[Callable[[str], K]] = None) -> Dict[Union[K, str], V]:
        """
        Extract every entry of an object node.

        Args:
            node: Object node to read
            extractor: Function reading the value stored under a key
            key_mapper: Optional function turning each text key into a key object

        Returns:
            Dictionary in the node's key order
        """
        return {
            (key_mapper(key) if key_mapper else key): extractor(node, key)
            for key in node.keys()
        }

    @staticmethod
    def to_string_list(array: JSONArray) -> List[str]:
        return JSONTools.to_list(array, JSONArray.get_string)

    @staticmethod
    def to_boolean_list(array: JSONArray) -> List[bool]:
        return JSONTools.to_list(array, JSONArray.get_boolean)

    @staticmethod
    def to_int_list(array: JSONArray) -> List[int]:
        return JSONTools.to_list(array, JSONArray.get_int)

    @staticmethod
    def to_float_list(array: JSONArray) -> List[float]:
        return JSONTools.to_list(array, JSONArray.get_float)

    @staticmethod
    def to_decimal_list(array: JSONArray) -> List[Decimal]:
        return JSONTools.to_list(array, JSONArray.get_decimal)

    @staticmethod
    def to_enum_list(enum_type: Type[Enum], array: JSONArray) -> List[Enum]:
        """
        Extract enum constants stored by name.

        Raises:
            JSONTreeError: If an element does not name a constant of enum_type
        """
        def extract(node: JSONArray, index: int) -> Enum:
            name = node.get_string(index)
            try:
                return enum_type[name]
            except KeyError:
                raise JSONTreeError(f"JSONArray[{index}] is not a constant of {enum_type.__qualname__}") from None

        return JSONTools.to_list(array, extract)

    @staticmethod
    def for_each(node: Union[JSONArray, JSONObject], extractor: Callable[[Any, Any], E],
                 action: Callable[[E], Any]) -> None:
        """
        Apply action to every extracted value of an array (by index) or object (by key).
        """
        locators = range(node.length()) if isinstance(node, JSONArray) else node.keys()
        for locator in locators:
            action(extractor(node, locator))
