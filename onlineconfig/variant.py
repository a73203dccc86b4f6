"""A tagged value holding a bool, int, float or string, and its JSON form."""

from __future__ import annotations

from typing import Any, Union

Value = Union[bool, int, float, str]

_TYPE_NAMES = ("bool", "int", "float", "string")


def _index_of(value: Value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return 1
    if isinstance(value, float):
        return 2
    if isinstance(value, str):
        return 3
    raise TypeError(f"unsupported variant value type: {type(value).__name__}")


class Variant:
    """An optional value of one of four types: bool, int, float or str.

    An empty variant reports type index 0, as a default-constructed
    alternative set would.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Value | None = None) -> None:
        if value is not None:
            _index_of(value)
        self._value = value

    @property
    def value(self) -> Value | None:
        """The held value, or None when empty."""
        return self._value

    def is_empty(self) -> bool:
        return self._value is None

    def type_index(self) -> int:
        return 0 if self._value is None else _index_of(self._value)

    def _get(self, index: int) -> Value:
        actual = self.type_index()
        if actual != index:
            raise TypeError(
                f"variant holds {_TYPE_NAMES[actual]}, not {_TYPE_NAMES[index]}"
            )
        return self._value  # type: ignore[return-value]

    def to_bool(self) -> bool:
        return False if self._value is None else bool(self._get(0))

    def to_int(self) -> int:
        return 0 if self._value is None else int(self._get(1))

    def to_float(self) -> float:
        return 0.0 if self._value is None else float(self._get(2))

    def to_string(self) -> str:
        return "" if self._value is None else str(self._get(3))

    def _key(self) -> tuple[bool, int, Value]:
        if self._value is None:
            return (True, 0, False)
        return (False, self.type_index(), self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variant):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self._value is None:
            return "Variant()"
        return f"Variant({self._value!r})"


def variant_to_json(data: Variant) -> dict[str, Any]:
    """Encode a variant as a JSON-ready dict."""
    if data.is_empty():
        return {"empty": "empty"}
    return {"type": data.type_index(), "value": data.value}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def variant_from_json(json_object: dict[str, Any]) -> Variant:
    """Decode a variant from the dict produced by :func:`variant_to_json`."""
    if not isinstance(json_object, dict):
        raise TypeError("variant JSON must be an object")
    if "empty" in json_object or "type" not in json_object:
        return Variant()
    type_index = json_object["type"]
    if not _is_number(type_index):
        raise TypeError("variant type must be a number")
    type_index = int(type_index)
    if type_index == 0:
        value = json_object.get("value", False)
        if not isinstance(value, bool):
            raise TypeError("variant value must be a boolean")
        return Variant(value)
    if type_index == 1:
        value = json_object.get("value", 0)
        if not _is_number(value):
            raise TypeError("variant value must be a number")
        return Variant(int(value))
    if type_index == 2:
        value = json_object.get("value", 0.0)
        if not _is_number(value):
            raise TypeError("variant value must be a number")
        return Variant(float(value))
    if type_index == 3:
        value = json_object.get("value", "")
        if not isinstance(value, str):
            raise TypeError("variant value must be a string")
        return Variant(value)
    raise ValueError(f"unknown variant type index: {type_index}")