"""MessagePack value model.

This module defines the closed set of variants a serialized value can take.
Every variant is an immutable Pydantic model, so payloads are validated at
construction (integer widths, the ext type range, single-precision floats).

Equality follows the wire format's view of numbers rather than Python's:
integers compare by numeric value regardless of declared width or
signedness, Float32 and Float64 compare by numeric value, and values of
different kinds (str vs bin, int vs float, bool vs int) never compare equal.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

_SINGLE = struct.Struct(">f")

# Number of leading elements mixed into an Array hash
_ARRAY_HASH_PREFIX = 8


def integer_bounds(bits: int, signed: bool) -> tuple[int, int]:
    """Return the inclusive (min, max) range of an integer of the given width."""
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def _round_to_single(value: float) -> float:
    rounded: float = _SINGLE.unpack(_SINGLE.pack(value))[0]
    return rounded


class Value(BaseModel):
    """Base class of every MessagePack value variant.

    Never instantiated directly; use one of the concrete variants below.
    Besides equality and hashing, it carries the read-only accessors that
    coerce a value into Python types. Every accessor returns None when the
    variant does not match, never a default.
    """

    model_config = ConfigDict(
        # Values are immutable and hashable (usable as Map keys)
        frozen=True,
        extra="forbid",
    )

    # Equality domain: values of different families never compare equal
    family: ClassVar[str] = "value"
    # Variant name used by str()
    label: ClassVar[str] = "value"

    def __init__(self, **data: Any) -> None:
        if type(self) in _ABSTRACT_VARIANTS:
            raise TypeError(f"{type(self).__name__} cannot be instantiated; use a concrete variant")
        super().__init__(**data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.family == other.family and self._payload_equals(other)

    def __hash__(self) -> int:
        return hash((self.family, self._payload_hash()))

    def _payload_equals(self, other: Any) -> bool:
        raise NotImplementedError

    def _payload_hash(self) -> int:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"{self.label}({self._describe_payload()})"

    def _describe_payload(self) -> str:
        return ""

    # Container access

    @property
    def count(self) -> int | None:
        """The number of elements of an Array or entries of a Map."""
        return None

    def __getitem__(self, key: Any) -> Value | None:
        """Positional lookup on an Array or keyed lookup on a Map."""
        return None

    @property
    def is_nil(self) -> bool:
        return False

    # Integer values, readable through any width that holds them exactly

    def _integer_as(self, bits: int, signed: bool) -> int | None:
        return None

    @property
    def int8_value(self) -> int | None:
        return self._integer_as(8, True)

    @property
    def int16_value(self) -> int | None:
        return self._integer_as(16, True)

    @property
    def int32_value(self) -> int | None:
        return self._integer_as(32, True)

    @property
    def int64_value(self) -> int | None:
        return self._integer_as(64, True)

    @property
    def uint8_value(self) -> int | None:
        return self._integer_as(8, False)

    @property
    def uint16_value(self) -> int | None:
        return self._integer_as(16, False)

    @property
    def uint32_value(self) -> int | None:
        return self._integer_as(32, False)

    @property
    def uint64_value(self) -> int | None:
        return self._integer_as(64, False)

    # Other typed getters

    @property
    def bool_value(self) -> bool | None:
        return None

    @property
    def float_value(self) -> float | None:
        """A Float32 payload, or a Float64 that is exactly representable as single."""
        return None

    @property
    def double_value(self) -> float | None:
        return None

    @property
    def string_value(self) -> str | None:
        """The contained string for Str, or a Bin payload that is valid UTF-8."""
        return None

    @property
    def data_value(self) -> bytes | None:
        """The contained bytes for Bin, or the payload of an Ext."""
        return None

    @property
    def array_value(self) -> list[Value] | None:
        return None

    @property
    def dictionary_value(self) -> dict[Value, Value] | None:
        return None

    @property
    def extended_value(self) -> tuple[int, bytes] | None:
        return None

    @property
    def extended_type(self) -> int | None:
        return None


class Nil(Value):
    """The MessagePack nil value."""

    family: ClassVar[str] = "nil"
    label: ClassVar[str] = "nil"

    def _payload_equals(self, other: Any) -> bool:
        return True

    def _payload_hash(self) -> int:
        return 0

    def __str__(self) -> str:
        return "nil"

    @property
    def is_nil(self) -> bool:
        return True


class ScalarValue(Value):
    """Base for variants carrying a single ``value`` payload."""

    value: Any

    def __init__(self, value: Any) -> None:
        super().__init__(value=value)

    def _payload_equals(self, other: Any) -> bool:
        return bool(self.value == other.value)

    def _payload_hash(self) -> int:
        return hash(self.value)

    def _describe_payload(self) -> str:
        return str(self.value)


class Bool(ScalarValue):
    family: ClassVar[str] = "bool"
    label: ClassVar[str] = "bool"

    value: bool = Field(strict=True)

    @property
    def bool_value(self) -> bool | None:
        return self.value


class IntegerValue(ScalarValue):
    """Base for the fixed-width integer variants.

    All integer variants share one equality family, so ``UInt8(5)`` equals
    ``Int64(5)`` while ``Int8(-1)`` does not equal ``UInt8(255)``.
    """

    family: ClassVar[str] = "int"
    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = True

    value: int

    def _integer_as(self, bits: int, signed: bool) -> int | None:
        low, high = integer_bounds(bits, signed)
        if low <= self.value <= high:
            return self.value
        return None


class Int8(IntegerValue):
    label: ClassVar[str] = "int8"
    bits: ClassVar[int] = 8
    signed: ClassVar[bool] = True

    value: int = Field(strict=True, ge=-(1 << 7), le=(1 << 7) - 1)


class Int16(IntegerValue):
    label: ClassVar[str] = "int16"
    bits: ClassVar[int] = 16
    signed: ClassVar[bool] = True

    value: int = Field(strict=True, ge=-(1 << 15), le=(1 << 15) - 1)


class Int32(IntegerValue):
    label: ClassVar[str] = "int32"
    bits: ClassVar[int] = 32
    signed: ClassVar[bool] = True

    value: int = Field(strict=True, ge=-(1 << 31), le=(1 << 31) - 1)


class Int64(IntegerValue):
    label: ClassVar[str] = "int64"
    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = True

    value: int = Field(strict=True, ge=-(1 << 63), le=(1 << 63) - 1)


class UInt8(IntegerValue):
    label: ClassVar[str] = "uint8"
    bits: ClassVar[int] = 8
    signed: ClassVar[bool] = False

    value: int = Field(strict=True, ge=0, le=(1 << 8) - 1)


class UInt16(IntegerValue):
    label: ClassVar[str] = "uint16"
    bits: ClassVar[int] = 16
    signed: ClassVar[bool] = False

    value: int = Field(strict=True, ge=0, le=(1 << 16) - 1)


class UInt32(IntegerValue):
    label: ClassVar[str] = "uint32"
    bits: ClassVar[int] = 32
    signed: ClassVar[bool] = False

    value: int = Field(strict=True, ge=0, le=(1 << 32) - 1)


class UInt64(IntegerValue):
    label: ClassVar[str] = "uint64"
    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = False

    value: int = Field(strict=True, ge=0, le=(1 << 64) - 1)


class FloatValue(ScalarValue):
    """Base for the IEEE-754 variants.

    Float32 and Float64 compare equal when their numeric values are
    identical, i.e. when one is exactly representable as the other.
    NaN never compares equal.
    """

    family: ClassVar[str] = "float"

    value: float = Field(strict=True)

    def __init__(self, value: float) -> None:
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        super().__init__(value)

    @property
    def double_value(self) -> float | None:
        return self.value


class Float32(FloatValue):
    """Single-precision float; the payload is rounded to single on construction."""

    label: ClassVar[str] = "float"

    value: float = Field(strict=True)

    @field_validator("value")
    @classmethod
    def check_single_precision(cls, value: float) -> float:
        try:
            return _round_to_single(value)
        except OverflowError as err:
            raise ValueError(f"{value} is out of range for float32") from err

    @property
    def float_value(self) -> float | None:
        return self.value


class Float64(FloatValue):
    label: ClassVar[str] = "double"

    value: float = Field(strict=True)

    @property
    def float_value(self) -> float | None:
        # NaN is never exactly representable
        try:
            single = _round_to_single(self.value)
        except OverflowError:
            return None
        return single if single == self.value else None


class Str(ScalarValue):
    family: ClassVar[str] = "str"
    label: ClassVar[str] = "string"

    value: str = Field(strict=True)

    @property
    def string_value(self) -> str | None:
        return self.value


class Bin(ScalarValue):
    family: ClassVar[str] = "bin"
    label: ClassVar[str] = "data"

    value: bytes = Field(strict=True)

    def __init__(self, value: bytes | bytearray | memoryview) -> None:
        if isinstance(value, (bytearray, memoryview)):
            value = bytes(value)
        super().__init__(value)

    def _describe_payload(self) -> str:
        return repr(self.value)

    @property
    def string_value(self) -> str | None:
        try:
            return self.value.decode("utf-8")
        except UnicodeDecodeError:
            return None

    @property
    def data_value(self) -> bytes | None:
        return self.value


class Array(Value):
    """Ordered sequence of values."""

    family: ClassVar[str] = "array"
    label: ClassVar[str] = "array"

    items: tuple[InstanceOf[Value], ...] = ()

    def __init__(self, items: Iterable[Value] = ()) -> None:
        super().__init__(items=tuple(items))

    def _payload_equals(self, other: Any) -> bool:
        return bool(self.items == other.items)

    def _payload_hash(self) -> int:
        prefix = tuple(hash(item) for item in self.items[:_ARRAY_HASH_PREFIX])
        return hash((len(self.items), prefix))

    def _describe_payload(self) -> str:
        return "[" + ", ".join(str(item) for item in self.items) + "]"

    @property
    def count(self) -> int | None:
        return len(self.items)

    def __getitem__(self, key: Any) -> Value | None:
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(self.items):
            return self.items[key]
        return None

    @property
    def array_value(self) -> list[Value] | None:
        return list(self.items)


class Map(Value):
    """Mapping of values to values; keys are unique under value equality.

    Entry order carries no meaning. Duplicate keys collapse on construction
    with the last one winning.
    """

    family: ClassVar[str] = "map"
    label: ClassVar[str] = "map"

    entries: dict[InstanceOf[Value], InstanceOf[Value]] = Field(default_factory=dict)

    def __init__(
        self, entries: Mapping[Value, Value] | Iterable[tuple[Value, Value]] = ()
    ) -> None:
        super().__init__(entries=dict(entries))

    def _payload_equals(self, other: Any) -> bool:
        return bool(self.entries == other.entries)

    def _payload_hash(self) -> int:
        return len(self.entries)

    def _describe_payload(self) -> str:
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.entries.items()) + "}"

    @property
    def count(self) -> int | None:
        return len(self.entries)

    def __getitem__(self, key: Any) -> Value | None:
        if not isinstance(key, Value):
            # Import here to avoid circular dependency
            from .convert import to_value

            try:
                key = to_value(key)
            except (TypeError, ValueError):
                return None
        return self.entries.get(key)

    @property
    def dictionary_value(self) -> dict[Value, Value] | None:
        return dict(self.entries)


class Ext(Value):
    """Application-defined extension: a signed 8-bit type tag plus opaque bytes."""

    family: ClassVar[str] = "ext"
    label: ClassVar[str] = "extended"

    ext_type: int = Field(strict=True, ge=-128, le=127)
    data: bytes = Field(strict=True)

    def __init__(self, ext_type: int, data: bytes | bytearray | memoryview) -> None:
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        super().__init__(ext_type=ext_type, data=data)

    def _payload_equals(self, other: Any) -> bool:
        return bool(self.ext_type == other.ext_type and self.data == other.data)

    def _payload_hash(self) -> int:
        return hash((self.ext_type, self.data))

    def _describe_payload(self) -> str:
        return f"{self.ext_type}, {self.data!r}"

    @property
    def data_value(self) -> bytes | None:
        return self.data

    @property
    def extended_value(self) -> tuple[int, bytes] | None:
        return (self.ext_type, self.data)

    @property
    def extended_type(self) -> int | None:
        return self.ext_type


# Bases shared by several variants; only concrete variants are values
_ABSTRACT_VARIANTS = frozenset({Value, ScalarValue, IntegerValue, FloatValue})
