"""
TDS Column Values
=================

The closed set of native value shapes a column can hold, and the
``TypedValue`` union passed to and returned from the codec.
"""

import struct
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ValueShape(Enum):
    """Native shapes a column value can take"""
    UINT8 = "uint8"
    INT16 = "int16"
    INT = "int"             # plain Python int, no declared width
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    BYTES = "bytes"
    TEXT = "text"
    TIMESTAMP = "timestamp"


_INT_RANGES = {
    ValueShape.UINT8: (0, 0xFF),
    ValueShape.INT16: (-0x8000, 0x7FFF),
    ValueShape.INT32: (-0x80000000, 0x7FFFFFFF),
    ValueShape.INT64: (-0x8000000000000000, 0x7FFFFFFFFFFFFFFF),
}


def _check_int(shape: ValueShape, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{shape.value} requires an int, got {type(value).__name__}")
    low, high = _INT_RANGES[shape]
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {shape.value}")
    return value


def _check_float(shape: ValueShape, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{shape.value} requires a float, got {type(value).__name__}")
    return float(value)


@dataclass(frozen=True)
class TypedValue:
    """A column value tagged with its native shape"""
    shape: ValueShape
    value: Any

    def __post_init__(self):
        # Sized integers must fit their wire field
        if self.shape in _INT_RANGES:
            _check_int(self.shape, self.value)

    @classmethod
    def uint8(cls, value: int) -> 'TypedValue':
        return cls(ValueShape.UINT8, value)

    @classmethod
    def int16(cls, value: int) -> 'TypedValue':
        return cls(ValueShape.INT16, value)

    @classmethod
    def int32(cls, value: int) -> 'TypedValue':
        return cls(ValueShape.INT32, value)

    @classmethod
    def int64(cls, value: int) -> 'TypedValue':
        return cls(ValueShape.INT64, value)

    @classmethod
    def float32(cls, value: float) -> 'TypedValue':
        """Single precision float, stored already rounded to 32 bits"""
        value = _check_float(ValueShape.FLOAT32, value)
        return cls(ValueShape.FLOAT32, struct.unpack('<f', struct.pack('<f', value))[0])

    @classmethod
    def float64(cls, value: float) -> 'TypedValue':
        return cls(ValueShape.FLOAT64, _check_float(ValueShape.FLOAT64, value))

    @classmethod
    def boolean(cls, value: bool) -> 'TypedValue':
        if not isinstance(value, bool):
            raise TypeError(f"bool requires a bool, got {type(value).__name__}")
        return cls(ValueShape.BOOL, value)

    @classmethod
    def binary(cls, value: bytes) -> 'TypedValue':
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"bytes requires a bytes-like value, got {type(value).__name__}")
        return cls(ValueShape.BYTES, bytes(value))

    @classmethod
    def text(cls, value: str) -> 'TypedValue':
        if not isinstance(value, str):
            raise TypeError(f"text requires a str, got {type(value).__name__}")
        return cls(ValueShape.TEXT, value)

    @classmethod
    def timestamp(cls, value: datetime) -> 'TypedValue':
        if not isinstance(value, datetime):
            raise TypeError(f"timestamp requires a datetime, got {type(value).__name__}")
        return cls(ValueShape.TIMESTAMP, value)

    @classmethod
    def of(cls, value: Any) -> Optional['TypedValue']:
        """
        Wrap a plain Python value in the shape it naturally has.

        Plain ints carry no declared width and get the INT shape. Returns
        None for Python types with no column shape.
        """
        if isinstance(value, TypedValue):
            return value
        # bool before int, bool is an int subclass
        if isinstance(value, bool):
            return cls(ValueShape.BOOL, value)
        if isinstance(value, int):
            return cls(ValueShape.INT, value)
        if isinstance(value, float):
            return cls(ValueShape.FLOAT64, float(value))
        if isinstance(value, str):
            return cls(ValueShape.TEXT, value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(ValueShape.BYTES, bytes(value))
        if isinstance(value, datetime):
            return cls(ValueShape.TIMESTAMP, value)
        return None
