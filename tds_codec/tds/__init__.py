"""
TDS Column Value Codec
======================

Converts column and parameter values between the Sybase/SQL Server TDS
wire format and native Python values.
"""

from .constants import (
    TDSDataType,
    DBBindType,
    SQL_EPOCH,
    MONEY_SCALE,
)
from .values import TypedValue, ValueShape
from .exceptions import TDSCodecError, TypeMismatchError
from .convert import (
    TypeInfo,
    TYPE_INFO,
    LENIENT_INT32_SHAPES,
    report_unknown_types,
    decode,
    encode,
    lookup,
    wire_width,
    type_name,
)
from .bind import bind_type
from .utils import hexdump, parse_hex, parse_literal, resolve_type, format_value

__all__ = [
    # Constants
    "TDSDataType",
    "DBBindType",
    "SQL_EPOCH",
    "MONEY_SCALE",
    # Values
    "TypedValue",
    "ValueShape",
    # Errors
    "TDSCodecError",
    "TypeMismatchError",
    # Conversion
    "TypeInfo",
    "TYPE_INFO",
    "LENIENT_INT32_SHAPES",
    "report_unknown_types",
    "decode",
    "encode",
    "lookup",
    "wire_width",
    "type_name",
    "bind_type",
    # Utils
    "hexdump",
    "parse_hex",
    "parse_literal",
    "resolve_type",
    "format_value",
]
