"""
TDS Column Value Conversion
===========================

Converts column values between TDS wire bytes and ``TypedValue``.

Every supported type has one ``TypeInfo`` entry in ``TYPE_INFO`` holding
its wire width, native shape, decoder, encoder and db-lib bind type. Type
codes without an entry are handled as null terminated text.

All functions here are pure: they never keep a reference to the caller's
buffer and always return newly allocated data.
"""

import logging
import math
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_DOWN
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, Union

from .constants import (
    TDSDataType, DBBindType, SQL_EPOCH, MONEY_SCALE,
    TICKS_PER_SECOND, NANOSECONDS_PER_TICK, VALUE_TERMINATOR,
)
from .exceptions import TypeMismatchError
from .values import TypedValue, ValueShape

logger = logging.getLogger(__name__)

Buffer = Union[bytes, bytearray, memoryview]
Decoder = Callable[[Buffer], TypedValue]
Encoder = Callable[[Any], bytes]

# SYBINT4 takes any integer and narrows it to 32 bits. Callers bind plain
# int literals to int columns without casting them first.
LENIENT_INT32_SHAPES = frozenset({ValueShape.INT, ValueShape.INT32, ValueShape.INT64})

# Level for type codes that fall back to text, see report_unknown_types()
_unknown_type_level = logging.DEBUG


def report_unknown_types(enabled: bool = True):
    """Log unknown type codes at WARNING instead of DEBUG"""
    global _unknown_type_level
    _unknown_type_level = logging.WARNING if enabled else logging.DEBUG


def unknown_type_level() -> int:
    return _unknown_type_level


def _narrow(value: int, bits: int) -> int:
    """Wrap an integer into a signed two's complement field of ``bits`` bits"""
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _utc(value: datetime) -> datetime:
    # Naive datetimes are taken to already be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def scale_money(value: float) -> int:
    """
    Scale a currency amount to its wire integer, truncating toward zero.

    The product is computed in decimal on the float's shortest repr, so
    amounts written with four decimals (``12.3456``) scale exactly.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot encode {value} as money")
    scaled = Decimal(repr(float(value))) * MONEY_SCALE
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def split_money(scaled: int) -> Tuple[int, int]:
    """
    Split a scaled 64-bit money value into its (high, low) wire words.

    ``high`` is the signed upper 32 bits and ``low`` the unsigned lower 32
    bits, so that ``high * 2**32 + low == scaled``.
    """
    scaled = _narrow(scaled, 64)
    high = scaled >> 32
    low = scaled - (high << 32)
    return high, low


# Decoders

def _struct_decoder(fmt: str, shape: ValueShape) -> Decoder:
    def decode(data: Buffer) -> TypedValue:
        return TypedValue(shape, struct.unpack_from(fmt, data)[0])
    return decode


def _decode_bit(data: Buffer) -> TypedValue:
    return TypedValue(ValueShape.BOOL, data[0] == 1)


def _decode_money4(data: Buffer) -> TypedValue:
    value = struct.unpack_from('<i', data)[0]
    return TypedValue(ValueShape.FLOAT64, value / MONEY_SCALE)


def _decode_money(data: Buffer) -> TypedValue:
    high, low = struct.unpack_from('<iI', data)
    return TypedValue(ValueShape.FLOAT64, (high * 4294967296 + low) / MONEY_SCALE)


def _decode_datetime(data: Buffer) -> TypedValue:
    """
    Decode days since 1900-01-01 and 1/300 second ticks since midnight.

    Servers only send years 1753 to 9999. Python datetimes stop at years
    1 and 9999, so day counts beyond those raise ``OverflowError``.
    """
    days, ticks = struct.unpack_from('<iI', data)
    # Round up to the next microsecond so re-encoding gives back the same tick
    microseconds = -(-ticks * 1000000 // TICKS_PER_SECOND)
    try:
        value = SQL_EPOCH + timedelta(days=days, microseconds=microseconds)
    except OverflowError:
        raise OverflowError(f"DATETIME day count {days} is outside the datetime range")
    return TypedValue(ValueShape.TIMESTAMP, value)


def _decode_datetime4(data: Buffer) -> TypedValue:
    days, minutes = struct.unpack_from('<HH', data)
    value = SQL_EPOCH + timedelta(days=days, minutes=minutes)
    return TypedValue(ValueShape.TIMESTAMP, value)


def _decode_binary(data: Buffer) -> TypedValue:
    # Drop the terminator, bytes() takes a private copy
    return TypedValue(ValueShape.BYTES, bytes(data[:-1]))


def _decode_text(data: Buffer) -> TypedValue:
    raw = bytes(data)
    end = raw.find(0)
    if end < 0:
        end = len(raw)
    return TypedValue(ValueShape.TEXT, raw[:end].decode('utf-8', errors='replace'))


# Encoders

def _struct_encoder(fmt: str) -> Encoder:
    def encode(value: Any) -> bytes:
        return struct.pack(fmt, value)
    return encode


def _encode_int4(value: int) -> bytes:
    return struct.pack('<i', _narrow(value, 32))


def _encode_bit(value: bool) -> bytes:
    return b'\x01' if value else b'\x00'


def _encode_money4(value: float) -> bytes:
    return struct.pack('<i', _narrow(scale_money(value), 32))


def _encode_money(value: float) -> bytes:
    high, low = split_money(scale_money(value))
    return struct.pack('<iI', high, low)


def _encode_datetime(value: datetime) -> bytes:
    value = _utc(value)
    days = (value - SQL_EPOCH).days
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    ticks = seconds * TICKS_PER_SECOND + value.microsecond * 1000 // NANOSECONDS_PER_TICK
    return struct.pack('<iI', days, ticks)


def _encode_datetime4(value: datetime) -> bytes:
    value = _utc(value)
    days = (value - SQL_EPOCH).days & 0xFFFF
    minutes = value.hour * 60 + value.minute
    return struct.pack('<HH', days, minutes)


def _encode_binary(value: bytes) -> bytes:
    return bytes(value) + VALUE_TERMINATOR


def _encode_text(value: str) -> bytes:
    return value.encode('utf-8') + VALUE_TERMINATOR


@dataclass(frozen=True)
class TypeInfo:
    """How one TDS data type is converted and bound"""
    name: str
    width: Optional[int]            # None for variable length types
    shape: ValueShape
    accepts: FrozenSet[ValueShape]
    decoder: Decoder
    encoder: Encoder
    bind: DBBindType


def _info(tag: TDSDataType, width: Optional[int], shape: ValueShape,
          decoder: Decoder, encoder: Encoder, bind: DBBindType,
          accepts: Optional[FrozenSet[ValueShape]] = None) -> TypeInfo:
    return TypeInfo(
        name=tag.name,
        width=width,
        shape=shape,
        accepts=accepts or frozenset({shape}),
        decoder=decoder,
        encoder=encoder,
        bind=bind,
    )


def _text_info(tag: TDSDataType, bind: DBBindType = DBBindType.NTBSTRINGBIND) -> TypeInfo:
    return _info(tag, None, ValueShape.TEXT, _decode_text, _encode_text, bind)


def _binary_info(tag: TDSDataType) -> TypeInfo:
    return _info(tag, None, ValueShape.BYTES, _decode_binary, _encode_binary, DBBindType.BINARYBIND)


_T = TDSDataType
_S = ValueShape
_B = DBBindType

TYPE_INFO: Dict[int, TypeInfo] = {
    _T.SYBINT1: _info(_T.SYBINT1, 1, _S.UINT8,
                      _struct_decoder('<B', _S.UINT8), _struct_encoder('<B'), _B.TINYBIND),
    _T.SYBINT2: _info(_T.SYBINT2, 2, _S.INT16,
                      _struct_decoder('<h', _S.INT16), _struct_encoder('<h'), _B.SMALLBIND),
    _T.SYBINT4: _info(_T.SYBINT4, 4, _S.INT32,
                      _struct_decoder('<i', _S.INT32), _encode_int4, _B.INTBIND,
                      accepts=LENIENT_INT32_SHAPES),
    _T.SYBINT8: _info(_T.SYBINT8, 8, _S.INT64,
                      _struct_decoder('<q', _S.INT64), _struct_encoder('<q'), _B.BIGINTBIND),
    _T.SYBFLT4: _info(_T.SYBFLT4, 4, _S.FLOAT32,
                      _struct_decoder('<f', _S.FLOAT32), _struct_encoder('<f'), _B.REALBIND),
    _T.SYBFLT8: _info(_T.SYBFLT8, 8, _S.FLOAT64,
                      _struct_decoder('<d', _S.FLOAT64), _struct_encoder('<d'), _B.FLT8BIND),
    _T.SYBBIT: _info(_T.SYBBIT, 1, _S.BOOL, _decode_bit, _encode_bit, _B.BITBIND),
    _T.SYBMONEY4: _info(_T.SYBMONEY4, 4, _S.FLOAT64,
                        _decode_money4, _encode_money4, _B.SMALLMONEYBIND),
    _T.SYBMONEY: _info(_T.SYBMONEY, 8, _S.FLOAT64, _decode_money, _encode_money, _B.MONEYBIND),
    _T.SYBDATETIME: _info(_T.SYBDATETIME, 8, _S.TIMESTAMP,
                          _decode_datetime, _encode_datetime, _B.DATETIMEBIND),
    _T.SYBDATETIME4: _info(_T.SYBDATETIME4, 4, _S.TIMESTAMP,
                           _decode_datetime4, _encode_datetime4, _B.SMALLDATETIMEBIND),
    _T.SYBCHAR: _text_info(_T.SYBCHAR),
    _T.SYBVARCHAR: _text_info(_T.SYBVARCHAR),
    _T.SYBNVARCHAR: _text_info(_T.SYBNVARCHAR),
    _T.SYBTEXT: _text_info(_T.SYBTEXT),
    _T.SYBIMAGE: _binary_info(_T.SYBIMAGE),
    _T.SYBBINARY: _binary_info(_T.SYBBINARY),
    _T.SYBVARBINARY: _binary_info(_T.SYBVARBINARY),
    # Bound as binary to match its codec, db-lib itself falls back to a string
    _T.XSYBVARBINARY: _binary_info(_T.XSYBVARBINARY),
    # No value conversion for decimal/numeric, only the bind type
    _T.SYBDECIMAL: _text_info(_T.SYBDECIMAL, _B.DECIMALBIND),
    _T.SYBNUMERIC: _text_info(_T.SYBNUMERIC, _B.NUMERICBIND),
}

# Unknown type codes are treated as null terminated text
DEFAULT_TYPE_INFO = TypeInfo(
    name="UNKNOWN",
    width=None,
    shape=ValueShape.TEXT,
    accepts=frozenset({ValueShape.TEXT}),
    decoder=_decode_text,
    encoder=_encode_text,
    bind=DBBindType.NTBSTRINGBIND,
)


def lookup(tag: int) -> TypeInfo:
    """Get the conversion entry for a type code, falling back to text"""
    return TYPE_INFO.get(tag, DEFAULT_TYPE_INFO)


def _lookup_reported(tag: int, action: str) -> TypeInfo:
    info = TYPE_INFO.get(tag)
    if info is None:
        logger.log(_unknown_type_level, f"Unknown datatype {tag}, {action}")
        return DEFAULT_TYPE_INFO
    return info


def wire_width(tag: int) -> Optional[int]:
    """Fixed wire width of a type in bytes, or None if variable"""
    return lookup(tag).width


def type_name(tag: int) -> str:
    info = TYPE_INFO.get(tag)
    if info is None:
        return f"UNKNOWN_0x{tag:02X}"
    return info.name


def decode(tag: int, data: Buffer) -> TypedValue:
    """
    Decode a column value from its wire bytes.

    ``data`` must hold exactly the declared width for fixed length types.
    Variable length binary values carry a trailing terminator byte and text
    values end at the first zero byte.
    """
    return _lookup_reported(tag, "decoding as text").decoder(data)


def encode(tag: int, value: Any) -> bytes:
    """
    Encode a value as wire bytes for a column or parameter of type ``tag``.

    ``value`` is a ``TypedValue`` or a plain Python value, whose shape is
    then inferred with ``TypedValue.of``. Raises ``TypeMismatchError`` if
    the shape is not the one the type requires.
    """
    info = _lookup_reported(tag, "encoding as text")
    typed = TypedValue.of(value)
    if typed is None:
        logger.debug(f"Cannot encode {type(value).__name__} as {info.name}")
        raise TypeMismatchError(tag, info.shape, type(value).__name__)
    if typed.shape not in info.accepts:
        logger.debug(f"Cannot encode {typed.shape.value} as {info.name}")
        raise TypeMismatchError(tag, info.shape, typed.shape)
    return info.encoder(typed.value)
