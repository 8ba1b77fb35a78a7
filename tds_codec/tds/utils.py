"""
TDS Utility Functions
=====================

Helpers for naming types, reading values typed in by a user and showing
wire bytes when debugging.
"""

from datetime import datetime

from .constants import TDSDataType, TYPE_ALIASES
from .values import TypedValue, ValueShape

_TRUE_WORDS = {'1', 'true', 'yes', 'on'}
_FALSE_WORDS = {'0', 'false', 'no', 'off'}


def _parse_int(text: str) -> int:
    if text.strip().lstrip('+-').lower().startswith('0x'):
        return int(text, 16)
    return int(text)


def resolve_type(name: str) -> int:
    """
    Resolve a data type from its TDS name (``SYBINT4``, ``int4``), its SQL
    name (``INT``) or its numeric code (``56``, ``0x38``).
    """
    key = name.strip().upper()
    if key in TDSDataType.__members__:
        return TDSDataType[key]
    if 'SYB' + key in TDSDataType.__members__:
        return TDSDataType['SYB' + key]
    if key in TYPE_ALIASES:
        return TYPE_ALIASES[key]
    try:
        return int(key, 0)
    except ValueError:
        raise ValueError(f"Unknown data type: {name}")


def parse_hex(text: str) -> bytes:
    """Parse hex digits, ignoring whitespace, ':' separators and a 0x prefix"""
    cleaned = ''.join(text.split()).replace(':', '')
    if cleaned[:2].lower() == '0x':
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)


def parse_literal(shape: ValueShape, text: str) -> TypedValue:
    """Build a value of the given shape from its text form"""
    if shape == ValueShape.UINT8:
        return TypedValue.uint8(_parse_int(text))
    if shape == ValueShape.INT16:
        return TypedValue.int16(_parse_int(text))
    if shape in (ValueShape.INT, ValueShape.INT32):
        return TypedValue.int32(_parse_int(text))
    if shape == ValueShape.INT64:
        return TypedValue.int64(_parse_int(text))
    if shape == ValueShape.FLOAT32:
        return TypedValue.float32(float(text))
    if shape == ValueShape.FLOAT64:
        return TypedValue.float64(float(text))
    if shape == ValueShape.BOOL:
        word = text.strip().lower()
        if word in _TRUE_WORDS:
            return TypedValue.boolean(True)
        if word in _FALSE_WORDS:
            return TypedValue.boolean(False)
        raise ValueError(f"Invalid boolean: {text}")
    if shape == ValueShape.BYTES:
        return TypedValue.binary(parse_hex(text))
    if shape == ValueShape.TIMESTAMP:
        # fromisoformat only accepts a trailing Z from Python 3.11
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        return TypedValue.timestamp(datetime.fromisoformat(text))
    return TypedValue.text(text)


def format_value(value: TypedValue) -> str:
    """Render a decoded value for display"""
    if value.shape == ValueShape.BYTES:
        return value.value.hex()
    if value.shape == ValueShape.TIMESTAMP:
        return value.value.isoformat()
    return str(value.value)


def hexdump(data: bytes, prefix: str = "") -> str:
    """Create hex dump of data for debugging"""
    lines = []
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]
        hex_part = ' '.join(f'{b:02x}' for b in chunk)
        ascii_part = ''.join(chr(b) if 32 <= b < 127 else '.' for b in chunk)
        lines.append(f"{prefix}{offset:04x}  {hex_part:<48}  {ascii_part}")
    return '\n'.join(lines)
