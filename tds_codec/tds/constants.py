"""
TDS Codec Constants
===================

Wire type codes, db-lib bind types and the fixed protocol values used
when converting column data.
"""

from datetime import datetime, timezone
from enum import IntEnum


class TDSDataType(IntEnum):
    """TDS column data types"""
    # Fixed length types
    SYBINT1 = 0x30          # tinyint (1 byte)
    SYBINT2 = 0x34          # smallint (2 bytes)
    SYBINT4 = 0x38          # int (4 bytes)
    SYBINT8 = 0x7F          # bigint (8 bytes)
    SYBFLT4 = 0x3B          # real (4 bytes)
    SYBFLT8 = 0x3E          # float (8 bytes)
    SYBBIT = 0x32           # bit (1 byte)
    SYBMONEY4 = 0x7A        # smallmoney (4 bytes)
    SYBMONEY = 0x3C         # money (8 bytes)
    SYBDATETIME4 = 0x3A     # smalldatetime (4 bytes)
    SYBDATETIME = 0x3D      # datetime (8 bytes)

    # Variable length types
    SYBCHAR = 0x2F          # char
    SYBVARCHAR = 0x27       # varchar
    SYBNVARCHAR = 0x67      # nvarchar
    SYBTEXT = 0x23          # text
    SYBBINARY = 0x2D        # binary
    SYBVARBINARY = 0x25     # varbinary
    SYBIMAGE = 0x22         # image
    XSYBVARBINARY = 0xA5    # varbinary (TDS 7.0+)

    # Decimal/Numeric
    SYBDECIMAL = 0x6A
    SYBNUMERIC = 0x6C


class DBBindType(IntEnum):
    """db-lib variable binding types (sybdb.h)"""
    NTBSTRINGBIND = 2
    TINYBIND = 6
    SMALLBIND = 7
    INTBIND = 8
    FLT8BIND = 9
    REALBIND = 10
    DATETIMEBIND = 11
    SMALLDATETIMEBIND = 12
    MONEYBIND = 13
    SMALLMONEYBIND = 14
    BINARYBIND = 15
    BITBIND = 16
    NUMERICBIND = 17
    DECIMALBIND = 18
    BIGINTBIND = 30


# Day zero for DATETIME and DATETIME4 columns
SQL_EPOCH = datetime(1900, 1, 1, tzinfo=timezone.utc)

# MONEY and SMALLMONEY are integers scaled by 10^4
MONEY_SCALE = 10000

# DATETIME time of day is counted in 1/300 second ticks
TICKS_PER_SECOND = 300
NANOSECONDS_PER_TICK = 3333333

# Trailing marker on variable length text and binary values
VALUE_TERMINATOR = b'\x00'

# Common aliases accepted wherever a type is named
TYPE_ALIASES = {
    'TINYINT': TDSDataType.SYBINT1,
    'SMALLINT': TDSDataType.SYBINT2,
    'INT': TDSDataType.SYBINT4,
    'BIGINT': TDSDataType.SYBINT8,
    'REAL': TDSDataType.SYBFLT4,
    'FLOAT': TDSDataType.SYBFLT8,
    'FLOAT8': TDSDataType.SYBFLT8,
    'BIT': TDSDataType.SYBBIT,
    'SMALLMONEY': TDSDataType.SYBMONEY4,
    'MONEY': TDSDataType.SYBMONEY,
    'SMALLDATETIME': TDSDataType.SYBDATETIME4,
    'DATETIME': TDSDataType.SYBDATETIME,
    'CHAR': TDSDataType.SYBCHAR,
    'VARCHAR': TDSDataType.SYBVARCHAR,
    'NVARCHAR': TDSDataType.SYBNVARCHAR,
    'TEXT': TDSDataType.SYBTEXT,
    'BINARY': TDSDataType.SYBBINARY,
    'VARBINARY': TDSDataType.SYBVARBINARY,
    'IMAGE': TDSDataType.SYBIMAGE,
    'DECIMAL': TDSDataType.SYBDECIMAL,
    'NUMERIC': TDSDataType.SYBNUMERIC,
}
