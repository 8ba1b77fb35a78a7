"""
TDS Codec for Sybase/SAP ASE and SQL Server
===========================================

Column value conversion between TDS wire bytes and native Python values.
"""

from .tds import (
    TDSDataType,
    DBBindType,
    TypedValue,
    ValueShape,
    TDSCodecError,
    TypeMismatchError,
    decode,
    encode,
    bind_type,
)
from .config import CodecConfig, default_config, load_config

__version__ = "1.0.0"

__all__ = [
    "TDSDataType",
    "DBBindType",
    "TypedValue",
    "ValueShape",
    "TDSCodecError",
    "TypeMismatchError",
    "decode",
    "encode",
    "bind_type",
    "CodecConfig",
    "default_config",
    "load_config",
]
