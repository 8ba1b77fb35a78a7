"""
TDS Bind Types
==============

Maps column data types to the db-lib binding type used to copy a column
into a program variable.
"""

import logging

from .constants import DBBindType
from .convert import TYPE_INFO, unknown_type_level

logger = logging.getLogger(__name__)


def bind_type(tag: int) -> DBBindType:
    """Get the bind type for a column data type, NTBSTRINGBIND if unknown"""
    info = TYPE_INFO.get(tag)
    if info is None:
        logger.log(unknown_type_level(), f"Unknown datatype {tag}, binding as {DBBindType.NTBSTRINGBIND.name}")
        return DBBindType.NTBSTRINGBIND
    return info.bind
