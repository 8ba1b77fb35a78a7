"""
TDS Codec Exceptions
====================
"""

from typing import Union

from .constants import TDSDataType
from .values import ValueShape


class TDSCodecError(Exception):
    """Base class for codec errors"""


class TypeMismatchError(TDSCodecError, TypeError):
    """
    A value of the wrong shape was bound to a column type.

    This is a programming error on the caller's side and retrying the same
    call will fail the same way.
    """

    def __init__(self, tag: int, expected: ValueShape, actual: Union[ValueShape, str]):
        self.tag = tag
        self.expected = expected
        self.actual = actual
        actual_name = actual.value if isinstance(actual, ValueShape) else actual
        try:
            tag_name = TDSDataType(tag).name
        except ValueError:
            tag_name = f"0x{tag:02X}"
        super().__init__(f"Could not convert {actual_name} to {expected.value} for {tag_name}")
