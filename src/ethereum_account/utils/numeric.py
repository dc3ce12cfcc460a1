"""
Utility Functions For Numeric Operations
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Account nonces and balances are kept as minimal big endian byte strings,
where zero is the empty string. These helpers move between that form and
`Uint`.
"""
from typing import Union

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint


def is_minimal_be_bytes(value: Bytes) -> bool:
    """
    Returns `True` if `value` has no leading zero bytes.
    """
    return len(value) == 0 or value[0] != 0


def to_minimal_be_bytes(value: Union[int, Uint, Bytes]) -> Bytes:
    """
    Converts `value` into a minimal big endian byte string.

    Byte strings are returned unchanged and are not checked; use
    `is_minimal_be_bytes` for that.

    Parameters
    ----------
    value :
        A non-negative integer, or a byte string.

    Returns
    -------
    encoded : `Bytes`
        Big endian representation of `value` without leading zeros.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, int):
        if value < 0:
            raise ValueError("unsigned integer cannot be negative")
        value = Uint(value)
    if not isinstance(value, Uint):
        raise TypeError(f"cannot encode {type(value).__name__} as an integer")
    return value.to_be_bytes()


def be_bytes_to_uint(value: Bytes) -> Uint:
    """
    Converts a big endian byte string into a `Uint`. The empty string is
    zero.
    """
    return Uint.from_be_bytes(value)
