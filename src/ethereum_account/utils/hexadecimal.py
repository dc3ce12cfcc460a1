"""
Utility Functions For Hexadecimal Strings
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Conversions between hexadecimal strings and the byte types used in account
records.
"""
from ethereum_types.bytes import Bytes

from ..crypto.hash import Hash32


def has_hex_prefix(hex_string: str) -> bool:
    """
    Check if a hex string starts with hex prefix (0x).
    """
    return hex_string.startswith("0x")


def remove_hex_prefix(hex_string: str) -> str:
    """
    Remove 0x prefix from a hex string if present. This function returns the
    passed hex string if it isn't prefixed with 0x.
    """
    if has_hex_prefix(hex_string):
        return hex_string[len("0x") :]

    return hex_string


def hex_to_bytes(hex_string: str) -> Bytes:
    """
    Convert hex string to bytes.

    An odd number of digits is accepted and treated as having a leading
    zero, so `"0x1"` converts to `b"\\x01"`.

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be converted to bytes.

    Returns
    -------
    byte_stream : `bytes`
        Byte stream corresponding to the given hexadecimal string.
    """
    digits = remove_hex_prefix(hex_string)
    if len(digits) % 2 == 1:
        digits = "0" + digits
    return bytes.fromhex(digits)


def hex_to_hash(hex_string: str) -> Hash32:
    """
    Convert hex string to hash.

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be converted to hash.

    Returns
    -------
    hash : `Hash32`
        32-byte hash corresponding to the given hexadecimal string.
    """
    return Hash32(bytes.fromhex(remove_hex_prefix(hex_string)))


def bytes_to_hex(value: Bytes) -> str:
    """
    Convert bytes to a 0x prefixed hex string. Empty bytes convert to `"0x"`.
    """
    return "0x" + value.hex()
