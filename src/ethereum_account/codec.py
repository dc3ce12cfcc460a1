"""
Canonical Encoding
^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Account records are persisted in Recursive Length Prefix (RLP) form. This
module defines the interface a codec must provide, and the RLP codec used by
default.
"""

from typing import Protocol

from ethereum_rlp import Extended, Simple, rlp
from ethereum_rlp.exceptions import DecodingError
from ethereum_types.bytes import Bytes

from .crypto.hash import Hash32, Hasher, keccak256


class Codec(Protocol):
    """
    Deterministic serialization of nested byte sequences.
    """

    def encode(self, raw_data: Extended) -> Bytes:
        """
        Encode `raw_data` into a sequence of bytes.
        """
        ...

    def decode(self, encoded_data: Bytes) -> Simple:
        """
        Decode `encoded_data` into bytes or a (nested) sequence of bytes.
        Raises `DecodingError` if the input is malformed.
        """
        ...


class RlpCodec:
    """
    `Codec` backed by `ethereum_rlp`.

    Decoding is strict: the input must be exactly the canonical encoding of
    the value it decodes to, so trailing bytes and non-minimal length
    prefixes are rejected.
    """

    def encode(self, raw_data: Extended) -> Bytes:
        """
        See `Codec.encode`.
        """
        return rlp.encode(raw_data)

    def decode(self, encoded_data: Bytes) -> Simple:
        """
        See `Codec.decode`.
        """
        decoded = rlp.decode(encoded_data)
        if rlp.encode(decoded) != encoded_data:
            raise DecodingError("non-canonical encoding or trailing bytes")
        return decoded


RLP_CODEC = RlpCodec()


def rlp_hash(
    data: Extended, hasher: Hasher = keccak256, codec: Codec = RLP_CODEC
) -> Hash32:
    """
    Obtain the hash of the encoding of the passed in data.

    Parameters
    ----------
    data :
        The data for which we need the hash.
    hasher :
        Hash function to apply to the encoding.
    codec :
        Codec used to encode `data`.

    Returns
    -------
    hash : `Hash32`
        The hash of the encoded data.
    """
    return hasher(codec.encode(data))
