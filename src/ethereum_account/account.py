"""
Account
^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The record stored against an address in the world state trie.

An account is encoded as the RLP list
``[nonce, balance, state_root, code_hash]``, where the nonce and balance are
minimal big endian integers and the two hashes are exactly 32 bytes long.

The account's code is stored content addressed, under its own hash, in the
raw key-value store behind the state trie. The account's storage is a
separate trie whose root is `state_root`; it shares backing data with the
state trie, and is always addressed through a copy of the caller's trie
handle so that the caller's handle keeps pointing where it was.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ethereum_rlp.exceptions import DecodingError
from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint

from .codec import RLP_CODEC, Codec, rlp_hash
from .crypto.hash import Hash32, Hasher, keccak256
from .exceptions import DecodeError, StorageError
from .trie import EMPTY_TRIE_ROOT, Key, TrieStore
from .utils.ensure import ensure
from .utils.hexadecimal import bytes_to_hex, hex_to_bytes
from .utils.numeric import (
    be_bytes_to_uint,
    is_minimal_be_bytes,
    to_minimal_be_bytes,
)

logger = logging.getLogger(__name__)

EMPTY_TRIE_HASH = EMPTY_TRIE_ROOT
EMPTY_CODE_HASH = keccak256(b"")

FIELD_NAMES = ("nonce", "balance", "stateRoot", "codeHash")
SNAKE_FIELD_NAMES = ("nonce", "balance", "state_root", "code_hash")


def empty_trie_hash(
    hasher: Hasher = keccak256, codec: Codec = RLP_CODEC
) -> Hash32:
    """
    Root of a trie with no entries: the hash of the encoding of the empty
    byte string.
    """
    if hasher is keccak256 and codec is RLP_CODEC:
        return EMPTY_TRIE_HASH
    return rlp_hash(b"", hasher, codec)


def empty_code_hash(hasher: Hasher = keccak256) -> Hash32:
    """
    Hash of zero length code.
    """
    if hasher is keccak256:
        return EMPTY_CODE_HASH
    return hasher(b"")


def _to_unsigned(name: str, value: Union[int, Uint, Bytes]) -> Bytes:
    encoded = to_minimal_be_bytes(value)
    if not is_minimal_be_bytes(encoded):
        raise ValueError(f"{name} has leading zero bytes")
    return encoded


def _to_hash(name: str, value: Bytes) -> Hash32:
    if not isinstance(value, (bytes, bytearray)):
        raise ValueError(f"{name} must be bytes, not {type(value).__name__}")
    try:
        return Hash32(value)
    except ValueError as e:
        raise ValueError(f"{name}: {e}") from e


@dataclass
class Account:
    """
    State associated with an address.

    Missing hashes default to the roots of empty storage and empty code, as
    computed with the account's `hasher` and `codec`. Integers may be passed
    as `int` or `Uint` and are stored as minimal big endian bytes.

    Fields are checked whenever they are assigned, not only on construction,
    so an account always serializes.
    """

    nonce: Bytes = b""
    balance: Bytes = b""
    state_root: Hash32 = None  # type: ignore[assignment]
    code_hash: Hash32 = None  # type: ignore[assignment]
    hasher: Hasher = field(default=keccak256, compare=False, repr=False)
    codec: Codec = field(default=RLP_CODEC, compare=False, repr=False)

    def __post_init__(self) -> None:
        # `__init__` assigns the hashes before `hasher` and `codec`, so their
        # defaults can only be filled in here.
        if self.state_root is None:
            self.state_root = empty_trie_hash(self.hasher, self.codec)
        if self.code_hash is None:
            self.code_hash = empty_code_hash(self.hasher)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("nonce", "balance"):
            value = _to_unsigned(name, value)
        elif name in ("state_root", "code_hash"):
            if value is not None:
                value = _to_hash(name, value)
            elif "codec" in self.__dict__:
                value = (
                    empty_trie_hash(self.hasher, self.codec)
                    if name == "state_root"
                    else empty_code_hash(self.hasher)
                )
        object.__setattr__(self, name, value)

    @property
    def nonce_value(self) -> Uint:
        """
        The nonce as an integer.
        """
        return be_bytes_to_uint(self.nonce)

    @property
    def balance_value(self) -> Uint:
        """
        The balance as an integer.
        """
        return be_bytes_to_uint(self.balance)

    #
    # Encoding
    #

    def raw(self) -> List[Bytes]:
        """
        The fields of the account, in encoding order.
        """
        return [self.nonce, self.balance, self.state_root, self.code_hash]

    def serialize(self) -> Bytes:
        """
        Canonical encoding of the account.
        """
        return self.codec.encode(self.raw())

    @classmethod
    def from_raw(
        cls,
        fields: Sequence[Bytes],
        hasher: Hasher = keccak256,
        codec: Codec = RLP_CODEC,
    ) -> "Account":
        """
        Build an account from its four fields, in encoding order.
        """
        if len(fields) != len(FIELD_NAMES):
            raise ValueError(
                f"expected {len(FIELD_NAMES)} fields but got {len(fields)}"
            )
        nonce, balance, state_root, code_hash = fields
        return cls(
            nonce=nonce,
            balance=balance,
            state_root=state_root,
            code_hash=code_hash,
            hasher=hasher,
            codec=codec,
        )

    @classmethod
    def decode(
        cls,
        encoded_data: Bytes,
        hasher: Hasher = keccak256,
        codec: Codec = RLP_CODEC,
    ) -> "Account":
        """
        Decode an account from its canonical encoding.

        Parameters
        ----------
        encoded_data :
            Bytes produced by `serialize`.
        hasher :
            Hash function the account will use.
        codec :
            Codec used to decode `encoded_data`.

        Returns
        -------
        account : `Account`
            The decoded account.

        Raises
        ------
        DecodeError
            If `encoded_data` does not decode to a list of four byte strings
            with valid integer and hash fields.
        """
        try:
            decoded = codec.decode(encoded_data)
        except DecodingError as e:
            raise DecodeError("account is not canonically encoded") from e

        ensure(
            not isinstance(decoded, bytes) and len(decoded) == 4,
            DecodeError("account must be a list of 4 items"),
        )
        ensure(
            all(isinstance(item, bytes) for item in decoded),
            DecodeError("account fields must be byte strings"),
        )

        try:
            return cls.from_raw(decoded, hasher, codec)  # type: ignore
        except ValueError as e:
            raise DecodeError(str(e)) from e

    def to_json(self, label: bool = False) -> Union[List[str], Dict[str, str]]:
        """
        The fields of the account as 0x prefixed hex strings, either as a list
        in encoding order or, with `label`, keyed by field name.
        """
        values = [bytes_to_hex(value) for value in self.raw()]
        if label:
            return dict(zip(FIELD_NAMES, values))
        return values

    @classmethod
    def from_json(
        cls,
        obj: Mapping[str, Any],
        hasher: Hasher = keccak256,
        codec: Codec = RLP_CODEC,
    ) -> "Account":
        """
        Build an account from a mapping of hex strings. Keys may be given in
        camel case (as produced by `to_json`) or snake case. Missing keys take
        their default values.
        """
        values: Dict[str, Any] = {}
        for camel, snake in zip(FIELD_NAMES, SNAKE_FIELD_NAMES):
            value = obj.get(camel, obj.get(snake))
            if value is None:
                continue
            if isinstance(value, str):
                value = hex_to_bytes(value)
            values[snake] = value
        return cls(hasher=hasher, codec=codec, **values)

    #
    # Predicates
    #

    def is_contract(self) -> bool:
        """
        Returns `True` if the account has code.
        """
        return self.code_hash != empty_code_hash(self.hasher)

    def is_empty(self) -> bool:
        """
        Returns `True` if the account has a zero nonce and balance, no
        storage, and no code. Empty accounts may be pruned from the state
        trie.
        """
        return (
            self.nonce == b""
            and self.balance == b""
            and self.state_root == empty_trie_hash(self.hasher, self.codec)
            and self.code_hash == empty_code_hash(self.hasher)
        )

    #
    # Code
    #

    def get_code(self, trie: TrieStore) -> Optional[Bytes]:
        """
        Read the account's code from `trie`.

        Accounts without code return `b""` without touching `trie`. Returns
        `None` if the account has a code hash but `trie` holds nothing under
        it.

        Raises
        ------
        StorageError
            If the read fails.
        """
        if not self.is_contract():
            return b""

        code = trie.get_raw(self.code_hash)
        if code is None:
            logger.warning(
                "code 0x%s missing from trie store", self.code_hash.hex()
            )
        return code

    def set_code(self, trie: TrieStore, code: Bytes) -> Hash32:
        """
        Store `code` in `trie` under its hash and point the account at it.

        Setting empty code makes the account a non-contract account and
        writes nothing.

        Parameters
        ----------
        trie :
            Store to write the code into.
        code :
            The account's new code.

        Returns
        -------
        code_hash : `Hash32`
            Hash of `code`.

        Raises
        ------
        StorageError
            If the write fails. `code_hash` is left unchanged.
        """
        code_hash = self.hasher(code)
        if code_hash == empty_code_hash(self.hasher):
            self.code_hash = code_hash
            return code_hash

        trie.put_raw(code_hash, code)
        logger.debug(
            "stored %d bytes of code under 0x%s", len(code), code_hash.hex()
        )
        self.code_hash = code_hash
        return code_hash

    #
    # Storage
    #

    def _storage_trie(self, trie: TrieStore) -> TrieStore:
        storage_trie = trie.copy()
        storage_trie.set_root(self.state_root)
        return storage_trie

    def get_storage(self, trie: TrieStore, key: Key) -> Optional[Bytes]:
        """
        Read `key` from the account's storage trie. Returns `None` if the key
        has not been set.

        `trie` itself is not repointed; the read goes through a copy.
        """
        return self._storage_trie(trie).get(key)

    def set_storage(self, trie: TrieStore, key: Key, value: Bytes) -> None:
        """
        Write `key -> value` into the account's storage trie, then move
        `state_root` to the root of the resulting trie.

        The account itself is not written back into the state trie; the
        caller must serialize and store it.

        Raises
        ------
        StorageError
            If the write fails. `state_root` is left unchanged.
        """
        storage_trie = self._storage_trie(trie)
        try:
            storage_trie.put(key, value)
        except StorageError:
            logger.warning(
                "storage write failed under root 0x%s", self.state_root.hex()
            )
            raise

        new_root = Hash32(storage_trie.get_root())
        logger.debug(
            "storage root 0x%s -> 0x%s",
            self.state_root.hex(),
            new_root.hex(),
        )
        self.state_root = new_root
