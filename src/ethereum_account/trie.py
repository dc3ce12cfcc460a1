"""
Trie Store
^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Accounts read and write their code and storage through a keyed trie store
supplied by the caller. This module defines that interface, `TrieStore`,
along with `MemoryTrie`, an in-memory store backed by `trie.HexaryTrie`.

A `MemoryTrie` is only a handle: a root hash pointing into the node
dictionary of a shared `TrieDB`. Trie nodes are content addressed, so every
committed root stays readable, and two handles over the same database can
be pointed at different roots without interfering with each other.
"""

import logging
from typing import Dict, Optional, Protocol, Union, runtime_checkable

from ethereum_types.bytes import Bytes
from trie import HexaryTrie
from trie.exceptions import MissingTrieNode

from .codec import rlp_hash
from .config import TrieConfig
from .crypto.hash import Hash32, keccak256
from .exceptions import StorageError
from .utils.ensure import ensure

logger = logging.getLogger(__name__)

# note: an empty trie (regardless of whether it is secured) has root:
#
#   keccak256(RLP(b''))
#       ==
#   56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421 # noqa: E501,SC10
EMPTY_TRIE_ROOT = rlp_hash(b"")

Key = Union[Bytes, str]


@runtime_checkable
class TrieStore(Protocol):
    """
    A keyed store whose contents are summarised by a root hash.

    `get` and `put` address the trie under the current root; `put` moves the
    root. `get_raw` and `put_raw` bypass the trie and address the backing
    database directly. `copy` returns an independent handle over the same
    backing data.

    Failures are reported by raising `StorageError`.
    """

    def get_root(self) -> Hash32:
        """
        Root hash the handle currently points at.
        """
        ...

    def set_root(self, root: Hash32) -> None:
        """
        Point the handle at `root`.
        """
        ...

    def copy(self) -> "TrieStore":
        """
        Independent handle sharing the same backing data.
        """
        ...

    def get_raw(self, key: Key) -> Optional[Bytes]:
        """
        Value stored directly in the backing database, or `None`.
        """
        ...

    def put_raw(self, key: Key, value: Bytes) -> None:
        """
        Store `value` directly in the backing database.
        """
        ...

    def get(self, key: Key) -> Optional[Bytes]:
        """
        Value stored at `key` under the current root, or `None`.
        """
        ...

    def put(self, key: Key, value: Bytes) -> None:
        """
        Store `value` at `key` and move the root to the resulting trie.
        """
        ...


def key_to_bytes(key: Key) -> Bytes:
    """
    Convert a trie key to bytes. `str` keys are UTF-8 encoded.
    """
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise StorageError(f"keys must be bytes or str, not {type(key).__name__}")


def _check_value(value: Bytes) -> Bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise StorageError(
            f"values must be bytes, not {type(value).__name__}"
        )
    return bytes(value)


class TrieDB:
    """
    Backing data shared by every `MemoryTrie` handle created from it.

    A single dictionary holds both the trie nodes, keyed by their hash, and
    content addressed data such as code written with `put_raw`.
    """

    config: TrieConfig
    nodes: Dict[Bytes, Bytes]

    def __init__(self, config: Optional[TrieConfig] = None) -> None:
        self.config = config if config is not None else TrieConfig()
        self.config.apply_logging()
        self.nodes = {}

    def internal_key(self, key: Key) -> Bytes:
        """
        Convert a key to the form used inside the trie.
        """
        key = key_to_bytes(key)
        if self.config.SECURED:
            return keccak256(key)
        return key

    def open(self, trie_root: Hash32) -> HexaryTrie:
        """
        A `HexaryTrie` over the shared nodes, rooted at `trie_root`.
        """
        return HexaryTrie(self.nodes, root_hash=bytes(trie_root))

    def get(self, trie_root: Hash32, key: Key) -> Optional[Bytes]:
        """
        Value at `key` in the trie at `trie_root`, or `None`.
        """
        try:
            value = self.open(trie_root).get(self.internal_key(key))
        except MissingTrieNode as e:
            raise StorageError(
                f"missing trie node under root 0x{bytes(trie_root).hex()}"
            ) from e
        return value if value else None

    def commit(self, trie_root: Hash32, key: Key, value: Bytes) -> Hash32:
        """
        Write `key -> value` on top of the trie at `trie_root` and return
        the root of the result. The trie at `trie_root` is left as it was.

        Storing an empty value deletes the key, because the Merkle Trie
        represents the empty value by omitting it.
        """
        self._check_writable()
        value = _check_value(value)
        internal_key = self.internal_key(key)

        hexary_trie = self.open(trie_root)
        try:
            if len(value) == 0:
                hexary_trie.delete(internal_key)
            else:
                hexary_trie.set(internal_key, value)
        except MissingTrieNode as e:
            raise StorageError(
                f"missing trie node under root 0x{bytes(trie_root).hex()}"
            ) from e

        new_root = Hash32(hexary_trie.root_hash)
        logger.debug(
            "committed trie 0x%s -> 0x%s",
            bytes(trie_root).hex(),
            new_root.hex(),
        )
        return new_root

    def get_raw(self, key: Key) -> Optional[Bytes]:
        """
        See `TrieStore.get_raw`.
        """
        return self.nodes.get(key_to_bytes(key))

    def put_raw(self, key: Key, value: Bytes) -> None:
        """
        See `TrieStore.put_raw`.
        """
        self._check_writable()
        self.nodes[key_to_bytes(key)] = _check_value(value)

    def _check_writable(self) -> None:
        ensure(
            not self.config.READ_ONLY,
            StorageError("trie database is read-only"),
        )


class MemoryTrie:
    """
    A `TrieStore` handle over a `TrieDB`.

    When created with `MemoryTrie()` a fresh database is created. Pass `db`
    to share backing data with other handles.
    """

    db: TrieDB
    _root: Hash32

    def __init__(
        self, db: Optional[TrieDB] = None, root: Optional[Hash32] = None
    ) -> None:
        self.db = db if db is not None else TrieDB()
        self._root = EMPTY_TRIE_ROOT if root is None else Hash32(root)

    def __repr__(self) -> str:
        return f"MemoryTrie(root=0x{bytes(self._root).hex()})"

    def get_root(self) -> Hash32:
        """
        See `TrieStore.get_root`.
        """
        return self._root

    def set_root(self, root: Hash32) -> None:
        """
        See `TrieStore.set_root`. The root is checked lazily, on the next
        `get` or `put`.
        """
        try:
            self._root = Hash32(root)
        except ValueError as e:
            raise StorageError(str(e)) from e

    def copy(self) -> "MemoryTrie":
        """
        See `TrieStore.copy`.
        """
        return MemoryTrie(self.db, self._root)

    def get_raw(self, key: Key) -> Optional[Bytes]:
        """
        See `TrieStore.get_raw`.
        """
        return self.db.get_raw(key)

    def put_raw(self, key: Key, value: Bytes) -> None:
        """
        See `TrieStore.put_raw`.
        """
        self.db.put_raw(key, value)

    def get(self, key: Key) -> Optional[Bytes]:
        """
        See `TrieStore.get`.
        """
        return self.db.get(self._root, key)

    def put(self, key: Key, value: Bytes) -> None:
        """
        See `TrieStore.put`.
        """
        self._root = self.db.commit(self._root, key, value)
