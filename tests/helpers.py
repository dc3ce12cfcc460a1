import hashlib
from typing import List, Optional, Tuple

from ethereum_types.bytes import Bytes

from ethereum_account.crypto.hash import Hash32
from ethereum_account.exceptions import StorageError
from ethereum_account.trie import Key, MemoryTrie, key_to_bytes
from ethereum_account.utils.hexadecimal import has_hex_prefix, hex_to_bytes


def to_bytes(data: Optional[str]) -> Bytes:
    if data is None:
        return b""
    if has_hex_prefix(data):
        return hex_to_bytes(data)

    return data.encode()


def sha256(buffer: Bytes) -> Hash32:
    return Hash32(hashlib.sha256(buffer).digest())


class RecordingTrie(MemoryTrie):
    """
    `MemoryTrie` that remembers every call made against it, including calls
    made against copies of it.
    """

    def __init__(self, *args, **kwargs) -> None:  # type: ignore
        super().__init__(*args, **kwargs)
        self.calls: List[Tuple[str, Bytes]] = []

    def copy(self) -> "RecordingTrie":
        other = RecordingTrie(self.db, self.get_root())
        other.calls = self.calls
        self.calls.append(("copy", b""))
        return other

    def get_raw(self, key: Key) -> Optional[Bytes]:
        self.calls.append(("get_raw", key_to_bytes(key)))
        return super().get_raw(key)

    def put_raw(self, key: Key, value: Bytes) -> None:
        self.calls.append(("put_raw", key_to_bytes(key)))
        super().put_raw(key, value)

    def get(self, key: Key) -> Optional[Bytes]:
        self.calls.append(("get", key_to_bytes(key)))
        return super().get(key)

    def put(self, key: Key, value: Bytes) -> None:
        self.calls.append(("put", key_to_bytes(key)))
        super().put(key, value)


class FailingPutTrie(MemoryTrie):
    """
    `MemoryTrie` whose trie writes always fail.
    """

    def copy(self) -> "FailingPutTrie":
        return FailingPutTrie(self.db, self.get_root())

    def put(self, key: Key, value: Bytes) -> None:
        raise StorageError("disk on fire")
