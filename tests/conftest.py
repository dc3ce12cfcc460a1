import pytest

from ethereum_account.config import TrieConfig
from ethereum_account.trie import MemoryTrie, TrieDB


@pytest.fixture
def db() -> TrieDB:
    return TrieDB()


@pytest.fixture
def trie(db: TrieDB) -> MemoryTrie:
    return MemoryTrie(db)


@pytest.fixture
def read_only_trie() -> MemoryTrie:
    return MemoryTrie(TrieDB(TrieConfig(READ_ONLY=True)))
