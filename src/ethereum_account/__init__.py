"""
Ethereum Account
^^^^^^^^^^^^^^^^

An account is the record stored against an address in the world state
trie. It is made up of four fields: a nonce, a balance, the root of the
account's own storage trie, and the hash of the account's code.

This package contains the canonical encoding of that record, along with the
protocol used to read and write an account's code and storage through a
trie store supplied by the caller.
"""

__version__ = "0.1.0"
