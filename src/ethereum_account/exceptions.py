"""
Error types raised while handling account records.
"""


class AccountException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class DecodeError(AccountException):
    """
    Thrown when encoded bytes do not describe a well-formed account record.
    """


class StorageError(AccountException):
    """
    Thrown when a read or write against a trie store fails.
    """
