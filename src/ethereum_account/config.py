"""
A module for managing trie store configurations.

Classes:
- TrieConfig: Holds configurations for the in-memory trie store.
"""

import logging
from typing import Optional

from pydantic import BaseModel, field_validator


class TrieConfig(BaseModel):
    """
    A class for accessing trie store configurations.
    """

    SECURED: bool = False
    """
    Hash keys with keccak256 before inserting them, as the Ethereum state and
    storage tries do.
    """

    READ_ONLY: bool = False
    """Reject all writes with a `StorageError`."""

    LOG_LEVEL: Optional[str] = None
    """
    Level applied to the `ethereum_account` loggers when a `TrieDB` is
    created with this configuration. `None` leaves the loggers alone.
    """

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: Optional[str]) -> Optional[str]:
        """Upper-case `value` and reject names `logging` does not know."""
        if value is None:
            return None
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    def apply_logging(self) -> None:
        """
        Set the level of the package's loggers to `LOG_LEVEL`, if set.
        """
        if self.LOG_LEVEL is None:
            return
        logging.getLogger("ethereum_account").setLevel(self.LOG_LEVEL)
