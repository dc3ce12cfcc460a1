"""
Cryptographic Functions
^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Cryptographic primitives used by account records.
"""

from .hash import Hash32, Hasher, keccak256

__all__ = ["Hash32", "Hasher", "keccak256"]
