"""
Guard Clauses
^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Checks that raise one of the package's exceptions when a condition about
an account or a trie store does not hold.
"""

from typing import Callable, Union

ExceptionSource = Union[Callable[[], BaseException], BaseException]


def ensure(value: bool, exception: ExceptionSource) -> None:
    """
    Raise `exception` unless `value` is truthy.

    Parameters
    ----------
    value :
        Condition that must hold.
    exception :
        Exception instance to raise, or a callable returning one.
    """
    if value:
        return
    if isinstance(exception, BaseException):
        raise exception
    raise exception()
