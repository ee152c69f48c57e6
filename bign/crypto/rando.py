"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""

import os

from bign import ParameterRangeError
from bign.util.encode import intFromBytes


MinSeedBytes = 16  # 128 bits
MaxSeedBytes = 64  # 512 bits


def checkSeedLength(length):
    """
    Check that seed length is correct.

    Args:
        length int: the seed length to be checked.

    Raises:
        ParameterRangeError if length is not between MinSeedBytes and
        MaxSeedBytes included.
    """
    if length < MinSeedBytes or length > MaxSeedBytes:
        raise ParameterRangeError(f"Invalid seed length {length}")


def generateSeed(length=MaxSeedBytes):
    """
    Generate a cryptographically-strong random seed.

    Returns:
        bytes: a random bytes object of the given length.

    Raises:
        ParameterRangeError if length is not between MinSeedBytes and
        MaxSeedBytes included.
    """
    checkSeedLength(length)
    return os.urandom(length)


def randomScalar(q, length):
    """
    Draw a uniformly distributed scalar in [1, q-1]. Seeds of length bytes are
    reduced modulo q and zero is rejected.

    Args:
        q (int): The group order.
        length (int): The seed length in bytes. Should cover q.

    Returns:
        int: The scalar.
    """
    while True:
        d = intFromBytes(generateSeed(length)) % q
        if d != 0:
            return d


def randomBelow(n):
    """
    A random integer in [0, n) for n > 0, using rejection sampling on the
    smallest covering bit mask.
    """
    if n <= 0:
        raise ParameterRangeError(f"empty range [0, {n})")
    bits = n.bit_length()
    nBytes = (bits + 7) // 8
    mask = (1 << bits) - 1
    while True:
        v = intFromBytes(os.urandom(nBytes)) & mask
        if v < n:
            return v
