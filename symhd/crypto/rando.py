"""
Copyright (c) 2025, the symhd developers
See LICENSE for details
"""

import os

from symhd import SymHDError
from symhd.util.encode import ByteArray


SECRET_SIZE = 32

MinSeedBytes = 16  # 128 bits
MaxSeedBytes = 64  # 512 bits


class InvalidSeedLength(SymHDError):
    pass


def checkSeedLength(length):
    """
    Check that seed length is correct.

    Args:
        length int: the seed length to be checked.

    Raises:
        InvalidSeedLength if length is not between MinSeedBytes and
        MaxSeedBytes included.
    """
    if length < MinSeedBytes or length > MaxSeedBytes:
        raise InvalidSeedLength(f"Invalid seed length {length}")


def generateSeed(length=SECRET_SIZE):
    """
    Generate a cryptographically-strong random seed, suitable as a master
    secret.

    Returns:
        ByteArray: random bytes of the given length.

    Raises:
        InvalidSeedLength if length is not between MinSeedBytes and
        MaxSeedBytes included.
    """
    checkSeedLength(length)
    return ByteArray(os.urandom(length))
