"""
Copyright (c) 2025, the symhd developers
See LICENSE for details

Resolution of textual derivation indices. A token is either a decimal number
or an alphabetic label, and labels are hashed into the index range.
"""

from enum import Enum
import re

from symhd import SymHDError
from symhd.util.encode import intFromBytes

from .crypto import blake2bMac


MAX_INDEX = 2 ** 31 - 1
INDEX_MODULUS = 2 ** 31
LABEL_HASH_SIZE = 32

NUMBER_RE = re.compile(r"[0-9]+")
LABEL_RE = re.compile(r"[A-Za-z-]+")


class IndexMode(Enum):
    """
    How getIndex interprets a token.
    """

    NUM = "num"
    STR = "str"
    ANY = "any"


class InvalidMode(SymHDError):
    """
    The requested index resolution mode is not one of IndexMode.
    """

    pass


class InvalidIndex(SymHDError):
    """
    An index token, or an index passed to child derivation, is malformed.
    """

    pass


class InvalidNumericIndex(InvalidIndex):
    pass


class InvalidStringIndex(InvalidIndex):
    pass


class IndexOutOfRange(InvalidIndex):
    """
    A resolved index is outside [0, 2^31 - 1].
    """

    pass


def isNumber(s):
    return NUMBER_RE.fullmatch(s) is not None


def isLabel(s):
    return LABEL_RE.fullmatch(s) is not None


def isValidIndex(i):
    """
    Whether i is an integer in the range [0, 2^31 - 1].
    """
    return isinstance(i, int) and not isinstance(i, bool) and 0 <= i <= MAX_INDEX


def checkIndex(i):
    """
    Return i if it is a valid index.

    Raises:
        IndexOutOfRange: If i is outside [0, 2^31 - 1].
    """
    if not isValidIndex(i):
        raise IndexOutOfRange(f"out of range index {i!r}")
    return i


def strToIndex(s):
    """
    Hash a string into the index range. The first 4 bytes of the 32-byte
    BLAKE2b hash of the UTF-8 string are read as a big-endian unsigned integer
    and reduced modulo 2^31.

    Args:
        s (str): The string.

    Returns:
        int: An index in [0, 2^31 - 1].
    """
    digest = blake2bMac(s.encode("utf-8"), size=LABEL_HASH_SIZE)
    return intFromBytes(digest[:4].b) % INDEX_MODULUS


def toMode(mode):
    """
    Convert a mode name or IndexMode to an IndexMode.

    Raises:
        InvalidMode: If mode is not recognized.
    """
    if isinstance(mode, IndexMode):
        return mode
    try:
        return IndexMode(mode)
    except ValueError:
        raise InvalidMode(f"invalid index mode {mode!r}")


def getIndex(token, mode=IndexMode.ANY):
    """
    Resolve an index token according to mode.

    num: the token must be decimal digits.
    str: the token must be letters and dashes, and is hashed with strToIndex.
    any: decimal digits are tried first, then letters and dashes.

    Args:
        token (str): The index token.
        mode (IndexMode or str): The resolution mode.

    Returns:
        int: An index in [0, 2^31 - 1].

    Raises:
        InvalidMode, InvalidNumericIndex, InvalidStringIndex, InvalidIndex,
        IndexOutOfRange
    """
    mode = toMode(mode)
    if not isinstance(token, str):
        raise InvalidIndex(f"index token must be a string, got {type(token).__name__}")

    if mode == IndexMode.NUM:
        if not isNumber(token):
            raise InvalidNumericIndex(f"invalid number index {token!r}")
        i = int(token)
    elif mode == IndexMode.STR:
        if not isLabel(token):
            raise InvalidStringIndex(f"invalid string index {token!r}")
        i = strToIndex(token)
    else:
        if isNumber(token):
            i = int(token)
        elif isLabel(token):
            i = strToIndex(token)
        else:
            raise InvalidIndex(f"invalid index {token!r}")

    return checkIndex(i)
