"""
Copyright (c) 2025, the symhd developers
See LICENSE for details

Byte conversion helpers. ByteArray wraps a bytearray and provides the few
operators needed by the key derivation code, and the module-level functions
normalize derivation inputs to bytes.
"""

import re

from symhd import SymHDError


HEX_RE = re.compile(r"[0-9a-fA-F]+")

UINT32_MASK = 0xFFFFFFFF


class InvalidInputType(SymHDError):
    """
    A value passed for byte conversion is not a string, integer, or bytes.
    """

    pass


class InsufficientMaterial(SymHDError):
    """
    Requested split sizes exceed the length of the keying material.
    """

    pass


def intToBytes(i, signed=False):
    """
    Encodes an integer to bytes.

    Args:
        i (int): The integer.
        signed (bool): Whether to encode as a signed integer.

    Returns:
        bytearray: The encoded integer.
    """
    length = ((i + ((i * signed) < 0)).bit_length() + 7 + signed) // 8
    return bytearray(i.to_bytes(length, byteorder="big", signed=signed))


def intFromBytes(b, signed=False):
    """
    Decodes an integer from bytes.

    Args:
        b (bytes-like): The encoded integer.
        signed (bool): Whether to decode as a signed integer.

    Returns:
        int: The decoded integer.
    """
    return int.from_bytes(b, "big", signed=signed)


def uint32ToBytes(i):
    """
    Encode the low 32 bits of an integer as 4 big-endian bytes. Negative
    integers wrap as two's complement.

    Args:
        i (int): The integer.

    Returns:
        bytearray: The 4 encoded bytes.
    """
    return bytearray((i & UINT32_MASK).to_bytes(4, byteorder="big"))


def decodeBA(b, copy=False):
    """
    Decode into a bytearray.

    Args:
        b (str, bytes-like, ByteArray, int, list(int)): The value to decode to
            a bytearray. Strings are interpreted as hexadecimal. Integers are
            minimally encoded to an unsigned integer.

    Returns:
        bytearray: The decoded bytes.
    """
    if isinstance(b, ByteArray):
        return bytearray(b.b) if copy else b.b
    if isinstance(b, bytearray):
        return bytearray(b) if copy else b
    if isinstance(b, bytes):
        return bytearray(b)
    if isinstance(b, int):
        return intToBytes(b) if b else bytearray([0])
    if isinstance(b, str):
        return bytearray.fromhex(b)
    if hasattr(b, "__iter__"):
        return bytearray(b)
    raise TypeError("decodeBA: unknown type %s" % type(b))


class ByteArray:
    """
    ByteArray is a bytearray manager. It provides comparisons, concatenation
    and slicing that work with various types of input. Since bytearrays are
    mutable, ByteArray can also zero the internal value without relying on
    garbage collection, which is how holders of derived key material are
    expected to dispose of it.
    """

    def __init__(self, b=b"", copy=True, length=None):
        """
        Set copy to False if you want to share the memory with another
        bytearray/ByteArray. If the type of b is not bytearray or ByteArray,
        copy has no effect. If length is provided, the value is left-padded
        with zeros to that length.
        """
        b = decodeBA(b, copy=copy)
        if length:
            if len(b) > length:
                raise SymHDError("ByteArray: %i bytes > length %i" % (len(b), length))
            b = bytearray(length - len(b)) + b
        self.b = b

    def __eq__(self, a):
        try:
            return bytearray.__eq__(self.b, decodeBA(a))
        except Exception:
            return False

    def __ne__(self, a):
        try:
            return bytearray.__ne__(self.b, decodeBA(a))
        except Exception:
            return True

    def __repr__(self):
        return "ByteArray(" + self.hex() + ")"

    def __len__(self):
        return len(self.b)

    def __bytes__(self):
        return bytes(self.b)

    def __add__(self, a):
        return self.__iadd__(a)

    def __iadd__(self, a):
        """append the bytes and return a new ByteArray"""
        a = decodeBA(a)
        return ByteArray(self.b + a)

    def __getitem__(self, k):
        if isinstance(k, slice):
            return ByteArray(self.b[k.start : k.stop : k.step], copy=False)
        return self.b[k]

    def __hash__(self):
        """Enables ByteArray to be a dict key."""
        return hash(bytes(self.b))

    def hex(self):
        """
        A hexadecimal string representation of the bytes.

        Returns:
            str: The hex bytes.
        """
        return self.b.hex()

    def zero(self):
        """
        Sets the bytes of the underlying bytearray to zero. The benefit of
        zeroing is that the info is destroyed immediately, rather than relying
        on the garbage collector.
        """
        for i in range(len(self.b)):
            self.b[i] = 0

    def iszero(self):
        """
        True if all bytes are zero.
        """
        return all((v == 0 for v in self.b))

    def int(self):
        """The bytes as an integer."""
        return intFromBytes(self.b)

    def bytes(self):
        """The bytes as Python `bytes`."""
        return bytes(self.b)

    def copy(self):
        """A copy of the ByteArray."""
        return ByteArray(self.b)


def isHex(s):
    """
    Whether the string is an even-length, non-empty run of hexadecimal digits.

    Args:
        s (str): The string to check.

    Returns:
        bool: True if the string can be decoded as hex.
    """
    return len(s) % 2 == 0 and HEX_RE.fullmatch(s) is not None


def strToBytes(s):
    """
    Convert a string to bytes. Hexadecimal strings are decoded as hex,
    anything else is UTF-8 encoded.

    Args:
        s (str): The string.

    Returns:
        ByteArray: The decoded bytes.
    """
    if isHex(s):
        return ByteArray(s)
    return ByteArray(s.encode("utf-8"))


def toBytes(v):
    """
    Normalize a derivation input to bytes.

    Strings are auto-detected as hex or UTF-8 (see strToBytes). Integers are
    encoded as 4 big-endian bytes of their low 32 bits. Bytes-like values,
    including ByteArray, are returned unchanged.

    Args:
        v (str, int, bytes-like, ByteArray): The value to convert.

    Returns:
        ByteArray or bytes-like: The bytes.

    Raises:
        InvalidInputType: For any other type, including bool.
    """
    if isinstance(v, str):
        return strToBytes(v)
    if isinstance(v, int) and not isinstance(v, bool):
        return ByteArray(uint32ToBytes(v), copy=False)
    if isinstance(v, (ByteArray, bytes, bytearray)):
        return v
    raise InvalidInputType(f"invalid type for byte conversion: {type(v).__name__}")


def concatBytes(a, b):
    """
    Concatenate two byte sequences into a new ByteArray. Neither input is
    modified or shared with the result.

    Args:
        a (bytes-like): The leading bytes.
        b (bytes-like): The trailing bytes.

    Returns:
        ByteArray: a followed by b.
    """
    return ByteArray(decodeBA(a, copy=True) + decodeBA(b))


def splitIkm(ikm, sizes):
    """
    Split keying material into consecutive, non-overlapping pieces of the
    given sizes. Any trailing bytes not covered by sizes are ignored.

    Args:
        ikm (bytes-like): The keying material.
        sizes (iterable(int)): The length of each piece, in order.

    Returns:
        list(ByteArray): The pieces.

    Raises:
        InsufficientMaterial: If a size is negative or the sizes add up to more
            than len(ikm).
    """
    b = decodeBA(ikm)
    sizes = list(sizes)
    if any(size < 0 for size in sizes):
        raise InsufficientMaterial(f"negative split size in {sizes}")
    total = sum(sizes)
    if total > len(b):
        raise InsufficientMaterial(
            f"cannot split {len(b)} bytes into pieces totalling {total} bytes"
        )
    pieces = []
    offset = 0
    for size in sizes:
        pieces.append(ByteArray(b[offset : offset + size], copy=False))
        offset += size
    return pieces
