"""
Copyright (c) 2025, the symhd developers
See LICENSE for details

Hierarchical deterministic symmetric keys.

A master key is derived from a secret, and every other key is derived from a
parent key plus a 31-bit index. Each key carries a chain code used only to
derive its children, its depth and path in the hierarchy, and a fingerprint
that lets a holder of the parent key confirm the lineage.

Callers own the key material of the records they receive. Call
KeyRecord.zero when a record is no longer needed.
"""

from symhd import SymHDError
from symhd.util import helpers
from symhd.util.encode import ByteArray, concatBytes, splitIkm, toBytes

from . import crypto
from .index import IndexMode, InvalidIndex, checkIndex, getIndex
from .path import parsePath


KEY_SIZE = 32
CHAIN_CODE_SIZE = 32
IKM_SIZE = KEY_SIZE + CHAIN_CODE_SIZE
MASTER_PATH = "m"

log = helpers.getLogger("HDKEY")


class EmptyPath(SymHDError):
    """
    Path derivation was requested with no indices.
    """

    pass


class KeyRecord:
    """
    KeyRecord is a derived key with its chain code, depth, path, and
    fingerprint. Records are created by deriveMaster and deriveChild and are
    not modified afterwards, except by zero.
    """

    def __init__(self, key, code, depth, path, fingerprint):
        """
        Args:
            key (byte-like): The 32-byte key material.
            code (byte-like): The 32-byte chain code.
            depth (int): Depth in the hierarchy. 0 for a master key.
            path (str): The derivation path, e.g. "m/42/0".
            fingerprint (byte-like): The 16-byte fingerprint binding the key to
                its parent.
        """
        self.key = ByteArray(key)
        self.code = ByteArray(code)
        self.depth = depth
        self.path = path
        self.fingerprint = ByteArray(fingerprint)

    def __eq__(self, other):
        if not isinstance(other, KeyRecord):
            return NotImplemented
        return (
            self.key == other.key
            and self.code == other.code
            and self.depth == other.depth
            and self.path == other.path
            and self.fingerprint == other.fingerprint
        )

    def __repr__(self):
        return f"KeyRecord(path={self.path!r}, depth={self.depth})"

    def child(self, index):
        """
        Derive the child of this key at the given index. See deriveChild.
        """
        return deriveChild(self, index)

    def derivePath(self, indices):
        """
        Derive a descendant of this key. See derivePath.
        """
        return derivePath(self, indices)

    def lineage(self, parent):
        """
        Check whether this key is a direct child of parent.

        Args:
            parent (KeyRecord): The alleged parent.

        Returns:
            bool: True if the fingerprint matches the parent's key.
        """
        return crypto.verifyFp(self, parent)

    def dict(self):
        """
        The record with bytes rendered as hex, for display.

        Returns:
            dict: key, code, depth, path, fingerprint.
        """
        return dict(
            key=self.key.hex(),
            code=self.code.hex(),
            depth=self.depth,
            path=self.path,
            fingerprint=self.fingerprint.hex(),
        )

    def zero(self):
        """
        Overwrite the key material and chain code with zeros.
        """
        self.key.zero()
        self.code.zero()


def deriveMaster(secret):
    """
    Derive a master key from a secret.

    HKDF keyed by the secret, salted with calcSalt(secret) and labelled with
    the master info string, yields 64 bytes that split into the master key and
    chain code. The fingerprint is taken against the secret.

    Args:
        secret (str, int, byte-like): The secret. Strings are decoded as hex
            when they look like hex, else UTF-8.

    Returns:
        KeyRecord: The master key, at depth 0 and path "m".
    """
    secret = crypto.secretBytes(secret)
    salt = crypto.calcSalt(secret)
    ikm = crypto.hkdf(secret, salt, crypto.MASTER_INFO, IKM_SIZE)
    key, code = splitIkm(ikm, [KEY_SIZE, CHAIN_CODE_SIZE])
    fp = crypto.fingerprint(secret, key)
    log.debug("derived master key")
    return KeyRecord(key=key, code=code, depth=0, path=MASTER_PATH, fingerprint=fp)


def resolveIndex(index):
    """
    Resolve an index argument for child derivation. Integers are range
    checked, strings are letters and dashes hashed with strToIndex.

    Args:
        index (int or str): The index.

    Returns:
        int: An index in [0, 2^31 - 1].
    """
    if isinstance(index, int) and not isinstance(index, bool):
        return checkIndex(index)
    if isinstance(index, str):
        return getIndex(index, IndexMode.STR)
    raise InvalidIndex(f"invalid index type {type(index).__name__}")


def deriveChild(parent, index):
    """
    Derive a child key from a parent key at an index.

    HKDF keyed by the parent's chain code, salted with the parent key followed
    by the 4-byte big-endian index and labelled with the child info string,
    yields 64 bytes that split into the child key and chain code. The parent's
    key material is never used as HKDF input keying material.

    Args:
        parent (KeyRecord): The parent key.
        index (int or str): The child index. See resolveIndex.

    Returns:
        KeyRecord: The child key.
    """
    i = resolveIndex(index)
    salt = concatBytes(parent.key, toBytes(i))
    ikm = crypto.hkdf(parent.code, salt, crypto.CHILD_INFO, IKM_SIZE)
    key, code = splitIkm(ikm, [KEY_SIZE, CHAIN_CODE_SIZE])
    fp = crypto.fingerprint(parent.key, key)
    path = f"{parent.path}/{i}"
    log.debug(f"derived child key {path}")
    return KeyRecord(
        key=key, code=code, depth=parent.depth + 1, path=path, fingerprint=fp
    )


def derivePath(start, indices):
    """
    Derive a descendant key by applying deriveChild for each index in turn.

    Args:
        start (KeyRecord): The key to start from.
        indices (iterable(int or str)): The indices, outermost first.

    Returns:
        KeyRecord: The final key.

    Raises:
        EmptyPath: If indices is empty.
    """
    indices = list(indices)
    if not indices:
        raise EmptyPath(f"no indices to derive from {start.path}")
    key = start
    for index in indices:
        key = deriveChild(key, index)
    return key


def deriveFromPath(start, path):
    """
    Derive a descendant key from a path string like "m/42/account/0". The path
    is relative to start.

    Args:
        start (KeyRecord): The key to start from.
        path (str): The path string.

    Returns:
        KeyRecord: The final key.
    """
    return derivePath(start, parsePath(path))
