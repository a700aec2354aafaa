"""
Copyright (c) 2025, the symhd developers
See LICENSE for details

Cryptographic functions. BLAKE2b serves both as the keyed MAC and, through
HMAC, as the hash behind an RFC 5869 extract-and-expand KDF. The salt and
fingerprint functions layer domain separation on top of those primitives.
"""

import hashlib
import hmac

from symhd import SymHDError
from symhd.util.encode import ByteArray, concatBytes, toBytes


BLAKE2B_SIZE = 64
MAC_SIZE = 16
FINGERPRINT_SIZE = 16
HKDF_MAX_LENGTH = 255 * BLAKE2B_SIZE

# Domain separation labels. The salt label doubles as the MAC key for
# calcSalt, and the others are HKDF info strings.
SALT_LABEL = b"symmetric_hd/salt"
MASTER_INFO = b"symmetric_hd/master"
CHILD_INFO = b"symmetric_hd/child"
FINGERPRINT_INFO = b"symmetric_hd/fingerprint"


def hmacDigest(key, msg, digestmod=hashlib.blake2b):
    """
    Get the hmac keyed hash.

    Args:
        key (byte-like): the key
        msg (byte-like): the message
        digestmod (digest): A hashlib digest type constant.

    Returns:
        bytes: The secure hash of msg.
    """
    h = hmac.new(bytes(key), msg=bytes(msg), digestmod=digestmod)
    return h.digest()


def blake2bMac(msg, key=b"", size=MAC_SIZE):
    """
    The BLAKE2b keyed hash. With an empty key this is a plain BLAKE2b hash
    of the requested length.

    Args:
        msg (byte-like): The message.
        key (byte-like): The MAC key, at most 64 bytes.
        size (int): The digest length, 1 to 64 bytes.

    Returns:
        ByteArray: The digest.
    """
    h = hashlib.blake2b(bytes(msg), digest_size=size, key=bytes(key))
    return ByteArray(h.digest())


def hkdfExtract(salt, ikm):
    """
    HKDF-Extract with HMAC-BLAKE2b.

    Args:
        salt (byte-like): The salt. An empty salt is replaced by a block of
            zeros, per RFC 5869.
        ikm (byte-like): Input keying material.

    Returns:
        bytes: The 64-byte pseudorandom key.
    """
    if len(salt) == 0:
        salt = bytes(BLAKE2B_SIZE)
    return hmacDigest(salt, ikm)


def hkdfExpand(prk, info, length):
    """
    HKDF-Expand with HMAC-BLAKE2b.

    Args:
        prk (byte-like): The pseudorandom key from hkdfExtract.
        info (byte-like): Context information.
        length (int): The number of bytes of output keying material.

    Returns:
        bytes: The output keying material.
    """
    if length < 0 or length > HKDF_MAX_LENGTH:
        raise SymHDError(f"hkdf: output length {length} outside [0, {HKDF_MAX_LENGTH}]")
    info = bytes(info)
    t = b""
    okm = b""
    i = 1
    while len(okm) < length:
        t = hmacDigest(prk, t + info + bytes([i]))
        okm += t
        i += 1
    return okm[:length]


def hkdf(ikm, salt, info, length):
    """
    Derive keying material with HKDF over HMAC-BLAKE2b. Deterministic for
    fixed inputs.

    Args:
        ikm (byte-like): Input keying material.
        salt (byte-like): The salt.
        info (byte-like): Context information, used for domain separation.
        length (int): The number of output bytes.

    Returns:
        ByteArray: The derived bytes.
    """
    return ByteArray(hkdfExpand(hkdfExtract(salt, ikm), info, length))


def calcSalt(secret):
    """
    Calculate a domain-separated salt for a secret. The salt is the salt label
    followed by a 16-byte BLAKE2b MAC of the secret keyed with that label, so it
    can be reproduced from the secret alone.

    Args:
        secret (byte-like): The secret or key material.

    Returns:
        ByteArray: The 33-byte salt.
    """
    return concatBytes(SALT_LABEL, blake2bMac(secret, key=SALT_LABEL, size=MAC_SIZE))


def fingerprint(parent, child):
    """
    Calculate the fingerprint binding a child key to its parent key. Only the
    two keys are inputs. Chain codes and paths never are.

    Args:
        parent (byte-like): The parent key material (or the secret, for a
            master key).
        child (byte-like): The child key material.

    Returns:
        ByteArray: The 16-byte fingerprint.
    """
    fpKey = hkdf(parent, calcSalt(parent), FINGERPRINT_INFO, 32)
    return blake2bMac(child, key=fpKey, size=FINGERPRINT_SIZE)


def constantTimeEqual(a, b):
    """
    Compare two byte strings without short-circuiting on the first differing
    byte. Every byte is visited and the XOR differences are OR-ed into an
    accumulator that is checked once at the end. The lengths are not secret,
    so a length mismatch returns early.

    Args:
        a (byte-like): The first byte string.
        b (byte-like): The second byte string.

    Returns:
        bool: True if the byte strings are equal.
    """
    a, b = bytes(a), bytes(b)
    if len(a) != len(b):
        return False
    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0


def verifyFp(child, parent):
    """
    Verify a child key record's fingerprint against an alleged parent record.
    A mismatch is an ordinary outcome and returns False.

    Args:
        child (KeyRecord): The record whose fingerprint is checked.
        parent (KeyRecord): The alleged parent.

    Returns:
        bool: True if child was derived from parent.
    """
    expected = fingerprint(parent.key, child.key)
    return constantTimeEqual(child.fingerprint, expected)


def secretBytes(secret):
    """
    Normalize a secret with toBytes. Strings are decoded as hex when they look
    like hex, else UTF-8.

    Args:
        secret (str, int, byte-like): The secret.

    Returns:
        ByteArray: The secret bytes.
    """
    return ByteArray(toBytes(secret))
