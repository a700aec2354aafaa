"""
Copyright (c) 2025, the symhd developers
See LICENSE for details
"""

import pytest

from symhd import SymHDError
from symhd.crypto.hdkey import EmptyPath
from symhd.crypto.index import (
    IndexOutOfRange,
    InvalidIndex,
    InvalidMode,
    InvalidNumericIndex,
    InvalidStringIndex,
)
from symhd.crypto.path import InvalidPath
from symhd.crypto.rando import InvalidSeedLength
from symhd.util.encode import InsufficientMaterial, InvalidInputType


@pytest.mark.parametrize(
    "err",
    [
        InvalidInputType,
        InsufficientMaterial,
        InvalidMode,
        InvalidNumericIndex,
        InvalidStringIndex,
        InvalidIndex,
        IndexOutOfRange,
        EmptyPath,
        InvalidPath,
        InvalidSeedLength,
    ],
)
def test_error_kinds(err):
    assert issubclass(err, SymHDError)
    with pytest.raises(SymHDError):
        raise err("test")
