"""
Copyright (c) 2025, the symhd developers
See LICENSE for details
"""

import re

from symhd import SymHDError

from .index import IndexMode, getIndex


PATH_RE = re.compile(r"m(/[0-9A-Za-z-]+)*")


class InvalidPath(SymHDError):
    pass


def parsePath(path):
    """
    Parse a derivation path such as "m/42/account/0" into indices. Each
    segment is resolved with getIndex in IndexMode.ANY.

    Args:
        path (str): The path. "m" alone yields no indices.

    Returns:
        list(int): The indices, outermost first.

    Raises:
        InvalidPath: If the path does not match the grammar.
        InvalidIndex: If a segment is neither a number nor a label.
    """
    if not isinstance(path, str) or PATH_RE.fullmatch(path) is None:
        raise InvalidPath(f"invalid derivation path {path!r}")
    return [getIndex(segment, IndexMode.ANY) for segment in path.split("/")[1:]]
