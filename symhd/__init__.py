"""
Copyright (c) 2025, the symhd developers
See LICENSE for details
"""


class SymHDError(Exception):
    pass
