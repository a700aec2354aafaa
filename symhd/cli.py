"""
Copyright (c) 2025, the symhd developers
See LICENSE for details

The symhd command line tool. A thin adapter over symhd.crypto.hdkey for
deriving keys and checking lineage from a shell.
"""

import argparse
import json
import sys

from symhd import SymHDError
from symhd.config import CmdArgs
from symhd.crypto import hdkey, rando
from symhd.crypto.path import parsePath
from symhd.util import helpers


log = helpers.getLogger("CLI")

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2

SECRET_HELP = "the secret, as hex or UTF-8 text"


def keyAtPath(master, path):
    """
    The key at path relative to master. Path "m" is master itself.
    """
    indices = parsePath(path)
    if not indices:
        return master
    return hdkey.derivePath(master, indices)


def printRecord(record):
    print(json.dumps(record.dict(), indent=4))


def cmdNew(args):
    print(rando.generateSeed().hex())
    return EXIT_OK


def cmdMaster(args):
    master = hdkey.deriveMaster(args.secret)
    printRecord(master)
    master.zero()
    return EXIT_OK


def cmdDerive(args):
    master = hdkey.deriveMaster(args.secret)
    key = keyAtPath(master, args.path)
    printRecord(key)
    key.zero()
    master.zero()
    return EXIT_OK


def cmdLineage(args):
    master = hdkey.deriveMaster(args.secret)
    child = keyAtPath(master, args.child)
    parent = keyAtPath(master, args.parent)
    ok = child.lineage(parent)
    print(json.dumps(ok))
    for k in (child, parent, master):
        k.zero()
    return EXIT_OK if ok else EXIT_MISMATCH


def makeParser():
    parser = argparse.ArgumentParser(
        prog="symhd",
        description="Hierarchical deterministic symmetric key derivation.",
        epilog="Global options: --config PATH, --loglevel LEVEL|MOD:LEVEL,...,"
        " --logfile PATH",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("new", help="print a random 32-byte secret as hex")
    p.set_defaults(func=cmdNew)

    p = sub.add_parser("master", help="print the master key for a secret")
    p.add_argument("secret", help=SECRET_HELP)
    p.set_defaults(func=cmdMaster)

    p = sub.add_parser("derive", help="print the key at a derivation path")
    p.add_argument("secret", help=SECRET_HELP)
    p.add_argument("path", help='derivation path, e.g. "m/42/account/0"')
    p.set_defaults(func=cmdDerive)

    p = sub.add_parser(
        "lineage", help="check that CHILD was derived directly from PARENT"
    )
    p.add_argument("secret", help=SECRET_HELP)
    p.add_argument("child", help="derivation path of the child")
    p.add_argument("parent", help="derivation path of the alleged parent")
    p.set_defaults(func=cmdLineage)

    return parser


def main(argv=None):
    """
    Run the command line tool.

    Args:
        argv (list(str)): Arguments, without the program name. Defaults to
            sys.argv[1:].

    Returns:
        int: The exit status.
    """
    cfg = CmdArgs(argv)
    cfg.prepareLogging()
    args = makeParser().parse_args(cfg.remaining)
    try:
        return args.func(args)
    except SymHDError as e:
        log.debug(helpers.formatTraceback(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
