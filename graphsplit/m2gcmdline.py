"""Command-line parsing for the mesh-to-graph converter."""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping, Sequence

from graphsplit.params import GType, Params, UsageError

_PROG = "m2gmetis"

_LONG_OPTIONS = {
    "gtype": True,
    "ncommon": True,
    "dbglvl": True,
    "help": False,
}

_HELP = f"""\
 
Usage: {_PROG} [options] <meshfile> <graphfile>
 
 Required parameters
    meshfile    Stores the input mesh.
    graphfile   The filename of the output graph.
 
 Optional parameters
  -gtype=string
     Specifies the graph that will be generated.
     The possible values are:
        dual     - Generate dual graph of the mesh [default]
        nodal    - Generate the nodal graph of the mesh
 
  -ncommon=int [applies when gtype=dual]
     Specifies the common number of nodes that two elements must have
     in order to put an edge between them in the dual graph. Default is 1.
 
  -dbglvl=int
     Selects the dbglvl.
 
  -help
     Prints this message."""

_SHORT_HELP = f"""\
 
   Usage: {_PROG} [options] <meshfile> <graphfile>
          use '{_PROG} -help' for a summary of the options."""

_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _illegal(prog: str) -> UsageError:
    return UsageError(
        "Illegal command-line option(s)\n"
        f"Use {prog} -help for a summary of the options."
    )


def _lookup(name: str, options: Mapping[str, bool], prog: str) -> str:
    if name in options:
        return name
    matches = [opt for opt in options if name and opt.startswith(name)]
    if len(matches) != 1:
        raise _illegal(prog)
    return matches[0]


def _getopt_long_only(
    argv: Sequence[str], options: Mapping[str, bool], prog: str
) -> tuple[list[tuple[str, str | None]], list[str]]:
    """Split ``argv`` into long options (``-name=value``) and positional arguments.

    Options may use one or two dashes, may be abbreviated to a unique prefix
    and may appear anywhere; ``--`` ends option processing.
    """
    found: list[tuple[str, str | None]] = []
    positional: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            positional.extend(args)
            break
        if not arg.startswith("-") or arg == "-":
            positional.append(arg)
            continue
        body = arg[2:] if arg.startswith("--") else arg[1:]
        name, sep, value = body.partition("=")
        key = _lookup(name, options, prog)
        if options[key]:
            if not sep:
                nxt = next(args, None)
                if nxt is None:
                    raise _illegal(prog)
                value = nxt
            found.append((key, value))
        else:
            if sep:
                raise _illegal(prog)
            found.append((key, None))
    return found, positional


def parse_cmdline(argv: Sequence[str] | None = None) -> Params:
    """Parse the converter's arguments: options, a mesh file and an output file.

    Prints the help and exits with status 0 for ``-help`` or when the
    positional arguments are missing; raises :class:`UsageError` on bad input.
    """
    if argv is None:
        argv = sys.argv[1:]

    params = Params(gtype=GType.DUAL, ncommon=1, dbglvl=0)

    found, positional = _getopt_long_only(argv, _LONG_OPTIONS, _PROG)
    for name, value in found:
        if name == "gtype":
            try:
                params.gtype = GType(value)
            except ValueError:
                raise UsageError(f"Invalid option -{name}={value}") from None
        elif name == "ncommon":
            params.ncommon = _atoi(value)
            if params.ncommon < 1:
                raise UsageError("The -ncommon option should specify a number >= 1.")
        elif name == "dbglvl":
            params.dbglvl = _atoi(value)
        elif name == "help":
            print(_HELP)
            raise SystemExit(0)

    if len(positional) != 2:
        print("Missing parameters.", end="")
        print(_SHORT_HELP)
        raise SystemExit(0)

    params.filename, params.outfile = positional
    return params