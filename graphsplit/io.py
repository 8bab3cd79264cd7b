"""Reading and writing graphs, meshes, target weights and result vectors."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Iterator, Sequence
from typing import IO

from graphsplit.graph import Graph, Mesh

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_REAL_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_RULE = "-" * 78


class InputError(ValueError):
    """Raised when an input file is missing or malformed."""


class _Cursor:
    """Reads numbers one after another from a line, like strtol/strtod."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _take(self, regex: re.Pattern[str]) -> str | None:
        match = regex.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group(1)

    def read_int(self) -> int | None:
        token = self._take(_INT_RE)
        return None if token is None else int(token)

    def read_real(self) -> float | None:
        token = self._take(_REAL_RE)
        return None if token is None else float(token)

    def peek(self) -> str:
        return self.text[self.pos : self.pos + 1]

    def skip(self) -> None:
        self.pos += 1


def _read_text(path: str | os.PathLike[str], what: str) -> str:
    name = os.fspath(path)
    if not os.path.isfile(name):
        raise InputError(f"{what} {name} does not exist!")
    try:
        with open(name, encoding="utf-8") as fh:
            return fh.read()
    except OSError as exc:
        raise InputError(f"cannot read {name}: {exc}") from exc


def _open_for_writing(path: str) -> IO[str]:
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise InputError(f"cannot write {path}: {exc}") from exc


def _next_data_line(lines: Iterator[str]) -> str | None:
    """The next line that is not a comment, or None at the end of input."""
    for line in lines:
        if not line.startswith("%"):
            return line
    return None


def read_graph(path: str | os.PathLike[str]) -> Graph:
    """Read a graph in the text format: a header line, then one line per vertex."""
    name = os.fspath(path)
    lines = iter(_read_text(name, "File").splitlines(keepends=True))

    header = _next_data_line(lines)
    if header is None:
        raise InputError(f"Premature end of input file: file: {name}")

    cur = _Cursor(header)
    fields: list[int] = []
    while len(fields) < 4 and (value := cur.read_int()) is not None:
        fields.append(value)
    if len(fields) < 2:
        raise InputError(
            "The input file does not specify the number of vertices and edges."
        )

    nvtxs, nedges = fields[0], fields[1]
    fmt = fields[2] if len(fields) > 2 else 0
    ncon = fields[3] if len(fields) > 3 else 0

    if nvtxs <= 0 or nedges <= 0:
        raise InputError(
            f"The supplied nvtxs:{nvtxs} and nedges:{nedges} must be positive."
        )
    if fmt > 111:
        raise InputError(f"Cannot read this type of file format [fmt={fmt}]!")

    fmtstr = f"{int(math.fmod(fmt, 1000)):03d}"
    readvs = fmtstr[0] == "1"
    readvw = fmtstr[1] == "1"
    readew = fmtstr[2] == "1"

    if ncon > 0 and not readvw:
        raise InputError(
            f"You specified ncon={ncon}, but the fmt parameter does not specify "
            "vertex weights. Make sure that the fmt parameter is set to either "
            "10 or 11."
        )

    nedges *= 2
    ncon = ncon or 1

    xadj = [0]
    adjncy: list[int] = []
    vwgt = [1] * (ncon * nvtxs)
    adjwgt: list[int] | None = [] if readew else None
    vsize = [1] * nvtxs

    for i in range(nvtxs):
        line = _next_data_line(lines)
        if line is None:
            raise InputError(
                f"Premature end of input file while reading vertex {i + 1}."
            )
        cur = _Cursor(line)

        if readvs:
            size = cur.read_int()
            if size is None:
                raise InputError(
                    f"The line for vertex {i + 1} does not have vsize information"
                )
            if size < 0:
                raise InputError(f"The size for vertex {i + 1} must be >= 0")
            vsize[i] = size

        if readvw:
            for l in range(ncon):
                weight = cur.read_int()
                if weight is None:
                    raise InputError(
                        f"The line for vertex {i + 1} does not have enough "
                        f"weights for the {ncon} constraints."
                    )
                if weight < 0:
                    raise InputError(
                        f"The weight vertex {i + 1} and constraint {l} must be >= 0"
                    )
                vwgt[i * ncon + l] = weight

        while (edge := cur.read_int()) is not None:
            if not 1 <= edge <= nvtxs:
                raise InputError(f"Edge {edge} for vertex {i + 1} is out of bounds")
            ewgt = 1
            if readew:
                read = cur.read_int()
                if read is None:
                    raise InputError(f"Premature end of line for vertex {i + 1}")
                if read <= 0:
                    raise InputError(
                        f"The weight ({read}) for edge ({i + 1}, {edge}) "
                        "must be positive."
                    )
                ewgt = read
            if len(adjncy) == nedges:
                raise InputError(
                    "There are more edges in the file than the "
                    f"{nedges // 2} specified."
                )
            adjncy.append(edge - 1)
            if adjwgt is not None:
                adjwgt.append(ewgt)
        xadj.append(len(adjncy))

    k = len(adjncy)
    if k != nedges:
        message = (
            "In the first line of the file, you specified that the graph "
            f"contained {nedges // 2} edges. However, only {k // 2} edges "
            "were found in the file."
        )
        if 2 * k == nedges:
            message += (
                " You specified twice the number of edges that you have in the "
                "file. Remember that the number of edges specified in the first "
                "line counts each edge between vertices v and u only once."
            )
        message += " Please specify the correct number of edges in the first line."
        raise InputError(message)

    return Graph(
        nvtxs=nvtxs,
        nedges=nedges,
        ncon=ncon,
        xadj=xadj,
        adjncy=adjncy,
        vwgt=vwgt,
        vsize=vsize,
        adjwgt=adjwgt,
    )


def read_mesh(path: str | os.PathLike[str]) -> Mesh:
    """Read a mesh: a header with the element count, then one line per element."""
    name = os.fspath(path)
    all_lines = _read_text(name, "File").splitlines(keepends=True)
    nlines = len(all_lines)
    lines = iter(all_lines)

    header = _next_data_line(lines)
    if header is None:
        raise InputError(f"Premature end of input file: file: {name}")

    cur = _Cursor(header)
    ne = cur.read_int()
    if ne is None:
        raise InputError("The input file does not specify the number of elements.")
    ncon = cur.read_int() or 0

    if ne <= 0:
        raise InputError(f"The supplied number of elements:{ne} must be positive.")
    if ne > nlines:
        raise InputError(
            f"The file has {nlines} lines which smaller than the number of "
            f"elements of {ne} specified in the header line."
        )

    eptr = [0]
    eind: list[int] = []
    ewgt = [1] * ((ncon or 1) * ne)

    for i in range(ne):
        line = _next_data_line(lines)
        if line is None:
            raise InputError(
                f"Premature end of input file while reading element {i + 1}."
            )
        cur = _Cursor(line)

        for l in range(ncon):
            weight = cur.read_int()
            if weight is None:
                raise InputError(
                    f"The line for vertex {i + 1} does not have enough weights "
                    f"for the {ncon} constraints."
                )
            if weight < 0:
                raise InputError(
                    f"The weight for element {i + 1} and constraint {l} must be >= 0"
                )
            ewgt[i * ncon + l] = weight

        while (node := cur.read_int()) is not None:
            if node < 1:
                raise InputError(f"Node {node} for element {i + 1} is out of bounds")
            eind.append(node - 1)
        eptr.append(len(eind))

    return Mesh(
        ne=ne,
        nn=max(eind, default=-1) + 1,
        ncon=ncon or 1,
        eptr=eptr,
        eind=eind,
        ewgt=ewgt,
    )


def read_tpwgts(
    path: str | os.PathLike[str] | None, nparts: int, ncon: int
) -> list[float]:
    """Target partition weights, ``ncon`` per partition, row-major.

    Without a file every partition gets ``1/nparts``. Each line of the file has
    the form ``from[-to][:fromcnum[-tocnum]]=wgt``; partitions and constraints
    left unspecified share what remains of the unit total.
    """
    tpwgts = [-1.0] * (nparts * ncon)

    if path is None:
        return [1.0 / nparts] * (nparts * ncon)

    text = _read_text(path, "Graph file")

    for raw in text.splitlines(keepends=True):
        line = raw.replace(" ", "")
        shown = line.rstrip("\r\n")
        cur = _Cursor(line)

        frm = cur.read_int()
        if frm is None:
            raise InputError(
                f"The 'from' component of line <{shown}> in the tpwgts file "
                "is incorrect."
            )
        to = frm
        if cur.peek() == "-":
            cur.skip()
            to = cur.read_int()
            if to is None:
                raise InputError(
                    f"The 'to' component of line <{shown}> in the tpwgts file "
                    "is incorrect."
                )

        if cur.peek() == ":":
            cur.skip()
            fromcnum = cur.read_int()
            if fromcnum is None:
                raise InputError(
                    f"The 'fromcnum' component of line <{shown}> in the tpwgts "
                    "file is incorrect."
                )
            tocnum = fromcnum
            if cur.peek() == "-":
                cur.skip()
                tocnum = cur.read_int()
                if tocnum is None:
                    raise InputError(
                        f"The 'tocnum' component of line <{shown}> in the tpwgts "
                        "file is incorrect."
                    )
        else:
            fromcnum, tocnum = 0, ncon - 1

        if cur.peek() != "=":
            raise InputError(
                f"The 'wgt' component of line <{shown}> in the tpwgts file is missing."
            )
        cur.skip()
        awgt = cur.read_real()
        if awgt is None:
            raise InputError(
                f"The 'wgt' component of line <{shown}> in the tpwgts file "
                "is incorrect."
            )

        if frm < 0 or to < 0 or frm >= nparts or to >= nparts:
            raise InputError(f"Invalid partition range for {frm}:{to}")
        if fromcnum < 0 or tocnum < 0 or fromcnum >= ncon or tocnum >= ncon:
            raise InputError(
                f"Invalid constraint number range for {fromcnum}:{tocnum}"
            )
        if awgt <= 0.0 or awgt >= 1.0:
            raise InputError(f"Invalid partition weight of {awgt}")

        for i in range(frm, to + 1):
            for j in range(fromcnum, tocnum + 1):
                tpwgts[i * ncon + j] = awgt

    for j in range(ncon):
        column = tpwgts[j::ncon]
        specified = [w for w in column if w > 0]
        twgt = sum(specified)
        nleft = nparts - len(specified)

        if nleft == 0:
            for i in range(nparts):
                tpwgts[i * ncon + j] /= twgt
        else:
            if twgt > 1:
                raise InputError(
                    f"The total specified target partition weights for "
                    f"constraint #{j} of {twgt} exceeds 1.0."
                )
            rest = (1.0 - twgt) / nleft
            for i in range(nparts):
                if tpwgts[i * ncon + j] < 0:
                    tpwgts[i * ncon + j] = rest

    return tpwgts


def read_po_vector(path: str | os.PathLike[str], nvtxs: int) -> list[int]:
    """Read ``nvtxs`` integers of a partition or ordering vector."""
    name = os.fspath(path)
    cur = _Cursor(_read_text(name, "File"))
    vector = []
    for i in range(nvtxs):
        value = cur.read_int()
        if value is None:
            raise InputError(
                f"Premature end of file {name} at line {i} [nvtxs: {nvtxs}]"
            )
        vector.append(value)
    return vector


def _write_vector(path: str, values: Sequence[int]) -> None:
    with _open_for_writing(path) as fh:
        fh.writelines(f"{value}\n" for value in values)


def write_partition(fname: str, part: Sequence[int], nparts: int) -> str:
    """Write a partition vector to ``<fname>.part.<nparts>`` and return that path."""
    path = f"{fname}.part.{nparts}"
    _write_vector(path, part)
    return path


def write_mesh_partition(
    fname: str, nparts: int, epart: Sequence[int], npart: Sequence[int]
) -> tuple[str, str]:
    """Write element and node partitions; return the two paths written."""
    epath = f"{fname}.epart.{nparts}"
    npath = f"{fname}.npart.{nparts}"
    _write_vector(epath, epart)
    _write_vector(npath, npart)
    return epath, npath


def write_permutation(fname: str, iperm: Sequence[int]) -> str:
    """Write an inverse permutation to ``<fname>.iperm`` and return that path."""
    path = f"{fname}.iperm"
    _write_vector(path, iperm)
    return path


def write_graph(graph: Graph, path: str | os.PathLike[str]) -> None:
    """Write a graph in the format that :func:`read_graph` reads."""
    nvtxs, ncon = graph.nvtxs, graph.ncon
    xadj, adjncy = graph.xadj, graph.adjncy
    vwgt, vsize, adjwgt = graph.vwgt, graph.vsize, graph.adjwgt
    nnz = xadj[nvtxs]

    hasvwgt = vwgt is not None and any(w != 1 for w in vwgt[: nvtxs * ncon])
    hasvsize = vsize is not None and any(s != 1 for s in vsize[:nvtxs])
    hasewgt = adjwgt is not None and any(w != 1 for w in adjwgt[:nnz])

    parts = [f"{nvtxs} {nnz // 2}"]
    if hasvwgt or hasvsize or hasewgt:
        parts.append(f" {int(hasvsize)}{int(hasvwgt)}{int(hasewgt)}")
        if hasvwgt:
            parts.append(f" {ncon}")

    for i in range(nvtxs):
        parts.append("\n")
        if hasvsize:
            parts.append(f" {vsize[i]}")
        if hasvwgt:
            parts.extend(f" {w}" for w in vwgt[i * ncon : (i + 1) * ncon])
        for j in range(xadj[i], xadj[i + 1]):
            parts.append(f" {adjncy[j] + 1}")
            if hasewgt:
                parts.append(f" {adjwgt[j]}")

    with _open_for_writing(os.fspath(path)) as fh:
        fh.write("".join(parts))