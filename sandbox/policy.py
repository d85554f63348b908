"""
policy.py — What user code may touch
=====================================
User source is the BODY of a traversal function.  It is wrapped into

    def traverse(nodes, edges, start_node_id, visit, get_neighbors, log):
        <user body>

and compiled with RestrictedPython, which refuses imports, names and
attributes starting with "_", and unguarded attribute / item writes.

The only globals the compiled module sees are the restricted builtins
built here plus RestrictedPython's guard hooks.  Every capability is
passed to `traverse` as an argument.
"""

import ast
import io
import operator
import os
import tokenize
from collections import deque
from types import CodeType
from typing import List, Set

from RestrictedPython import compile_restricted, safe_builtins
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    full_write_guard,
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safer_getattr,
)


ENTRY_POINT = "traverse"
PARAMETERS  = ("nodes", "edges", "start_node_id", "visit", "get_neighbors", "log")
FILENAME    = "<custom-algorithm>"
HEADER_LINES = 1     # user line N is line N + HEADER_LINES in the compiled module
INDENT       = "    "

# pure helpers on top of RestrictedPython's safe_builtins
EXTRA_BUILTINS = {
    "list":      list,
    "dict":      dict,
    "set":       set,
    "frozenset": frozenset,
    "min":       min,
    "max":       max,
    "sum":       sum,
    "any":       any,
    "all":       all,
    "enumerate": enumerate,
    "reversed":  reversed,
    "map":       map,
    "filter":    filter,
    "deque":     deque,
}

_INPLACE_OPS = {
    "+=":  operator.iadd,
    "-=":  operator.isub,
    "*=":  operator.imul,
    "/=":  operator.itruediv,
    "//=": operator.ifloordiv,
    "%=":  operator.imod,
    "**=": operator.ipow,
    "|=":  operator.ior,
    "&=":  operator.iand,
    "^=":  operator.ixor,
    "<<=": operator.ilshift,
    ">>=": operator.irshift,
}


def _inplacevar(op: str, target, value):
    try:
        fn = _INPLACE_OPS[op]
    except KeyError:
        raise SyntaxError(f"Augmented assignment {op!r} is not allowed")
    return fn(target, value)


def _apply(fn, *args, **kwargs):
    return fn(*args, **kwargs)


# ---------------------------------------------------------------------------
# Source handling
# ---------------------------------------------------------------------------
def _literal_rows(source: str) -> Set[int]:
    """1-based rows that continue a multi-line string literal."""
    rows: Set[int] = set()
    opened: List[int] = []
    try:
        for tok in tokenize.generate_tokens(io.StringIO(source).readline):
            name = tokenize.tok_name[tok.type]
            if name in ("FSTRING_START", "TSTRING_START"):
                opened.append(tok.start[0])
            elif name in ("FSTRING_END", "TSTRING_END") and opened:
                rows.update(range(opened.pop() + 1, tok.end[0] + 1))
            elif tok.type == tokenize.STRING and tok.end[0] > tok.start[0]:
                rows.update(range(tok.start[0] + 1, tok.end[0] + 1))
    except (tokenize.TokenError, SyntaxError):
        # the compile step reports the real error
        pass
    return rows


def wrap_source(body: str) -> str:
    """
    Indent the user body under the traverse() header.

    The common margin of the code lines is swapped for one indent level.
    Rows inside multi-line string literals are copied verbatim so the
    literal's contents and every line number stay as the user wrote them.
    """
    source = (body or "").rstrip()
    lines = source.split("\n") if source else []
    literal = _literal_rows(source)

    margins = [
        line[: len(line) - len(line.lstrip())]
        for row, line in enumerate(lines, 1)
        if row not in literal and line.strip()
    ]
    margin = os.path.commonprefix(margins) if margins else ""

    wrapped = [f"def {ENTRY_POINT}({', '.join(PARAMETERS)}):"]
    for row, line in enumerate(lines, 1):
        if row in literal:
            wrapped.append(line)
        else:
            wrapped.append(INDENT + (line[len(margin):] if line.startswith(margin) else line.lstrip()))
    # trailing `pass` keeps comment-only / empty bodies valid
    wrapped.append(INDENT + "pass")
    return "\n".join(wrapped) + "\n"


def _reject_catch_all(tree: ast.AST) -> None:
    """User code must not be able to swallow budget exhaustion."""
    for node in ast.walk(tree):
        if not isinstance(node, ast.ExceptHandler):
            continue
        if node.type is None:
            raise SyntaxError(f"Line {node.lineno - HEADER_LINES}: bare 'except:' is not allowed")
        names = node.type.elts if isinstance(node.type, ast.Tuple) else [node.type]
        for name in names:
            if isinstance(name, ast.Name) and name.id == "BaseException":
                raise SyntaxError(
                    f"Line {node.lineno - HEADER_LINES}: catching BaseException is not allowed"
                )


def compile_user_source(body: str) -> CodeType:
    """Compile a user body.  Raises SyntaxError for anything refused."""
    wrapped = wrap_source(body)
    _reject_catch_all(ast.parse(wrapped, filename=FILENAME))
    return compile_restricted(wrapped, filename=FILENAME, mode="exec")


def restricted_globals() -> dict:
    """Fresh globals for one run.  Never shared between runs."""
    builtins = dict(safe_builtins)
    builtins.update(EXTRA_BUILTINS)
    return {
        "__builtins__":           builtins,
        "__name__":               "custom_algorithm",
        "_getattr_":              safer_getattr,
        "_getitem_":              default_guarded_getitem,
        "_getiter_":              default_guarded_getiter,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_":      guarded_unpack_sequence,
        "_write_":                full_write_guard,
        "_inplacevar_":           _inplacevar,
        "_apply_":                _apply,
    }
