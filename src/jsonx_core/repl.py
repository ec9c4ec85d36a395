"""JSONRepl — interactive shell for poking at a JSON document.

Also provides the ``jsonx-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from dotenv import load_dotenv

from .builders import flatten, get_type
from .config import get_settings
from .document import JSON, new_object, parse


# ---------------------------------------------------------------------------
# JSONRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class JSONRepl:
    """Stateful shell holding one document between calls.

    Usage::

        repl = JSONRepl()
        repl.eval('parse {"user": {"name": "Li"}}')
        repl.eval("get user.name")        # → JSON("Li")
        repl.eval("set user.age 30")      # → None (document updated)
        repl.eval("keys user")            # → JSON(["age", "name"])

        repl.doc       # the current document
        repl.reset()   # back to an empty object

    Query commands return a handle (possibly carrying an error).  Commands
    that change the document return None on success and the failing handle
    otherwise; the document is only replaced when the command succeeds.
    """

    def __init__(self, doc: JSON | None = None) -> None:
        self.doc = doc if doc is not None else new_object()

    def eval(self, line: str) -> JSON | None:
        cmd, _, rest = line.strip().partition(" ")
        rest = rest.strip()

        if cmd == "load":
            try:
                with open(rest, encoding="utf-8") as fh:
                    return self._replace(parse(fh.read()))
            except OSError as exc:
                raise ValueError(f"cannot read '{rest}': {exc}") from exc
        if cmd == "parse":
            return self._replace(parse(rest))
        if cmd == "set":
            path, _, text = rest.partition(" ")
            value = parse(text.strip())
            if value.error is not None:
                return value
            return self._replace(self.doc.set(path, value))
        if cmd == "del":
            return self._replace(self.doc.delete(rest))

        if cmd == "get":
            return self.doc.get(rest)
        if cmd == "has":
            return JSON(self.doc.has(rest))
        if cmd == "keys":
            return JSON(self.doc.get(rest).keys())
        if cmd == "len":
            return JSON(self.doc.get(rest).length())
        if cmd == "type":
            return JSON(get_type(self.doc.get(rest)))
        if cmd == "flat":
            return JSON(flatten(self.doc))

        raise ValueError(f"unknown command: {cmd}")

    def _replace(self, result: JSON) -> JSON | None:
        if result.error is not None:
            return result
        self.doc = result
        return None

    def reset(self) -> None:
        """Drop the current document."""
        self.doc = new_object()


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(result: JSON) -> str:
    """Format a result for compact one-line display."""
    if result.error is not None:
        return f"error: {result.error}"
    text, err = result.to_text()
    if err is not None:
        return f"error: {err}"
    return text


def _fmt_inspect(result: JSON) -> str:
    """Pretty-print a result for inspect() / i()."""
    if result.error is not None:
        return f"error: {result.error}"
    text, err = result.to_pretty_text()
    if err is not None:
        return f"error: {err}"
    return text


def _eval_expr(repl: JSONRepl, expr: str, dest: IO[str], inspect: bool = False) -> None:
    """Run *expr* and print its result (if any) to *dest*."""
    try:
        result = repl.eval(expr)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return
    if result is not None:
        print(_fmt_inspect(result) if inspect else _fmt_inline(result), file=dest)


def _show_doc(repl: JSONRepl, dest: IO[str]) -> None:
    """Print the whole document."""
    if repl.doc.length() == 0 and repl.doc.is_object():
        print("  (empty document)", file=dest)
        return
    print(_fmt_inspect(repl.doc), file=dest)


def _run_file(repl: JSONRepl, filepath: str, dest: IO[str]) -> None:
    try:
        with open(filepath, encoding="utf-8") as fh:
            for file_line in fh:
                _process_line(repl, file_line.rstrip("\n"), dest)
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)


def _process_line(repl: JSONRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line or line.startswith("#"):
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":doc":
        _show_doc(repl, dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if line.startswith(prefix) and line.endswith(")"):
            _eval_expr(repl, line[len(prefix):-1].strip(), dest, inspect=True)
            return True

    # ── Batch file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        _run_file(repl, line[4:].strip(), dest)
        return True

    # ── Regular command ───────────────────────────────────────────────────
    _eval_expr(repl, line, dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Interactive shell (``jsonx-repl [file]`` / ``python -m jsonx_core.repl``)."""
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    args = sys.argv[1:] if argv is None else argv
    repl = JSONRepl()
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    if args:
        _eval_expr(repl, f"load {args[0]}", dest)

    print("jsonx REPL  (:q to quit  |  :doc  :reset  |  get/set/del/has/keys/len/type/flat  inspect(<cmd>))")

    while True:
        try:
            line = input("jsonx> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
                _file = None
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                dest = sys.stdout
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()


if __name__ == "__main__":
    main()
