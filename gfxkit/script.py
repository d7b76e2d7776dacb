"""A small line-oriented command language for reading scripted file formats."""

from __future__ import annotations

import enum
import gzip
import io
import re
import sys
from collections.abc import Callable
from typing import TextIO

_WORD_PATTERN = re.compile(r"[^ \t\n\r]+")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"[+-]?\d+")


class ScriptStatus(enum.IntEnum):
    """Results a command handler may report."""

    OK = 0
    ERR_UNDEF = 1
    ERR_SYNTAX = 2
    ERR_UNSUPPORTED = 3
    ERR_NOFILE = 4
    END = 5


class ScriptError(Exception):
    """Base class for errors raised while running a script."""

    status = ScriptStatus.ERR_UNSUPPORTED

    def __init__(self, msg: str = "", line: str | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.line = line


class SyntaxError_(ScriptError):
    """A command was given arguments it cannot accept."""

    status = ScriptStatus.ERR_SYNTAX


class NameError_(ScriptError):
    """A command name has no registered handler."""

    status = ScriptStatus.ERR_UNDEF


class IOError_(ScriptError):
    """A script file could not be opened."""

    status = ScriptStatus.ERR_NOFILE


_STATUS_ERRORS = {
    ScriptStatus.ERR_UNDEF: NameError_,
    ScriptStatus.ERR_SYNTAX: SyntaxError_,
    ScriptStatus.ERR_UNSUPPORTED: ScriptError,
    ScriptStatus.ERR_NOFILE: IOError_,
}


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text.lstrip())
    return float(match.group()) if match else 0.0


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text.lstrip())
    return int(match.group()) if match else 0


Span = tuple[int, int]


class CmdLine:
    """One parsed command: the line, the span of its name and of each argument."""

    def __init__(
        self,
        line: str,
        op: Span = (0, 0),
        tokens: list[Span] | None = None,
    ) -> None:
        self.line = line
        self.op = op
        self.tokens = list(tokens) if tokens is not None else []

    def substr(self, span: Span) -> str:
        """Return the text covered by ``span``."""
        start, end = span
        return self.line[start:end]

    def token_to_string(self, i: int) -> str:
        """Return argument ``i`` as text."""
        return self.substr(self.tokens[i])

    def token_to_float(self, i: int) -> float:
        """Return the numeric prefix of argument ``i``, or 0.0 if there is none."""
        return _atof(self.token_to_string(i))

    def token_to_int(self, i: int) -> int:
        """Return the integer prefix of argument ``i``, or 0 if there is none."""
        return _atoi(self.token_to_string(i))

    def rest_to_string(self, i: int) -> str:
        """Return the line from the start of argument ``i`` to its end."""
        return self.line[self.tokens[i][0]:]

    def opname(self) -> str:
        """Return the command name."""
        return self.substr(self.op)

    def argcount(self) -> int:
        """Return the number of arguments."""
        return len(self.tokens)

    def argline(self) -> str:
        """Return the text from the first argument to the end of the last one."""
        if not self.tokens:
            return ""
        return self.substr((self.tokens[0][0], self.tokens[-1][1]))

    def _selected(self, offset: int, size: int | None) -> list[Span]:
        selected = self.tokens[offset:]
        return selected if size is None else selected[:size]

    def collect_as_strings(self, offset: int = 0) -> list[str]:
        """Return the arguments from ``offset`` onwards as text."""
        return [self.substr(span) for span in self.tokens[offset:]]

    def collect_as_floats(self, offset: int = 0, size: int | None = None) -> list[float]:
        """Return up to ``size`` arguments from ``offset`` onwards as floats."""
        return [_atof(self.substr(span)) for span in self._selected(offset, size)]

    def collect_as_ints(self, offset: int = 0, size: int | None = None) -> list[int]:
        """Return up to ``size`` arguments from ``offset`` onwards as integers."""
        return [_atoi(self.substr(span)) for span in self._selected(offset, size)]

    def __repr__(self) -> str:
        return f"CmdLine({self.line!r}, op={self.op}, tokens={self.tokens})"


Handler = Callable[[CmdLine], "ScriptStatus | int | None"]


def _ignored(cmd: CmdLine) -> ScriptStatus:
    return ScriptStatus.OK


class CmdEnv:
    """A table of named commands and the machinery to run script text against it.

    Handlers take a :class:`CmdLine` and may return a :class:`ScriptStatus`
    (``None`` means OK) or raise a :class:`ScriptError`. Error statuses are
    turned into the matching exception.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Handler] = {}
        self._scopes: list[CmdEnv | None] = []
        self.register_command("include", self._script_include)
        self.register_command("ignore", self._script_ignore)
        self.register_command("end", self._script_end)

    def register_command(self, name: str, handler: Handler) -> None:
        """Bind ``name`` to ``handler``, replacing any earlier binding."""
        self._commands[name] = handler

    def lookup_command(self, name: str) -> Handler | None:
        """Return the handler bound to ``name``, or None."""
        return self._commands.get(name)

    def ignore_command(self, name: str) -> None:
        """Make ``name`` a command that does nothing."""
        self.register_command(name, _ignored)

    def register_vocabulary(self, name: str, env: CmdEnv) -> None:
        """Make ``name`` a prefix that runs the rest of its line in ``env``."""
        self.register_command(name, lambda cmd: env.do_line(cmd.argline()))

    def begin_scope(self, sub: CmdEnv | None) -> None:
        """Send subsequent lines to ``sub`` until it reports END."""
        self._scopes.append(sub)

    def end_scope(self) -> None:
        """Leave the innermost scope, if any."""
        if self._scopes:
            self._scopes.pop()

    def _script_include(self, cmd: CmdLine) -> ScriptStatus:
        if cmd.argcount() != 1:
            raise SyntaxError_("include takes exactly one file name")
        return self.do_file(cmd.token_to_string(0))

    def _script_ignore(self, cmd: CmdLine) -> ScriptStatus:
        for name in cmd.collect_as_strings():
            self.ignore_command(name)
        return ScriptStatus.OK

    def _script_end(self, cmd: CmdLine) -> ScriptStatus:
        return ScriptStatus.END

    @staticmethod
    def _check(result, name: str) -> ScriptStatus:
        status = ScriptStatus.OK if result is None else ScriptStatus(result)
        error = _STATUS_ERRORS.get(status)
        if error is not None:
            raise error(f"command {name!r} failed with {status.name}")
        return status

    def do_line(self, line: str) -> ScriptStatus:
        """Run one line; return OK, or END when a script asks to stop."""
        if self._scopes and self._scopes[-1] is not None:
            status = self._scopes[-1].do_line(line)
            if status is ScriptStatus.END:
                self.end_scope()
                status = ScriptStatus.OK
            return status

        spans = [m.span() for m in _WORD_PATTERN.finditer(line)]
        if not spans or line[spans[0][0]] == "#":
            return ScriptStatus.OK

        op = spans[0]
        name = line[op[0]:op[1]]
        handler = self.lookup_command(name)
        if handler is None:
            raise NameError_(f"undefined command: {name}")
        return self._check(handler(CmdLine(line, op, spans[1:])), name)

    def do_stream(self, stream: TextIO) -> ScriptStatus:
        """Run every line of ``stream``, stopping early at END."""
        for raw in stream:
            line = raw[:-1] if raw.endswith("\n") else raw
            try:
                status = self.do_line(line)
            except ScriptError as err:
                print(f"Script Error: {line}", file=sys.stderr)
                if err.line is None:
                    err.line = line
                raise
            if status is not ScriptStatus.OK:
                return status
        return ScriptStatus.OK

    def do_file(self, filename: str) -> ScriptStatus:
        """Run a script file; names ending in .gz, .z or .Z are read as gzip."""
        compressed = filename.endswith((".gz", ".z", ".Z"))
        try:
            stream = (
                gzip.open(filename, "rt") if compressed else open(filename)
            )
        except OSError as exc:
            raise IOError_(f"cannot open script file {filename!r}: {exc}") from exc
        with stream:
            return self.do_stream(stream)

    def do_string(self, text: str) -> ScriptStatus:
        """Run the lines of ``text``."""
        return self.do_stream(io.StringIO(text))