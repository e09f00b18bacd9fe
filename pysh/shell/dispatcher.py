"""
Command Dispatcher Module

Routes one input line to a built-in or to an external process.

Author: YSNRFD
Version: 1.0.0
"""

import subprocess
from dataclasses import dataclass
from typing import IO, Optional, Sequence, TextIO, Union

from pysh.exceptions import (
    CommandExitError,
    CommandLaunchError,
    CommandNotFoundError,
    ShellException,
)
from pysh.logger import get_logger
from .builtins import BuiltinCommands, BuiltinKind, CommandContext
from .exit_signal import ExitSignal
from .parser import CommandParser

# What subprocess accepts for a child stream: None inherits the shell's own.
ChildStream = Union[None, int, IO]


@dataclass
class DispatchResult:
    """Outcome of handling one command line."""
    success: bool
    error: Optional[ShellException] = None
    command: Optional[str] = None

    @classmethod
    def ok(cls, command: Optional[str] = None) -> 'DispatchResult':
        return cls(success=True, command=command)

    @classmethod
    def failure(cls, error: ShellException, command: Optional[str] = None) -> 'DispatchResult':
        return cls(success=False, error=error, command=command)


class Dispatcher:
    """
    Command dispatcher.

    Built-ins write to the `output` stream handed to `handle`. External
    commands write straight to the shell's own stdout and stderr; they
    inherit them unless other streams are given here. Their stdin is the
    null device, so a child never consumes the command lines queued
    after it.

    Example:
        >>> dispatcher = Dispatcher()
        >>> result = dispatcher.handle(sys.stdout, "echo hi\\n", ExitSignal())
        hi
        >>> result.success
        True
    """

    def __init__(
        self,
        builtins: Optional[BuiltinCommands] = None,
        parser: Optional[CommandParser] = None,
        child_stdin: ChildStream = subprocess.DEVNULL,
        child_stdout: ChildStream = None,
        child_stderr: ChildStream = None
    ):
        self._builtins = builtins or BuiltinCommands()
        self._parser = parser or CommandParser()
        self._child_stdin = child_stdin
        self._child_stdout = child_stdout
        self._child_stderr = child_stderr
        self._logger = get_logger('dispatcher')

    @property
    def parser(self) -> CommandParser:
        return self._parser

    def handle(
        self,
        output: TextIO,
        raw_line: str,
        exit_signal: ExitSignal
    ) -> DispatchResult:
        """
        Parse and run one command line.

        Args:
            output: Stream built-ins write to
            raw_line: The line as read
            exit_signal: Channel the `exit` built-in writes to

        Returns:
            DispatchResult; failures carry the ShellException to report
        """
        line = self._parser.parse(raw_line)

        if line.is_empty:
            return DispatchResult.ok()

        name, args = line.name, list(line.args)

        try:
            kind = BuiltinKind.lookup(name)
            if kind is not None:
                self._logger.debug(f"Built-in: {name}")
                self._builtins.execute(
                    kind,
                    CommandContext(args=args, output=output, exit_signal=exit_signal)
                )
            else:
                self._logger.debug(f"External: {name}", context={'args': len(args)})
                output.flush()
                self._execute_external(name, args)
        except ShellException as e:
            self._logger.warning(
                f"{name} failed: {e}",
                context={'command': name, 'error_code': e.error_code}
            )
            return DispatchResult.failure(e, command=name)

        return DispatchResult.ok(command=name)

    def _execute_external(self, name: str, args: Sequence[str]) -> None:
        """Run an executable found on PATH and wait for it."""
        try:
            completed = subprocess.run(
                [name, *args],
                stdin=self._child_stdin,
                stdout=self._child_stdout,
                stderr=self._child_stderr,
            )
        except FileNotFoundError:
            raise CommandNotFoundError(name)
        except OSError as e:
            raise CommandLaunchError(name, e)

        if completed.returncode != 0:
            raise CommandExitError(name, completed.returncode)
