"""
Shell Built-in Commands

Commands executed directly by the shell instead of spawning a process.
Each one is a thin wrapper over an operating system call.

Author: YSNRFD
Version: 1.0.0
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, TextIO

from pysh.exceptions import (
    BuiltinOperationError,
    MissingArgumentError,
    ShellException,
)
from pysh.logger import get_logger
from .exit_signal import ExitSignal


class BuiltinKind(Enum):
    """The closed set of built-in command names."""
    CD = "cd"
    ENV = "env"
    EXIT = "exit"
    ECHO = "echo"
    PWD = "pwd"
    HISTORY = "history"
    MKDIR = "mkdir"
    RM = "rm"

    @classmethod
    def lookup(cls, name: str) -> Optional['BuiltinKind']:
        """Match a command name, case-sensitively."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class CommandContext:
    """What a built-in gets to work with."""
    args: Sequence[str]
    output: TextIO
    exit_signal: ExitSignal


HISTORY_NOTICE = "History command is not implemented yet."


class BuiltinCommands:
    """
    Built-in shell commands.

    Handlers raise a ShellException subclass on failure and return None
    on success.
    """

    def __init__(self):
        self._logger = get_logger('builtins')
        self._commands: dict[BuiltinKind, Callable[[CommandContext], None]] = {
            BuiltinKind.CD: self.cmd_cd,
            BuiltinKind.ENV: self.cmd_env,
            BuiltinKind.EXIT: self.cmd_exit,
            BuiltinKind.ECHO: self.cmd_echo,
            BuiltinKind.PWD: self.cmd_pwd,
            BuiltinKind.HISTORY: self.cmd_history,
            BuiltinKind.MKDIR: self.cmd_mkdir,
            BuiltinKind.RM: self.cmd_rm,
        }

        missing = [kind.value for kind in BuiltinKind if kind not in self._commands]
        if missing:
            raise ShellException(f"No handler for built-ins: {', '.join(missing)}")

    def get_commands(self) -> dict[BuiltinKind, Callable[[CommandContext], None]]:
        """Get all built-in commands."""
        return self._commands

    def execute(self, kind: BuiltinKind, ctx: CommandContext) -> None:
        """
        Execute a built-in command.

        Args:
            kind: Which built-in to run
            ctx: Arguments, output stream and exit signal

        Raises:
            ShellException: If the command fails
        """
        self._logger.debug(
            f"Running built-in {kind.value}",
            context={'args': len(ctx.args)}
        )
        self._commands[kind](ctx)

    # Command implementations

    def cmd_cd(self, ctx: CommandContext) -> None:
        """Change directory."""
        if not ctx.args:
            raise MissingArgumentError("cd", "argument")

        path = ctx.args[0]
        try:
            os.chdir(path)
        except OSError as e:
            raise BuiltinOperationError("cd", e, path=path)

    def cmd_env(self, ctx: CommandContext) -> None:
        """Display environment variables."""
        if not ctx.args:
            for key, value in os.environ.items():
                ctx.output.write(f"{key}={value}\n")
            return

        for name in ctx.args:
            value = os.environ.get(name)
            if value is not None:
                ctx.output.write(f"{name}={value}\n")
            else:
                ctx.output.write(f"{name} not found in environment variables\n")

    def cmd_exit(self, ctx: CommandContext) -> None:
        """Ask the loop to stop at its next iteration."""
        if not ctx.exit_signal.send():
            self._logger.debug("Exit already pending")

    def cmd_echo(self, ctx: CommandContext) -> None:
        """Echo arguments."""
        ctx.output.write(' '.join(ctx.args) + '\n')

    def cmd_pwd(self, ctx: CommandContext) -> None:
        """Print working directory."""
        try:
            cwd = os.getcwd()
        except OSError as e:
            raise BuiltinOperationError("pwd", e)
        ctx.output.write(cwd + '\n')

    def cmd_history(self, ctx: CommandContext) -> None:
        """Placeholder, history is not kept."""
        ctx.output.write(HISTORY_NOTICE + '\n')

    def cmd_mkdir(self, ctx: CommandContext) -> None:
        """Create directories, stopping at the first failure."""
        if not ctx.args:
            raise MissingArgumentError("mkdir", "operand")

        for path in ctx.args:
            try:
                os.mkdir(path, 0o777)
            except OSError as e:
                raise BuiltinOperationError("mkdir", e, path=path)

    def cmd_rm(self, ctx: CommandContext) -> None:
        """
        Remove files, stopping at the first failure.

        Only files: a directory operand fails like any other error.
        """
        if not ctx.args:
            raise MissingArgumentError("rm", "operand")

        for path in ctx.args:
            try:
                os.remove(path)
            except OSError as e:
                raise BuiltinOperationError("rm", e, path=path)
