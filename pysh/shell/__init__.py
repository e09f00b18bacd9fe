"""
pysh Shell Module

Provides the interactive command-line shell:
- Command parsing
- Built-in commands
- Command dispatch (built-in or external process)
- The read-eval loop and its exit signal
"""

from .parser import CommandParser, CommandLine
from .builtins import BuiltinCommands, BuiltinKind, CommandContext
from .exit_signal import ExitSignal
from .session import Session
from .dispatcher import Dispatcher, DispatchResult
from .shell import Shell, ShellState, create_shell

__all__ = [
    'CommandParser',
    'CommandLine',
    'BuiltinCommands',
    'BuiltinKind',
    'CommandContext',
    'ExitSignal',
    'Session',
    'Dispatcher',
    'DispatchResult',
    'Shell',
    'ShellState',
    'create_shell',
]
