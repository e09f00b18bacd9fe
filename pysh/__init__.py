"""
pysh - A minimal interactive command shell

Reads command lines from standard input, runs a handful of built-ins
itself and hands everything else to the operating system.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .shell.shell import Shell, create_shell
from .shell.dispatcher import Dispatcher, DispatchResult
from .shell.exit_signal import ExitSignal

__all__ = [
    'Shell',
    'create_shell',
    'Dispatcher',
    'DispatchResult',
    'ExitSignal',
]
