"""
pysh Exception Hierarchy

All shell errors inherit from ShellException. Each one renders as a single
plain-text line so the loop can report it on the error stream and move on.

Architecture:
    ShellException (Base)
    ├── PromptError
    ├── InputReadError
    │   └── EndOfInputError
    ├── BuiltinError
    │   ├── MissingArgumentError
    │   └── BuiltinOperationError
    ├── ExternalCommandError
    │   ├── CommandNotFoundError
    │   ├── CommandLaunchError
    │   └── CommandExitError
    └── ConfigError
"""

from .shell_exceptions import (
    ShellException,
    PromptError,
    InputReadError,
    EndOfInputError,
    BuiltinError,
    MissingArgumentError,
    BuiltinOperationError,
    ExternalCommandError,
    CommandNotFoundError,
    CommandLaunchError,
    CommandExitError,
    ConfigError,
)

__all__ = [
    "ShellException",
    "PromptError",
    "InputReadError",
    "EndOfInputError",
    "BuiltinError",
    "MissingArgumentError",
    "BuiltinOperationError",
    "ExternalCommandError",
    "CommandNotFoundError",
    "CommandLaunchError",
    "CommandExitError",
    "ConfigError",
]
