"""
Shell Exceptions

Exceptions raised while prompting, reading and dispatching command lines.
None of these are fatal to the shell: the loop reports them on the error
stream and carries on with the next prompt.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell errors.

    The string form is the plain message only, so every error can be
    written to the error stream as a single line. The numeric code and
    context stay available for logging and programmatic handling.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error

    Example:
        >>> raise ShellException("something went wrong", error_code=2000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 2000
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code})"
        )


class PromptError(ShellException):
    """
    The prompt could not be rendered.

    Raised when the current user or the working directory cannot be
    queried, e.g. when the working directory was removed underneath
    the shell.
    """

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=2001, context=context)


class InputReadError(ShellException):
    """Reading a line from the input stream failed."""

    def __init__(
        self,
        message: str,
        error_code: int = 2002,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)


class EndOfInputError(InputReadError):
    """The input stream is exhausted."""

    def __init__(self) -> None:
        super().__init__("EOF", error_code=2003)


class BuiltinError(ShellException):
    """
    Base class for failures of built-in commands.

    Attributes:
        command: Name of the built-in that failed
    """

    def __init__(
        self,
        command: str,
        message: str,
        error_code: int = 2100,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["command"] = command
        super().__init__(message, error_code=error_code, context=ctx)
        self.command = command


class MissingArgumentError(BuiltinError):
    """
    A built-in was called without a required argument.

    Example:
        >>> str(MissingArgumentError("mkdir", "operand"))
        'mkdir: missing operand'
    """

    def __init__(self, command: str, what: str = "argument") -> None:
        super().__init__(
            command,
            f"{command}: missing {what}",
            error_code=2101
        )
        self.what = what


class BuiltinOperationError(BuiltinError):
    """
    The operating system rejected a built-in's operation.

    Wraps the underlying OSError (change directory, create directory,
    delete file, query working directory).

    Attributes:
        path: The argument the operation was applied to, if any
        cause: The original OSError
    """

    def __init__(
        self,
        command: str,
        cause: OSError,
        path: Optional[str] = None
    ) -> None:
        reason = cause.strerror or str(cause)
        if path is not None:
            message = f"{command}: {path}: {reason}"
        else:
            message = f"{command}: {reason}"

        ctx: dict[str, Any] = {"errno": cause.errno}
        if path is not None:
            ctx["path"] = path

        super().__init__(command, message, error_code=2102, context=ctx)
        self.path = path
        self.cause = cause


class ExternalCommandError(ShellException):
    """
    Base class for failures of external commands.

    Attributes:
        command: The executable name as typed
    """

    def __init__(
        self,
        command: str,
        message: str,
        error_code: int = 2200,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["command"] = command
        super().__init__(message, error_code=error_code, context=ctx)
        self.command = command


class CommandNotFoundError(ExternalCommandError):
    """No executable with this name was found on the search path."""

    def __init__(self, command: str) -> None:
        super().__init__(
            command,
            f"{command}: executable file not found in $PATH",
            error_code=2201
        )


class CommandLaunchError(ExternalCommandError):
    """The executable exists but could not be started."""

    def __init__(self, command: str, cause: OSError) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(
            command,
            f"{command}: {reason}",
            error_code=2202,
            context={"errno": cause.errno}
        )
        self.cause = cause


class CommandExitError(ExternalCommandError):
    """
    The child process ran but finished with a non-zero status.

    Negative return codes mean the child was killed by a signal.
    """

    def __init__(self, command: str, returncode: int) -> None:
        if returncode < 0:
            message = f"{command}: signal: {-returncode}"
        else:
            message = f"{command}: exit status {returncode}"
        super().__init__(
            command,
            message,
            error_code=2203,
            context={"returncode": returncode}
        )
        self.returncode = returncode


class ConfigError(ShellException):
    """Raised when configuration loading or validation fails."""

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=2300, context=context)
