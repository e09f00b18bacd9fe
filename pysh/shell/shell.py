"""
pysh Shell Module

The interactive read-eval loop.

Author: YSNRFD
Version: 1.0.0
"""

from enum import Enum, auto
from typing import Optional, TextIO

from pysh.core.config_loader import Config, get_config
from pysh.exceptions import EndOfInputError, InputReadError, ShellException
from pysh.logger import get_logger
from .dispatcher import Dispatcher
from .exit_signal import ExitSignal
from .session import Session


class ShellState(Enum):
    """
    Loop states.

    State transitions:
        PROMPTING -> READING: Prompt written
        READING -> DISPATCHING: Line read
        DISPATCHING -> PROMPTING: Line handled (successfully or not)
        PROMPTING/READING -> PROMPTING: Local failure, iteration restarts
        PROMPTING -> EXITING: Exit signal observed (terminal)
    """

    PROMPTING = auto()
    READING = auto()
    DISPATCHING = auto()
    EXITING = auto()


class Shell:
    """
    pysh interactive shell.

    Each iteration polls the exit signal, writes the prompt, reads one
    line and dispatches it. Nothing that goes wrong inside an iteration
    stops the loop; only the exit signal does. That signal is raised by
    the `exit` built-in while its line is dispatched and observed at the
    top of the next iteration, so no further line is read after `exit`.

    Example:
        >>> shell = Shell()
        >>> shell.run(sys.stdin, sys.stdout, sys.stderr)
        0
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        dispatcher: Optional[Dispatcher] = None,
        session: Optional[Session] = None
    ):
        self._config = config or get_config()
        self._dispatcher = dispatcher or Dispatcher()
        self._session = session or Session(
            ExitSignal(self._config.shell.exit_signal_capacity)
        )
        self._state = ShellState.PROMPTING
        self._logger = get_logger('shell')

    @property
    def state(self) -> ShellState:
        return self._state

    @property
    def session(self) -> Session:
        return self._session

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def run(self, input: TextIO, output: TextIO, error_output: TextIO) -> int:
        """
        Run the loop until the exit signal is observed.

        Args:
            input: Stream command lines are read from
            output: Stream for the prompt, built-in output and the exit notice
            error_output: Stream errors are reported on, one line each

        Returns:
            Process exit status, always 0
        """
        shell_config = self._config.shell
        exit_signal = self._session.exit_signal
        self._state = ShellState.PROMPTING
        self._logger.info("Shell started")

        while True:
            if exit_signal.poll():
                self._state = ShellState.EXITING
                output.write(shell_config.exit_message + "\n")
                output.flush()
                self._logger.info("Shell exiting")
                return 0

            self._state = ShellState.PROMPTING
            try:
                output.write(self._session.render_prompt(shell_config.prompt_template))
                output.flush()

                self._state = ShellState.READING
                line = self._read_line(input)

                self._state = ShellState.DISPATCHING
                result = self._dispatcher.handle(output, line, exit_signal)
                if not result.success:
                    self._report(error_output, result.error)

            except EndOfInputError as e:
                self._report(error_output, e)
                if shell_config.exit_on_eof:
                    exit_signal.send()

            except ShellException as e:
                self._report(error_output, e)

            except Exception as e:
                self._logger.exception(f"Shell error: {e}", exc=e)
                self._report(error_output, f"pysh: error: {e}")

    def _read_line(self, input: TextIO) -> str:
        """Block until one newline-terminated line is available."""
        try:
            line = input.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(f"read: {e}")

        if line == "":
            raise EndOfInputError()
        return line

    def _report(self, error_output: TextIO, error) -> None:
        """Write one error line."""
        error_output.write(f"{error}\n")
        error_output.flush()


def create_shell(config: Optional[Config] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(config)
