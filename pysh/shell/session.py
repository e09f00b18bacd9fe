"""
Shell Session Module

The per-run state of the shell. The working directory and the user are
owned by the operating system and are queried again on every call, so a
`cd` or a user switch shows up at the very next prompt.

Author: YSNRFD
Version: 1.0.0
"""

import getpass
import os
from typing import Optional

try:
    import pwd
except ImportError:  # Windows
    pwd = None

from pysh.exceptions import PromptError
from .exit_signal import ExitSignal


class Session:
    """
    Live view of the shell's process state.

    Attributes:
        exit_signal: Channel the `exit` built-in writes to
    """

    def __init__(self, exit_signal: Optional[ExitSignal] = None):
        self.exit_signal = exit_signal or ExitSignal()

    def current_directory(self) -> str:
        """Query the process working directory."""
        try:
            return os.getcwd()
        except OSError as e:
            raise PromptError(
                f"getwd: {e.strerror or e}",
                context={'errno': e.errno}
            )

    def current_user(self) -> str:
        """Query the name of the user the process runs as."""
        if pwd is None:
            try:
                return getpass.getuser()
            except (KeyError, OSError) as e:
                raise PromptError(f"user: Current: {e}")

        uid = os.getuid()
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            raise PromptError(
                f"user: unknown userid {uid}",
                context={'uid': uid}
            )

    def render_prompt(self, template: str) -> str:
        """
        Build the prompt text.

        Raises:
            PromptError: If the user or the directory cannot be queried
        """
        user = self.current_user()
        cwd = self.current_directory()
        return template.format(cwd=cwd, user=user)
