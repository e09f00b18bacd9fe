"""
Shell Loop Tests

Drive the read-eval loop with in-memory streams.

Author: YSNRFD
Version: 1.0.0
"""

import io
import os
import select
import subprocess
import sys
import tempfile
import time
import unittest

from pysh.core.config_loader import Config
from pysh.exceptions import PromptError
from pysh.shell.dispatcher import Dispatcher
from pysh.shell.exit_signal import ExitSignal
from pysh.shell.session import Session
from pysh.shell.shell import Shell, ShellState

PROMPT = "/work [tester] $ "


class FixedSession(Session):
    """Session with a known prompt; optionally fails the first few queries."""

    def __init__(self, failures: int = 0):
        super().__init__(ExitSignal())
        self.failures = failures
        self.queries = 0

    def current_user(self) -> str:
        self.queries += 1
        if self.failures:
            self.failures -= 1
            raise PromptError("user: unknown userid 4242")
        return "tester"

    def current_directory(self) -> str:
        return "/work"


class ScriptedInput:
    """
    Input stream replaying a fixed list of readline() results.

    Items that are exceptions are raised instead of returned. Once the
    script runs out it keeps answering `exit` so a broken loop cannot hang.
    """

    def __init__(self, *items):
        self._items = list(items)
        self.reads = 0

    def readline(self):
        self.reads += 1
        if not self._items:
            return "exit\n"
        item = self._items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class ShellTestCase(unittest.TestCase):

    def make_shell(self, config=None, session=None, dispatcher=None) -> Shell:
        return Shell(
            config=config or Config(),
            dispatcher=dispatcher or Dispatcher(
                child_stdout=subprocess.DEVNULL,
                child_stderr=subprocess.DEVNULL
            ),
            session=session or FixedSession()
        )

    def run_shell(self, shell: Shell, stdin) -> tuple:
        if isinstance(stdin, str):
            stdin = io.StringIO(stdin)
        out, err = io.StringIO(), io.StringIO()
        status = shell.run(stdin, out, err)
        return status, out.getvalue(), err.getvalue()


class TestShellLoop(ShellTestCase):
    """Test the prompt / read / dispatch cycle."""

    def test_exit_prints_notice(self):
        shell = self.make_shell()
        status, out, err = self.run_shell(shell, "exit\n")

        self.assertEqual(status, 0)
        self.assertEqual(out, PROMPT + "exiting gracefully...\n")
        self.assertEqual(err, "")
        self.assertIs(shell.state, ShellState.EXITING)

    def test_builtin_output_follows_prompt(self):
        shell = self.make_shell()
        _, out, _ = self.run_shell(shell, "echo   a   b\nexit\n")

        self.assertEqual(
            out,
            PROMPT + "a b\n" + PROMPT + "exiting gracefully...\n"
        )

    def test_line_after_exit_is_never_read(self):
        stdin = ScriptedInput("exit\n", "echo never\n")
        shell = self.make_shell()
        _, out, _ = self.run_shell(shell, stdin)

        self.assertEqual(stdin.reads, 1)
        self.assertNotIn("never", out)
        self.assertTrue(out.endswith("exiting gracefully...\n"))

    def test_exit_takes_effect_on_next_iteration(self):
        """The notice is written only after the exit line has been handled."""
        shell = self.make_shell()
        _, out, _ = self.run_shell(shell, "exit\n")

        self.assertEqual(out.count(PROMPT), 1)
        self.assertLess(out.index(PROMPT), out.index("exiting gracefully..."))

    def test_blank_lines_produce_nothing(self):
        shell = self.make_shell()
        _, out, err = self.run_shell(shell, "\n   \n\t\nexit\n")

        self.assertEqual(out, PROMPT * 4 + "exiting gracefully...\n")
        self.assertEqual(err, "")

    def test_dispatch_errors_go_to_error_stream(self):
        shell = self.make_shell()
        _, out, err = self.run_shell(
            shell,
            "cd\nnotarealcommand123\necho still here\nexit\n"
        )

        lines = err.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0], "cd: missing argument")
        self.assertIn("notarealcommand123", lines[1])
        self.assertIn("still here\n", out)

    def test_prompt_is_queried_every_iteration(self):
        session = FixedSession()
        shell = self.make_shell(session=session)
        self.run_shell(shell, "echo 1\necho 2\nexit\n")

        self.assertEqual(session.queries, 3)

    def test_prompt_failure_restarts_iteration(self):
        session = FixedSession(failures=1)
        stdin = ScriptedInput("exit\n")
        shell = self.make_shell(session=session)
        _, out, err = self.run_shell(shell, stdin)

        self.assertEqual(err, "user: unknown userid 4242\n")
        self.assertEqual(out, PROMPT + "exiting gracefully...\n")
        self.assertEqual(stdin.reads, 1)

    def test_custom_messages(self):
        config = Config()
        config.shell.prompt_template = "{user}> "
        config.shell.exit_message = "bye"
        shell = self.make_shell(config=config)
        _, out, _ = self.run_shell(shell, "exit\n")

        self.assertEqual(out, "tester> bye\n")


class TestEndOfInput(ShellTestCase):
    """Test that running out of input does not end the loop."""

    def test_eof_is_reported_and_loop_continues(self):
        stdin = ScriptedInput("", "", "exit\n")
        shell = self.make_shell()
        status, out, err = self.run_shell(shell, stdin)

        self.assertEqual(status, 0)
        self.assertEqual(err, "EOF\nEOF\n")
        self.assertEqual(stdin.reads, 3)
        self.assertEqual(out, PROMPT * 3 + "exiting gracefully...\n")

    def test_exit_on_eof(self):
        config = Config()
        config.shell.exit_on_eof = True
        shell = self.make_shell(config=config)
        status, out, err = self.run_shell(shell, "echo hi\n")

        self.assertEqual(status, 0)
        self.assertEqual(err, "EOF\n")
        self.assertEqual(
            out,
            PROMPT + "hi\n" + PROMPT + "exiting gracefully...\n"
        )

    def test_read_error_is_reported(self):
        stdin = ScriptedInput(OSError(5, "Input/output error"), "exit\n")
        shell = self.make_shell()
        _, _, err = self.run_shell(shell, stdin)

        self.assertTrue(err.startswith("read: "))
        self.assertIn("Input/output error", err)


class TestUnexpectedErrors(ShellTestCase):
    """Test that a crashing handler does not take the loop down."""

    def test_loop_survives_unexpected_exception(self):
        class ExplodingDispatcher(Dispatcher):
            def handle(self, output, raw_line, exit_signal):
                if raw_line.startswith("boom"):
                    raise RuntimeError("kaboom")
                return super().handle(output, raw_line, exit_signal)

        shell = self.make_shell(dispatcher=ExplodingDispatcher())
        status, out, err = self.run_shell(shell, "boom\necho ok\nexit\n")

        self.assertEqual(status, 0)
        self.assertEqual(err, "pysh: error: kaboom\n")
        self.assertIn("ok\n", out)


class TestLiveSession(ShellTestCase):
    """Test the loop against the real working directory."""

    def setUp(self):
        self._old_cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        os.chdir(self._old_cwd)
        self._tmp.cleanup()

    def test_cd_shows_in_next_prompt(self):
        target = os.path.realpath(self._tmp.name)
        session = Session()
        shell = self.make_shell(session=session)
        user = session.current_user()

        _, out, err = self.run_shell(shell, f"cd {target}\nexit\n")

        self.assertEqual(err, "")
        self.assertIn(f"{target} [{user}] $ exiting gracefully...\n", out)


@unittest.skipIf(os.name == 'nt', 'POSIX only')
class TestPipedInput(unittest.TestCase):
    """Run the real program with its input on a pipe."""

    PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(
            p for p in (self.PACKAGE_ROOT, env.get('PYTHONPATH')) if p
        )
        self.proc = subprocess.Popen(
            [sys.executable, '-m', 'pysh', '--exit-on-eof'],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            cwd=self._tmp.name,
            env=env
        )
        self.addCleanup(self._stop)

    def _stop(self):
        if self.proc.poll() is None:
            self.proc.kill()
            self.proc.communicate()

    def read_until_prompts(self, count: int, timeout: float = 10.0) -> bytes:
        fd = self.proc.stdout.fileno()
        data = b''
        deadline = time.monotonic() + timeout
        while data.count(b'] $ ') < count:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self.fail(f"no prompt {count} within {timeout}s, got {data!r}")
            ready, _, _ = select.select([fd], [], [], remaining)
            if ready:
                chunk = os.read(fd, 4096)
                if not chunk:
                    self.fail(f"shell closed its output early: {data!r}")
                data += chunk
        return data

    def test_child_leaves_queued_lines_to_the_shell(self):
        """A child reading stdin finishes at once; the next line is the shell's."""
        self.proc.stdin.write(b'cat\n')
        self.proc.stdin.flush()

        # The second prompt only shows once cat has returned.
        before = self.read_until_prompts(2)

        rest, _ = self.proc.communicate(input=b'echo after\nexit\n', timeout=30)
        out = before + rest

        self.assertEqual(self.proc.returncode, 0)
        self.assertIn(b'after\n', out)
        self.assertNotIn(b'echo after', out)
        self.assertTrue(out.endswith(b'exiting gracefully...\n'))


if __name__ == '__main__':
    unittest.main()
