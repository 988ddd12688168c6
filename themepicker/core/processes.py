"""External command execution: captured runs, detached spawns and bounded retries."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import subprocess
import time
from typing import Callable, Sequence

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from themepicker.errors import ErrorCode, ThemeError

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 5
DEFAULT_DELAY_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a finished command with decoded output."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def command(self) -> str:
        return " ".join(self.args)

    def check(self) -> CommandResult:
        """Raise ``COMMAND_FAILED`` when the command exited non-zero."""
        if self.returncode != 0:
            raise ThemeError(
                ErrorCode.COMMAND_FAILED,
                message=f"{self.command} exited with status {self.returncode}",
                details={"stderr": self.stderr.strip()} if self.stderr.strip() else {},
            )
        return self


class CommandRunner:
    """Runs commands through :mod:`subprocess`.

    Tests substitute a fake with the same two methods.
    """

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run ``args`` to completion and capture its output."""
        argv = tuple(str(arg) for arg in args)
        logger.debug("run: %s", " ".join(argv))
        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise _spawn_failed(argv, exc) from exc
        return CommandResult(argv, completed.returncode, completed.stdout, completed.stderr)

    def spawn(self, args: Sequence[str]) -> None:
        """Start ``args`` detached from this process, discarding its output."""
        argv = tuple(str(arg) for arg in args)
        logger.debug("spawn: %s", " ".join(argv))
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise _spawn_failed(argv, exc) from exc


def _spawn_failed(argv: tuple[str, ...], exc: OSError) -> ThemeError:
    return ThemeError(
        ErrorCode.PROCESS_SPAWN_FAILED,
        message=f"Failed to run {argv[0] if argv else '<empty>'}: {exc.strerror or exc}",
        details={"command": " ".join(argv)},
    )


# Success predicates on trimmed stdout.

def stdout_is_ok(output: str) -> bool:
    return output.strip() == "ok"


def stdout_is_empty(output: str) -> bool:
    return output.strip() == ""


def invoke_with_retry(
    runner: CommandRunner,
    args: Sequence[str],
    *,
    accept: Callable[[str], bool],
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> CommandResult:
    """Run ``args`` until ``accept(stdout)`` holds, at most ``attempts`` times.

    Waits ``delay`` seconds between attempts. Spawn failures are retried the
    same way as rejected output. Raises ``EXHAUSTED_RETRIES`` carrying the last
    failure once every attempt is used up.
    """
    argv = tuple(str(arg) for arg in args)

    def attempt() -> CommandResult:
        result = runner.run(argv)
        if not accept(result.stdout):
            raise ThemeError(
                ErrorCode.COMMAND_FAILED,
                message=result.stdout.strip() or f"{result.command} printed nothing",
                details={"stdout": result.stdout.strip()},
            )
        return result

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(delay),
        retry=retry_if_exception_type(ThemeError),
        sleep=sleep,
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        reraise=False,
    )
    try:
        return retrying(attempt)
    except RetryError as exc:
        last = exc.last_attempt.exception()
        raise ThemeError(
            ErrorCode.EXHAUSTED_RETRIES,
            message=f"{' '.join(argv)} failed after {attempts} attempts: {_describe(last)}",
            details={"last_failure": _describe(last)},
        ) from last


def _describe(error: BaseException | None) -> str:
    if isinstance(error, ThemeError):
        return error.message
    return str(error) if error is not None else "unknown error"
