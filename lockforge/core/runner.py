"""Blocking subprocess execution with structured failures.

Every external tool (pyenv, pip, poetry, the hash helper) is run through a
``CommandRunner``. Output is captured with stderr folded into stdout, and a
non-zero exit becomes a ``SubprocessFailure`` carrying everything needed to
diagnose it. Nothing is retried here; retry policy belongs to the caller.
"""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class SubprocessFailure(RuntimeError):
    """Raised when an external command exits non-zero.

    Attributes
    ----------
    message:
        Captured combined stdout/stderr (or the helper's error message).
    command:
        The shell-quoted command line that was run.
    time_taken:
        Wall-clock seconds the command ran for.
    exit_status:
        The process return code.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str,
        time_taken: float,
        exit_status: int,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.command = command
        self.time_taken = time_taken
        self.exit_status = exit_status

    @property
    def error_context(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "time_taken": self.time_taken,
            "process_exit_value": self.exit_status,
        }


class CommandRunner:
    """Runs commands to completion. No timeout, no cancellation."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        stdin: str | None = None,
    ) -> str:
        """Run *args* and return combined stdout/stderr.

        Raises ``SubprocessFailure`` on a non-zero exit status.
        """
        command = shlex.join(str(a) for a in args)
        logger.debug("Running %s (cwd=%s)", command, cwd)

        start = time.monotonic()
        completed = subprocess.run(
            [str(a) for a in args],
            cwd=cwd,
            input=stdin,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
        time_taken = time.monotonic() - start
        logger.debug("%s exited %d after %.2fs", command, completed.returncode, time_taken)

        if completed.returncode != 0:
            logger.error("Command failed (exit %d): %s", completed.returncode, command)
            raise SubprocessFailure(
                completed.stdout,
                command=command,
                time_taken=time_taken,
                exit_status=completed.returncode,
            )
        return completed.stdout

    def run_helper(
        self,
        args: Sequence[str],
        *,
        function: str,
        helper_args: list[Any],
        cwd: Path | None = None,
    ) -> Any:
        """Call *function* in a JSON-speaking helper process and return its result.

        The helper reads ``{"function", "args"}`` from stdin and answers with
        ``{"result": ...}`` or ``{"error": ...}``. An error answer is raised as
        ``SubprocessFailure`` even if the process exited zero.
        """
        command = shlex.join(str(a) for a in args)
        request = json.dumps({"function": function, "args": helper_args})

        start = time.monotonic()
        try:
            output = self.run(args, cwd=cwd, stdin=request)
        except SubprocessFailure as exc:
            raise SubprocessFailure(
                _helper_error(exc.message),
                command=exc.command,
                time_taken=exc.time_taken,
                exit_status=exc.exit_status,
            ) from exc
        time_taken = time.monotonic() - start

        try:
            response = json.loads(output)
        except json.JSONDecodeError:
            raise SubprocessFailure(
                output, command=command, time_taken=time_taken, exit_status=0
            ) from None

        if "error" in response:
            raise SubprocessFailure(
                response["error"], command=command, time_taken=time_taken, exit_status=0
            )
        return response["result"]


def _helper_error(output: str) -> str:
    """Prefer the helper's JSON error message over raw output."""
    try:
        response = json.loads(output)
    except json.JSONDecodeError:
        return output
    if isinstance(response, dict) and "error" in response:
        return str(response["error"])
    return output
