"""Run external commands with the wrapper's own standard streams."""

from __future__ import annotations

import errno
import logging
import subprocess

from helm_wrapper.errors import ProcessStartFailed
from helm_wrapper.models.invocation import CommandInvocation

logger = logging.getLogger(__name__)

EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127


class Executor:
    """Runs invocations to completion without capturing their output.

    The child inherits stdout and stderr, so nothing is buffered here.
    """

    def run(self, invocation: CommandInvocation, forward_stdin: bool = True) -> int:
        """Run ``invocation`` and return its exit code.

        Raises ProcessStartFailed when the binary cannot be launched.
        A child killed by signal N reports 128 + N, as a shell would.
        """
        logger.debug("Executing: %s", invocation.display())
        try:
            completed = subprocess.run(
                invocation.argv,
                stdin=None if forward_stdin else subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            code = EXIT_NOT_FOUND if exc.errno == errno.ENOENT else EXIT_CANNOT_EXECUTE
            raise ProcessStartFailed(invocation.binary, exc.strerror or str(exc), code) from exc

        returncode = completed.returncode
        if returncode < 0:
            returncode = 128 - returncode
        logger.debug("%s exited with %d", invocation.binary, returncode)
        return returncode
