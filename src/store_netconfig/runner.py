"""Process execution boundary.

Probing and configuration both shell out to OS tools (ping, netplan,
PowerShell). All of that goes through CommandRunner so the allocation and
configuration logic can be exercised against a fake runner in tests.
"""

import logging
import subprocess

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Exception raised when an external command cannot run or exits non-zero.

    Attributes:
        returncode: Exit status of the command, or None if it never completed.
        output: Combined stdout/stderr captured from the command.
    """

    def __init__(self, message: str, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class CommandRunner:
    """Run external commands and capture their output."""

    def run(
        self, args: list[str], timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Run a command to completion.

        Args:
            args: Command and arguments (no shell interpretation)
            timeout: Maximum run time in seconds, or None to wait indefinitely

        Returns:
            CompletedProcess with captured stdout and stderr.

        Raises:
            CommandError: If the executable is missing, cannot be started,
                times out, or exits with a non-zero status.
        """
        logger.debug("Running command: %s", " ".join(args))

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
            )
        except FileNotFoundError:
            raise CommandError(f"Command not found: {args[0]}") from None
        except subprocess.TimeoutExpired:
            raise CommandError(f"Command timed out after {timeout}s: {' '.join(args)}") from None
        except OSError as e:
            raise CommandError(f"Failed to execute {args[0]}: {e}") from e

        if result.returncode != 0:
            output = (result.stderr or "").strip() or (result.stdout or "").strip()
            raise CommandError(
                f"Command failed: {' '.join(args)}\n"
                f"Exit code: {result.returncode}\n"
                f"Error: {output or 'Unknown error'}",
                returncode=result.returncode,
                output=output,
            )

        return result
