"""
batch-users errors.
"""

from typing import List


class BatchUserError(Exception):
    """Base exception for all batch-users errors."""
    pass


class CommandError(BatchUserError):
    """An operating system utility failed.

    Keeps everything useful about the failed invocation so the caller can
    log it without re-running anything.
    """

    def __init__(
        self,
        command: List[str],
        returncode: int,
        stderr: str = "",
        stdout: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout

        cmd_str = " ".join(command[:4]) + (" ..." if len(command) > 4 else "")
        detail = stderr.strip() or "no error output"
        super().__init__(f"'{cmd_str}' failed with code {returncode}: {detail}")


class InvalidUsernameError(CommandError):
    """useradd rejected the requested username."""
    pass
