"""Narrow interface over the host's account-management utilities.

Everything that touches the user/group database goes through SystemAccounts
so the rest of the package can be exercised against a fake. Each call reads
live state; nothing is cached between accounts.
"""

import logging
import os
import pwd
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import CommandError, InvalidUsernameError

logger = logging.getLogger(__name__)

# useradd exit status for an invalid argument, which covers a bad username
USERADD_INVALID_ARGUMENT = 3


@dataclass
class CommandResult:
    """Captured outcome of one external command."""

    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""


def run_command(
    command: List[str], *, input: Optional[str] = None, check: bool = True
) -> CommandResult:
    """Run an external command and capture its output.

    No timeout is applied; a hanging utility hangs the run.

    Args:
        command: Argument list, e.g. ["usermod", "-a", "-G", "staff", "alice"]
        input: Text written to the command's stdin (e.g. for chpasswd)
        check: Raise CommandError on a non-zero exit status

    Returns:
        CommandResult with stripped stdout/stderr

    Raises:
        CommandError: Non-zero exit with check=True, or the command could not
            be started at all
    """
    cmd_str = " ".join(command[:4]) + (" ..." if len(command) > 4 else "")
    logger.debug(f"Executing: {cmd_str}")

    try:
        process = subprocess.run(
            command,
            input=input,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise CommandError(command, returncode=-1, stderr=str(e)) from e

    result = CommandResult(
        command=command,
        returncode=process.returncode,
        stdout=process.stdout.strip() if process.stdout else "",
        stderr=process.stderr.strip() if process.stderr else "",
    )

    if check and result.returncode != 0:
        raise CommandError(
            command,
            returncode=result.returncode,
            stderr=result.stderr,
            stdout=result.stdout,
        )

    return result


class SystemAccounts:
    """Account primitives backed by pwd, shadow-utils and coreutils."""

    def user_exists(self, username: str) -> bool:
        try:
            pwd.getpwnam(username)
        except KeyError:
            return False
        return True

    def home_directory(self, username: str) -> Path:
        return Path(pwd.getpwnam(username).pw_dir)

    def create_user(self, username: str, shell: str) -> None:
        """Create the account with a login shell and a fresh home directory.

        Raises:
            InvalidUsernameError: useradd rejected the name
            CommandError: useradd failed for any other reason
        """
        # "--" stops names such as "-D" from being read as options
        command = ["useradd", "-s", shell, "-m", "--", username]
        result = run_command(command, check=False)

        if result.returncode == USERADD_INVALID_ARGUMENT:
            raise InvalidUsernameError(
                command, result.returncode, result.stderr, result.stdout
            )
        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr, result.stdout)

    def set_password(self, chpasswd_line: str) -> None:
        """Hand a 'username:password' line to chpasswd, which hashes it."""
        run_command(["chpasswd"], input=chpasswd_line + "\n")

    def add_to_group(self, username: str, group: str) -> None:
        run_command(["usermod", "-a", "-G", group, "--", username])

    def is_installed(self, binary: str) -> bool:
        """Check whether an executable is reachable on PATH."""
        return shutil.which(binary) is not None

    def add_to_daemon_group(self, username: str, group: str) -> None:
        run_command(["adduser", "--", username, group])

    def chown_recursive(self, path: Path, owner: str, group: str) -> None:
        run_command(["chown", "-R", "--", f"{owner}:{group}", str(path)])

    def chmod(self, path: Path, mode: int) -> None:
        os.chmod(path, mode)
