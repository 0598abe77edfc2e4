"""Account creation for a single batch entry."""

import logging
from pathlib import Path
from typing import Optional

from .errors import InvalidUsernameError
from .models import AccountOutcome, AccountSpec
from .settings import BatchUserSettings, get_settings
from .system import SystemAccounts

logger = logging.getLogger(__name__)

PREFERENCES_DIR = Path(".rstudio") / "monitored" / "user-settings"
PREFERENCES_FILE = "user-settings"
PREFERENCES_CONTENT = "alwaysSaveHistory='0'\nloadRData='0'\nsaveAction='0'\n"

HOME_MODE = 0o700


def write_preferences(home: Path) -> Path:
    """Write the initial RStudio preferences under a home directory.

    Creates the parent directories as needed and overwrites any existing file.

    Args:
        home: The account's home directory

    Returns:
        Path of the written preference file
    """
    directory = home / PREFERENCES_DIR
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / PREFERENCES_FILE
    path.write_text(PREFERENCES_CONTENT, encoding="utf-8")
    return path


class AccountCreator:
    """Creates one OS account, or leaves an existing one alone.

    New accounts get the configured login shell, a home directory only the
    owner can enter, membership in the staff group and a preference file.
    Existing accounts are never modified, apart from joining the daemon group
    when the daemon is installed.

    Attributes:
        system: OS primitives used for every change
        settings: Shell, group names and daemon detection settings
    """

    def __init__(
        self,
        system: Optional[SystemAccounts] = None,
        settings: Optional[BatchUserSettings] = None,
    ):
        self.system = system or SystemAccounts()
        self.settings = settings or get_settings()

    def create(self, spec: AccountSpec) -> AccountOutcome:
        """Create the account described by spec unless it already exists.

        Args:
            spec: Parsed entry with a non-empty username

        Returns:
            CREATED, EXISTING, or FAILED when useradd rejected the name

        Raises:
            CommandError: Any other OS utility failure, left to the caller
        """
        username = spec.username
        logger.info(f"Processing user '{username}'.")

        if self.system.user_exists(username):
            logger.info(f"{username} user already exists. Nothing else to do.")
            outcome = AccountOutcome.EXISTING
        else:
            try:
                self.system.create_user(username, self.settings.login_shell)
            except InvalidUsernameError as e:
                logger.error(f"Failed to create user '{username}'.")
                logger.debug(str(e))
                return AccountOutcome.FAILED

            self._setup_new_account(spec)
            outcome = AccountOutcome.CREATED

        self._join_daemon_group(username)

        logger.info(f"Done with user {username}.")
        return outcome

    def _setup_new_account(self, spec: AccountSpec) -> None:
        username = spec.username

        if not spec.has_password:
            logger.info("Password not provided. Setting it equals to username.")
        self.system.set_password(spec.chpasswd_line())

        self.system.add_to_group(username, self.settings.staff_group)

        home = self.system.home_directory(username)
        write_preferences(home)

        # chmod must follow the recursive chown
        self.system.chown_recursive(home, username, username)
        self.system.chmod(home, HOME_MODE)

    def _join_daemon_group(self, username: str) -> None:
        if self.system.is_installed(self.settings.daemon_binary):
            logger.info(
                f"Adding {username} to the {self.settings.daemon_group} group."
            )
            self.system.add_to_daemon_group(username, self.settings.daemon_group)
