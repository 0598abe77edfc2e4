"""
batch-users settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and a .env file in the
working directory.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BatchUserSettings(BaseSettings):
    """
    batch-users configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)

    The account list itself comes from the unprefixed BATCH_USER_CREATION
    variable so existing container images keep working unchanged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="BU_",  # All tuning knobs start with BU_
    )

    batch_user_creation: str | None = Field(
        default=None,
        description="Accounts to create, 'user1[:pass1];user2[:pass2]' (env: BATCH_USER_CREATION)",
        validation_alias="BATCH_USER_CREATION",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: BU_LOG_LEVEL)",
    )

    # Account defaults
    login_shell: str = Field(
        default="/bin/bash",
        description="Login shell for new accounts (env: BU_LOGIN_SHELL)",
    )

    staff_group: str = Field(
        default="staff",
        description="Secondary group every new account joins (env: BU_STAFF_GROUP)",
    )

    # Optional Shiny Server integration
    daemon_binary: str = Field(
        default="shiny-server",
        description="Executable whose presence enables daemon group membership (env: BU_DAEMON_BINARY)",
    )

    daemon_group: str = Field(
        default="shiny",
        description="Group joined when the daemon is installed (env: BU_DAEMON_GROUP)",
    )


# Loaded lazily so importing the package never reads the environment
_settings: BatchUserSettings | None = None


def get_settings() -> BatchUserSettings:
    """Return the settings for this run, loading them on first use.

    The batch value and account defaults are read once; later changes to
    the environment are ignored until reload_settings() is called.
    """
    global _settings
    if _settings is None:
        _settings = BatchUserSettings()
    return _settings


def reload_settings() -> BatchUserSettings:
    """Re-read BATCH_USER_CREATION and the BU_* variables.

    Returns:
        The new BatchUserSettings, which get_settings() returns from now on
    """
    global _settings
    _settings = BatchUserSettings()
    return _settings
