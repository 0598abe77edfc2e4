"""
batch-users - Bulk creation of local user accounts at container startup.

Reads 'user1[:pass1];user2[:pass2]' from BATCH_USER_CREATION and creates
every missing account with a login shell, a private home directory, staff
group membership and initial RStudio preferences. Accounts that already
exist are left untouched.
"""

from .creator import AccountCreator
from .models import AccountOutcome, AccountSpec, BatchReport, parse_batch
from .provisioner import BatchProvisioner
from .settings import BatchUserSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "AccountCreator",
    "AccountOutcome",
    "AccountSpec",
    "BatchProvisioner",
    "BatchReport",
    "BatchUserSettings",
    "get_settings",
    "parse_batch",
    "reload_settings",
]
