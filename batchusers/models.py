"""Pydantic models and parsing for batch account specifications."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

ENTRY_SEPARATOR = ";"
PASSWORD_SEPARATOR = ":"


class AccountSpec(BaseModel):
    """One requested account parsed from the batch value.

    Attributes:
        username: Account name; empty when the entry is malformed
        password: Cleartext password, None when the entry omitted it
    """

    username: str = Field(default="", description="Account name")
    password: Optional[str] = Field(
        default=None, repr=False, description="Cleartext password"
    )

    @property
    def is_malformed(self) -> bool:
        return not self.username

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    @property
    def effective_password(self) -> str:
        """Password to set, falling back to the username when none was given."""
        return self.password or self.username

    def chpasswd_line(self) -> str:
        """Format the 'username:password' line chpasswd reads from stdin."""
        return f"{self.username}{PASSWORD_SEPARATOR}{self.effective_password}"


class AccountOutcome(str, Enum):
    """What happened to a single entry of the batch."""

    CREATED = "created"
    EXISTING = "existing"
    FAILED = "failed"
    MALFORMED = "malformed"
    ERROR = "error"


class EntryResult(BaseModel):
    """Result of processing one batch entry."""

    username: str = Field(..., description="Account name (may be empty)")
    outcome: AccountOutcome = Field(..., description="Processing outcome")
    message: Optional[str] = Field(None, description="Failure detail, if any")


class BatchReport(BaseModel):
    """Per-entry results of one provisioning run, in input order."""

    entries: List[EntryResult] = Field(default_factory=list)

    def add(
        self, username: str, outcome: AccountOutcome, message: Optional[str] = None
    ) -> EntryResult:
        entry = EntryResult(username=username, outcome=outcome, message=message)
        self.entries.append(entry)
        return entry

    def count(self, outcome: AccountOutcome) -> int:
        return sum(1 for entry in self.entries if entry.outcome == outcome)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def created(self) -> int:
        return self.count(AccountOutcome.CREATED)

    @property
    def existing(self) -> int:
        return self.count(AccountOutcome.EXISTING)

    @property
    def failed(self) -> int:
        """Entries that did not end up as an account: bad input or errors."""
        return self.total - self.created - self.existing


def remove_whitespace(value: str) -> str:
    return "".join(value.split())


def parse_entry(entry: str) -> AccountSpec:
    """Split one 'username[:password]' entry on its first colon.

    Args:
        entry: A single entry with whitespace already removed

    Returns:
        AccountSpec; password is None when the entry has no colon

    Example:
        >>> parse_entry("bob:s3:cret")
        AccountSpec(username='bob')
    """
    username, separator, password = entry.partition(PASSWORD_SEPARATOR)
    return AccountSpec(username=username, password=password if separator else None)


def parse_batch(raw: Optional[str]) -> List[AccountSpec]:
    """Parse the whole batch value into account specs, in input order.

    Every whitespace character is dropped first since the format does not
    allow it inside usernames or passwords. Each ';'-separated segment becomes
    one spec, including empty segments, which come back malformed so the
    caller can report them.

    Args:
        raw: Batch value such as "alice;bob:secret123", or None

    Returns:
        List of AccountSpec, empty when raw is None or empty
    """
    if not raw:
        return []

    cleaned = remove_whitespace(raw)
    if not cleaned:
        return []

    return [parse_entry(entry) for entry in cleaned.split(ENTRY_SEPARATOR)]
