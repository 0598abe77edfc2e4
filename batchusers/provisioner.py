"""Batch provisioning loop over every entry of BATCH_USER_CREATION."""

import logging
from typing import Optional

from .creator import AccountCreator
from .models import AccountOutcome, BatchReport, parse_batch

logger = logging.getLogger(__name__)


class BatchProvisioner:
    """Runs the account creator over a whole batch value.

    Entries are handled one at a time in input order. A bad entry, or an
    unexpected failure while creating one account, is logged and recorded in
    the report; the loop always moves on to the next entry.
    """

    def __init__(self, creator: Optional[AccountCreator] = None):
        self.creator = creator or AccountCreator()

    def run(self, batch_spec: Optional[str]) -> BatchReport:
        """Create every account listed in batch_spec.

        Never raises; the returned report is the only failure signal.

        Args:
            batch_spec: Value such as "alice;bob:secret123", or None

        Returns:
            BatchReport with one EntryResult per entry
        """
        report = BatchReport()
        if not batch_spec:
            return report

        logger.info("Requested creation of multiple user accounts in batch mode.")

        for spec in parse_batch(batch_spec):
            if spec.is_malformed:
                logger.error("Failed to create user: username undefined")
                report.add(spec.username, AccountOutcome.MALFORMED, "username undefined")
                continue

            try:
                outcome = self.creator.create(spec)
            except Exception as e:
                logger.exception(f"Failed to create user '{spec.username}': {e}")
                report.add(spec.username, AccountOutcome.ERROR, str(e))
                continue

            report.add(spec.username, outcome)

        logger.info("Finished creation of multiple user accounts in batch mode.")
        return report
