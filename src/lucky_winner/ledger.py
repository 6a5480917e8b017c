"""In-memory balance book holding participant and raffle funds."""

from __future__ import annotations

import logging
from collections import defaultdict
from threading import Lock
from typing import Dict, Set

from .exceptions import InsufficientBalance, PaymentRejected
from .utils.accounts import normalize_address

logger = logging.getLogger(__name__)


class Ledger:
    """Account balances keyed by checksummed address.

    Transfers are all-or-nothing: either both sides are updated or an error is
    raised and no balance changes.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._balances: Dict[str, int] = defaultdict(int)
        self._rejecting: Set[str] = set()

    def get_balance(self, address: str) -> int:
        with self._lock:
            return self._balances.get(normalize_address(address), 0)

    def set_balance(self, address: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Balance must not be negative")
        with self._lock:
            self._balances[normalize_address(address)] = amount

    def reject_payments(self, address: str, reject: bool = True) -> None:
        """Make ``address`` refuse (or accept again) incoming transfers."""
        address = normalize_address(address)
        with self._lock:
            if reject:
                self._rejecting.add(address)
            else:
                self._rejecting.discard(address)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Move ``amount`` from ``sender`` to ``recipient``.

        Raises
        ------
        InsufficientBalance
            If ``sender`` holds less than ``amount``.
        PaymentRejected
            If ``recipient`` refuses incoming payments.
        """
        if amount < 0:
            raise ValueError("Transfer amount must not be negative")
        sender = normalize_address(sender)
        recipient = normalize_address(recipient)
        with self._lock:
            available = self._balances.get(sender, 0)
            if available < amount:
                raise InsufficientBalance(sender, amount, available)
            if recipient in self._rejecting:
                raise PaymentRejected(recipient)
            self._balances[sender] = available - amount
            self._balances[recipient] += amount
        logger.debug("Transferred %s from %s to %s", amount, sender, recipient)
