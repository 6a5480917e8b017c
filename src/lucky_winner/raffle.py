"""Raffle state machine.

Players enter while the raffle is OPEN by paying at least the entrance fee.
Once the interval has passed and there is something to win, upkeep moves the
raffle to CALCULATING and asks the VRF coordinator for a random word. When
the coordinator delivers it, the winner takes the whole balance and the
raffle opens again.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from threading import RLock
from typing import List, Optional, Sequence

from .clock import Clock, SystemClock
from .events import EventLog, RaffleEnter, RequestedRaffleWinner, WinnerPicked
from .exceptions import (
    ConfigurationError,
    InvalidAddress,
    InvalidParticipant,
    LedgerError,
    NoEntrants,
    NotEnoughFunds,
    NotOpen,
    OnlyCoordinatorCanFulfill,
    PayoutFailed,
    UnknownRequest,
    UpkeepNotNeeded,
)
from .ledger import Ledger
from .utils.accounts import generate_address, normalize_address
from .vrf import VRFCoordinator

logger = logging.getLogger(__name__)

REQUEST_CONFIRMATIONS = 3
NUM_WORDS = 1


class RaffleState(IntEnum):
    OPEN = 0
    CALCULATING = 1


class Raffle:
    """Lottery coordinator owning the entrants, timing and payout.

    Parameters
    ----------
    entrance_fee : int
        Minimum amount, in base units, a single entry must pay.
    interval : int
        Seconds that must pass since the last completed draw before upkeep
        can start a new one.
    vrf_coordinator : VRFCoordinator
        Randomness provider. Only its address may deliver random words.
    gas_lane : bytes
        32-byte key hash forwarded with every randomness request.
    subscription_id : int
        Coordinator subscription the requests are billed to.
    callback_gas_limit : int
        Forwarded to the coordinator unchanged.
    ledger : Optional[Ledger], default: None
        Balance book for entries and payout. A private one is created when
        omitted.
    clock : Optional[Clock], default: None
        Time source; defaults to :class:`SystemClock`.
    address : Optional[str], default: None
        Ledger address of the raffle itself. Generated when omitted.
    """

    def __init__(
        self,
        entrance_fee: int,
        interval: int,
        vrf_coordinator: VRFCoordinator,
        gas_lane: bytes,
        subscription_id: int,
        callback_gas_limit: int,
        *,
        ledger: Optional[Ledger] = None,
        clock: Optional[Clock] = None,
        address: Optional[str] = None,
    ) -> None:
        if entrance_fee <= 0:
            raise ConfigurationError("Entrance fee must be positive")
        if interval < 0:
            raise ConfigurationError("Interval must not be negative")
        if len(gas_lane) != 32:
            raise ConfigurationError("Gas lane must be a 32-byte key hash")

        self._entrance_fee = int(entrance_fee)
        self._interval = int(interval)
        self._vrf_coordinator = vrf_coordinator
        self._coordinator_address = normalize_address(vrf_coordinator.address)
        self._gas_lane = bytes(gas_lane)
        self._subscription_id = subscription_id
        self._callback_gas_limit = callback_gas_limit
        self._ledger = ledger if ledger is not None else Ledger()
        self._clock = clock if clock is not None else SystemClock()
        self.address = normalize_address(address) if address else generate_address()
        self.events = EventLog()

        self._lock = RLock()
        self._state = RaffleState.OPEN
        self._players: List[str] = []
        self._recent_winner: Optional[str] = None
        self._pending_request_id: Optional[int] = None
        self._last_timestamp = self._clock.now()

        logger.info(
            "Raffle %s deployed: entrance_fee=%s interval=%s coordinator=%s",
            self.address,
            self._entrance_fee,
            self._interval,
            self._coordinator_address,
        )

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------
    def enter_raffle(self, participant: str, value: int) -> None:
        """Enter ``participant`` by paying ``value`` into the raffle.

        Raises
        ------
        NotOpen
            If a winner is currently being calculated.
        NotEnoughFunds
            If ``value`` is below the entrance fee.
        InvalidParticipant
            If the raffle tries to enter itself.
        LedgerError
            If the participant cannot pay ``value``.
        """
        participant = normalize_address(participant)
        with self._lock:
            if self._state != RaffleState.OPEN:
                raise NotOpen()
            if value < self._entrance_fee:
                raise NotEnoughFunds(self._entrance_fee, value)
            if participant == self.address:
                raise InvalidParticipant(participant)
            self._ledger.transfer(participant, self.address, value)
            self._players.append(participant)
        logger.debug("Player %s entered with %s", participant, value)
        self.events.emit(RaffleEnter(player=participant, amount=value))

    # ------------------------------------------------------------------
    # Upkeep
    # ------------------------------------------------------------------
    def check_upkeep(self) -> bool:
        """Return whether a draw can be started now. Never mutates state."""
        with self._lock:
            return self._upkeep_needed()

    def _upkeep_needed(self) -> bool:
        is_open = self._state == RaffleState.OPEN
        time_passed = self._clock.now() - self._last_timestamp >= self._interval
        has_players = len(self._players) > 0
        has_balance = self._ledger.get_balance(self.address) > 0
        return is_open and time_passed and has_players and has_balance

    def perform_upkeep(self) -> int:
        """Start a draw and return the id of the randomness request.

        Raises
        ------
        UpkeepNotNeeded
            If :meth:`check_upkeep` is false. Nothing is changed.
        """
        with self._lock:
            if not self._upkeep_needed():
                raise UpkeepNotNeeded(
                    self._ledger.get_balance(self.address),
                    len(self._players),
                    self._state,
                )
            request_id = self._vrf_coordinator.request_random_words(
                self._gas_lane,
                self._subscription_id,
                REQUEST_CONFIRMATIONS,
                self._callback_gas_limit,
                NUM_WORDS,
                self,
            )
            self._pending_request_id = request_id
            self._state = RaffleState.CALCULATING
        logger.info("Requested raffle winner: request_id=%s", request_id)
        self.events.emit(RequestedRaffleWinner(request_id=request_id))
        return request_id

    # ------------------------------------------------------------------
    # Fulfillment
    # ------------------------------------------------------------------
    def fulfill_random_words(
        self, request_id: int, random_words: Sequence[int], *, sender: str
    ) -> None:
        """Pick the winner for ``request_id`` and pay out the balance.

        Raises
        ------
        OnlyCoordinatorCanFulfill
            If ``sender`` is not the VRF coordinator.
        UnknownRequest
            If ``request_id`` is not the pending request.
        NoEntrants
            If there is nobody to pick from.
        PayoutFailed
            If the transfer to the winner fails. The raffle stays in
            CALCULATING with its players so the request can be delivered
            again.
        """
        try:
            sender = normalize_address(sender)
        except InvalidAddress:
            raise OnlyCoordinatorCanFulfill(sender, self._coordinator_address) from None
        with self._lock:
            if sender != self._coordinator_address:
                raise OnlyCoordinatorCanFulfill(sender, self._coordinator_address)
            if self._pending_request_id is None or request_id != self._pending_request_id:
                raise UnknownRequest(request_id, self._pending_request_id)
            if not self._players:
                raise NoEntrants()
            if not random_words:
                raise ValueError("random_words must not be empty")

            index_of_winner = random_words[0] % len(self._players)
            winner = self._players[index_of_winner]
            prize = self._ledger.get_balance(self.address)
            try:
                self._ledger.transfer(self.address, winner, prize)
            except LedgerError as exc:
                logger.error("Payout of %s to %s failed: %s", prize, winner, exc)
                raise PayoutFailed(winner, prize) from exc

            self._recent_winner = winner
            self._players = []
            self._last_timestamp = self._clock.now()
            self._pending_request_id = None
            self._state = RaffleState.OPEN
        logger.info("Winner picked: %s won %s (request_id=%s)", winner, prize, request_id)
        self.events.emit(WinnerPicked(winner=winner))

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------
    def get_entrance_fee(self) -> int:
        return self._entrance_fee

    def get_interval(self) -> int:
        return self._interval

    def get_raffle_state(self) -> RaffleState:
        return self._state

    def get_player(self, index: int) -> str:
        with self._lock:
            if not 0 <= index < len(self._players):
                raise IndexError(f"No player at index {index}")
            return self._players[index]

    def get_player_count(self) -> int:
        return len(self._players)

    def get_last_timestamp(self) -> int:
        return self._last_timestamp

    def get_recent_winner(self) -> Optional[str]:
        return self._recent_winner

    def get_balance(self) -> int:
        return self._ledger.get_balance(self.address)

    def get_pending_request_id(self) -> Optional[int]:
        return self._pending_request_id

    def get_num_words(self) -> int:
        return NUM_WORDS

    def get_request_confirmations(self) -> int:
        return REQUEST_CONFIRMATIONS

    def get_subscription_id(self) -> int:
        return self._subscription_id

    def get_vrf_coordinator(self) -> VRFCoordinator:
        return self._vrf_coordinator

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<Raffle(address={address}, state={state}, players={players})>".format(
            address=self.address,
            state=self._state.name,
            players=len(self._players),
        )
