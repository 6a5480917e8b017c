"""Raffle state machine with an asynchronous randomness provider."""

from .clock import ManualClock, SystemClock
from .config import LoggingConfig, NetworkConfig, RaffleConfig, load_config
from .events import (
    EventLog,
    RaffleEnter,
    RandomWordsFulfilled,
    RandomWordsRequested,
    RequestedRaffleWinner,
    WinnerPicked,
)
from .keeper import UpkeepKeeper
from .ledger import Ledger
from .mocks import MockVRFCoordinator
from .raffle import NUM_WORDS, REQUEST_CONFIRMATIONS, Raffle, RaffleState

__all__ = [
    "EventLog",
    "Ledger",
    "LoggingConfig",
    "ManualClock",
    "MockVRFCoordinator",
    "NUM_WORDS",
    "NetworkConfig",
    "REQUEST_CONFIRMATIONS",
    "Raffle",
    "RaffleConfig",
    "RaffleEnter",
    "RaffleState",
    "RandomWordsFulfilled",
    "RandomWordsRequested",
    "RequestedRaffleWinner",
    "SystemClock",
    "UpkeepKeeper",
    "WinnerPicked",
    "load_config",
]
