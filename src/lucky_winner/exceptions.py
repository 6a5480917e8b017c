"""Custom exceptions for the raffle."""
from typing import Optional


class LuckyWinnerError(Exception):
    """Base exception for all raffle-related errors."""
    pass


class ConfigurationError(LuckyWinnerError):
    """Raised when settings or constructor arguments are invalid."""
    pass


class InvalidAddress(LuckyWinnerError):
    """Raised when a participant identifier is not a valid address."""
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid address: {value!r}")


class RaffleError(LuckyWinnerError):
    """Base class for raffle state machine errors."""
    pass


class NotEnoughFunds(RaffleError):
    """Raised when an entry pays less than the entrance fee."""
    def __init__(self, required: int, provided: int):
        self.required = required
        self.provided = provided
        super().__init__(
            f"Not enough funds entered. Required: {required}, Provided: {provided}"
        )


class NotOpen(RaffleError):
    """Raised when entering while a winner is being calculated."""
    def __init__(self):
        super().__init__("Raffle not open")


class InvalidParticipant(RaffleError):
    """Raised when an address that may not hold a ticket tries to enter."""
    def __init__(self, participant: str):
        self.participant = participant
        super().__init__(f"{participant} cannot enter the raffle")


class UpkeepNotNeeded(RaffleError):
    """Raised when upkeep is performed while its conditions are not met."""
    def __init__(self, balance: int, num_players: int, raffle_state: int):
        self.balance = balance
        self.num_players = num_players
        self.raffle_state = raffle_state
        super().__init__(
            f"Upkeep not needed (balance={balance}, players={num_players}, "
            f"state={int(raffle_state)})"
        )


class UnknownRequest(RaffleError):
    """Raised when a fulfillment does not match the pending request."""
    def __init__(self, request_id: int, pending_request_id: Optional[int]):
        self.request_id = request_id
        self.pending_request_id = pending_request_id
        super().__init__(f"Unknown randomness request {request_id}")


class NoEntrants(RaffleError):
    """Raised when a winner must be picked from an empty player list."""
    def __init__(self):
        super().__init__("No players in raffle")


class PayoutFailed(RaffleError):
    """Raised when the prize cannot be transferred to the winner."""
    def __init__(self, winner: str, amount: int):
        self.winner = winner
        self.amount = amount
        super().__init__(f"Transfer of {amount} to winner {winner} failed")


class OnlyCoordinatorCanFulfill(RaffleError):
    """Raised when someone other than the coordinator delivers randomness."""
    def __init__(self, have: str, want: str):
        self.have = have
        self.want = want
        super().__init__(f"Only coordinator {want} can fulfill, got {have}")


class VRFError(LuckyWinnerError):
    """Base class for randomness coordinator errors."""
    pass


class NonexistentRequest(VRFError):
    """Raised when fulfilling a request the coordinator never issued."""
    def __init__(self, request_id: int):
        self.request_id = request_id
        super().__init__(f"nonexistent request: {request_id}")


class InvalidSubscription(VRFError):
    """Raised for an unknown subscription id."""
    def __init__(self, subscription_id: int):
        self.subscription_id = subscription_id
        super().__init__(f"Invalid subscription {subscription_id}")


class InvalidConsumer(VRFError):
    """Raised when a consumer is not registered on the subscription."""
    def __init__(self, subscription_id: int, consumer: str):
        self.subscription_id = subscription_id
        self.consumer = consumer
        super().__init__(
            f"Consumer {consumer} is not registered on subscription {subscription_id}"
        )


class NumWordsTooBig(VRFError):
    """Raised when more random words are requested than allowed."""
    def __init__(self, have: int, want: int):
        self.have = have
        self.want = want
        super().__init__(f"Requested {have} random words, maximum is {want}")


class LedgerError(LuckyWinnerError):
    """Base class for balance transfer errors."""
    pass


class InsufficientBalance(LedgerError):
    """Raised when an account cannot cover a transfer."""
    def __init__(self, address: str, required: int, available: int):
        self.address = address
        self.required = required
        self.available = available
        super().__init__(
            f"Account {address} has insufficient balance. "
            f"Required: {required}, Available: {available}"
        )


class PaymentRejected(LedgerError):
    """Raised when the recipient refuses incoming payments."""
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Account {address} rejected the payment")
