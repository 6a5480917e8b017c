"""Request/fulfil contract between the raffle and its randomness provider.

The raffle asks the coordinator for random words and gets a request id back
straight away. The words arrive later, in a separate call from the
coordinator to :meth:`VRFConsumer.fulfill_random_words` carrying the same id.
The coordinator must never deliver inside ``request_random_words`` itself.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

MAX_NUM_WORDS = 500


@runtime_checkable
class VRFConsumer(Protocol):
    address: str

    def fulfill_random_words(
        self, request_id: int, random_words: Sequence[int], *, sender: str
    ) -> None:
        """Receive the words for ``request_id``; reject ids it did not request."""


@runtime_checkable
class VRFCoordinator(Protocol):
    address: str

    def request_random_words(
        self,
        key_hash: bytes,
        subscription_id: int,
        request_confirmations: int,
        callback_gas_limit: int,
        num_words: int,
        consumer: VRFConsumer,
    ) -> int:
        """Register a request for ``consumer`` and return its unique id."""
