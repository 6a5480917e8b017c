"""Local stand-in for a VRF coordinator.

Issues request ids, keeps the table of pending requests and lets the caller
decide when to deliver the random words, so tests control the ordering of
``perform_upkeep`` and fulfillment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Sequence, Set

from eth_abi import encode
from eth_utils import keccak

from ..events import EventLog, RandomWordsFulfilled, RandomWordsRequested
from ..exceptions import (
    InvalidConsumer,
    InvalidSubscription,
    NonexistentRequest,
    NumWordsTooBig,
)
from ..utils.accounts import generate_address, normalize_address
from ..vrf import MAX_NUM_WORDS, VRFConsumer

logger = logging.getLogger(__name__)


@dataclass
class Subscription:
    subscription_id: int
    consumers: Set[str] = field(default_factory=set)


@dataclass
class PendingRequest:
    request_id: int
    subscription_id: int
    num_words: int
    consumer: VRFConsumer


class MockVRFCoordinator:
    """In-process randomness coordinator with explicit fulfillment."""

    def __init__(self, address: Optional[str] = None) -> None:
        self.address = normalize_address(address) if address else generate_address()
        self.events = EventLog()
        self._lock = Lock()
        self._next_subscription_id = 1
        self._next_request_id = 1
        self._subscriptions: Dict[int, Subscription] = {}
        self._requests: Dict[int, PendingRequest] = {}
        self._last_request_id = 0

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def create_subscription(self) -> int:
        with self._lock:
            subscription_id = self._next_subscription_id
            self._next_subscription_id += 1
            self._subscriptions[subscription_id] = Subscription(subscription_id)
        logger.info("Created VRF subscription %s", subscription_id)
        return subscription_id

    def get_subscription(self, subscription_id: int) -> Subscription:
        with self._lock:
            return self._get_subscription(subscription_id)

    def add_consumer(self, subscription_id: int, consumer: str) -> None:
        consumer = normalize_address(consumer)
        with self._lock:
            self._get_subscription(subscription_id).consumers.add(consumer)
        logger.info("Added consumer %s to subscription %s", consumer, subscription_id)

    def remove_consumer(self, subscription_id: int, consumer: str) -> None:
        consumer = normalize_address(consumer)
        with self._lock:
            subscription = self._get_subscription(subscription_id)
            if consumer not in subscription.consumers:
                raise InvalidConsumer(subscription_id, consumer)
            subscription.consumers.remove(consumer)

    def _get_subscription(self, subscription_id: int) -> Subscription:
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None:
            raise InvalidSubscription(subscription_id)
        return subscription

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------
    def request_random_words(
        self,
        key_hash: bytes,
        subscription_id: int,
        request_confirmations: int,
        callback_gas_limit: int,
        num_words: int,
        consumer: VRFConsumer,
    ) -> int:
        with self._lock:
            subscription = self._get_subscription(subscription_id)
            if consumer.address not in subscription.consumers:
                raise InvalidConsumer(subscription_id, consumer.address)
            if num_words > MAX_NUM_WORDS:
                raise NumWordsTooBig(num_words, MAX_NUM_WORDS)
            request_id = self._next_request_id
            self._next_request_id += 1
            self._requests[request_id] = PendingRequest(
                request_id=request_id,
                subscription_id=subscription_id,
                num_words=num_words,
                consumer=consumer,
            )
            self._last_request_id = request_id
        logger.info("Random words requested: request_id=%s consumer=%s", request_id, consumer.address)
        self.events.emit(
            RandomWordsRequested(
                request_id=request_id,
                subscription_id=subscription_id,
                num_words=num_words,
                sender=consumer.address,
            )
        )
        return request_id

    def last_request_id(self) -> int:
        """Id of the most recent request, ``0`` before any request."""
        return self._last_request_id

    def request_id_to_consumer(self, request_id: int) -> Optional[str]:
        with self._lock:
            request = self._requests.get(request_id)
        return request.consumer.address if request else None

    def pending_request_ids(self) -> List[int]:
        with self._lock:
            return sorted(self._requests)

    # ------------------------------------------------------------------
    # Fulfillment
    # ------------------------------------------------------------------
    def fulfill_random_words(
        self, request_id: int, consumer: Optional[VRFConsumer] = None
    ) -> List[int]:
        """Deliver deterministic words for ``request_id`` and return them.

        Word ``i`` is ``keccak256(abi.encode(request_id, i))`` read as an
        unsigned integer.
        """
        request = self._get_request(request_id)
        words = [
            int.from_bytes(keccak(encode(["uint256", "uint256"], [request_id, i])), "big")
            for i in range(request.num_words)
        ]
        self._deliver(request, words, consumer)
        return words

    def fulfill_random_words_with_override(
        self,
        request_id: int,
        random_words: Sequence[int],
        consumer: Optional[VRFConsumer] = None,
    ) -> None:
        request = self._get_request(request_id)
        self._deliver(request, list(random_words), consumer)

    def _get_request(self, request_id: int) -> PendingRequest:
        with self._lock:
            request = self._requests.get(request_id)
        if request is None:
            raise NonexistentRequest(request_id)
        return request

    def _deliver(
        self,
        request: PendingRequest,
        words: List[int],
        consumer: Optional[VRFConsumer],
    ) -> None:
        target = consumer if consumer is not None else request.consumer
        try:
            target.fulfill_random_words(request.request_id, words, sender=self.address)
        except Exception as exc:
            # The request stays pending so it can be delivered again.
            logger.error("Fulfillment of request %s failed: %s", request.request_id, exc)
            raise
        with self._lock:
            self._requests.pop(request.request_id, None)
        logger.info("Request %s fulfilled for %s", request.request_id, target.address)
        self.events.emit(RandomWordsFulfilled(request_id=request.request_id, consumer=target.address))
