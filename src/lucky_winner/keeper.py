"""
Upkeep keeper - polls the raffle and starts draws when they are due
"""

import asyncio
import logging
from typing import Optional

from .exceptions import UpkeepNotNeeded
from .raffle import Raffle, RaffleState

logger = logging.getLogger(__name__)


class UpkeepKeeper:
    """Automation loop that triggers ``perform_upkeep`` for a raffle"""

    def __init__(self, raffle: Raffle, poll_interval: float = 10.0, error_backoff: float = 30.0):
        self.raffle = raffle
        self.poll_interval = poll_interval
        self.error_backoff = error_backoff
        self.running = False
        self.keeper_task: Optional[asyncio.Task] = None
        self.last_request_id: Optional[int] = None

    def run_once(self) -> Optional[int]:
        """Check upkeep once and start a draw if needed.

        Returns the request id of the started draw, or ``None``.
        """
        if not self.raffle.check_upkeep():
            if (
                self.raffle.get_raffle_state() == RaffleState.CALCULATING
                and self.last_request_id is not None
            ):
                logger.debug("Still waiting for randomness on request %s", self.last_request_id)
            return None
        try:
            request_id = self.raffle.perform_upkeep()
        except UpkeepNotNeeded as e:
            # Another trigger started the draw between check and perform
            logger.info("Upkeep no longer needed: %s", e)
            return None
        self.last_request_id = request_id
        logger.info("Upkeep performed, randomness requested: %s", request_id)
        return request_id

    async def start(self):
        """Start the keeper loop in the background"""
        if self.running:
            logger.warning("Upkeep keeper already running")
            return
        self.running = True
        logger.info("Starting upkeep keeper")
        self.keeper_task = asyncio.create_task(self._keeper_loop())

    async def stop(self):
        """Stop the keeper loop"""
        self.running = False
        if self.keeper_task:
            self.keeper_task.cancel()
            try:
                await self.keeper_task
            except asyncio.CancelledError:
                pass
            self.keeper_task = None
        logger.info("Upkeep keeper stopped")

    async def _keeper_loop(self):
        """Main keeper loop"""
        while self.running:
            try:
                self.run_once()
                await asyncio.sleep(self.poll_interval)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Error in keeper loop: %s", e)
                await asyncio.sleep(self.error_backoff)
