import asyncio
import logging

from lucky_winner.keeper import UpkeepKeeper
from lucky_winner.raffle import RaffleState


def test_run_once_does_nothing_when_upkeep_not_needed(raffle_contract, mock_vrf):
    keeper = UpkeepKeeper(raffle_contract)
    assert keeper.run_once() is None
    assert mock_vrf.last_request_id() == 0

def test_run_once_starts_a_draw(ready_raffle, mock_vrf):
    keeper = UpkeepKeeper(ready_raffle)

    request_id = keeper.run_once()

    assert request_id == mock_vrf.last_request_id()
    assert keeper.last_request_id == request_id
    assert ready_raffle.get_raffle_state() == RaffleState.CALCULATING
    # Waiting on the coordinator does not start a second draw
    assert keeper.run_once() is None
    assert mock_vrf.pending_request_ids() == [request_id]

def test_background_loop_triggers_upkeep(ready_raffle, mock_vrf):
    keeper = UpkeepKeeper(ready_raffle, poll_interval=0.01)

    async def run():
        await keeper.start()
        for _ in range(100):
            if ready_raffle.get_raffle_state() == RaffleState.CALCULATING:
                break
            await asyncio.sleep(0.01)
        await keeper.stop()

    asyncio.run(run())

    assert ready_raffle.get_raffle_state() == RaffleState.CALCULATING
    assert mock_vrf.pending_request_ids() == [keeper.last_request_id]
    assert keeper.keeper_task is None
    assert keeper.running is False

def test_full_cycle_with_keeper(ready_raffle, mock_vrf, account):
    keeper = UpkeepKeeper(ready_raffle)
    request_id = keeper.run_once()
    mock_vrf.fulfill_random_words(request_id)
    assert ready_raffle.get_recent_winner() == account
    assert keeper.run_once() is None

def test_run_once_logs_the_request(ready_raffle, caplog):
    keeper = UpkeepKeeper(ready_raffle)
    with caplog.at_level(logging.INFO, logger="lucky_winner.keeper"):
        request_id = keeper.run_once()
    assert f"Upkeep performed, randomness requested: {request_id}" in caplog.messages
