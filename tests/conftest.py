import pytest
from lucky_winner.clock import ManualClock
from lucky_winner.ledger import Ledger
from lucky_winner.mocks import MockVRFCoordinator
from lucky_winner.raffle import Raffle
from lucky_winner.utils.accounts import generate_address

ENTRANCE_FEE = 10**16  # 0.01 ETH
INTERVAL = 60


@pytest.fixture
def clock():
    """Manual clock so tests can time travel"""
    return ManualClock(start=1_700_000_000)

@pytest.fixture
def ledger():
    return Ledger()

@pytest.fixture
def account(ledger):
    """Default funded account"""
    address = generate_address()
    ledger.set_balance(address, 10**18)  # 1 ETH initial funding
    return address

@pytest.fixture
def accounts(ledger, account):
    """Four funded accounts, the default account first"""
    others = [generate_address() for _ in range(3)]
    for addr in others:
        ledger.set_balance(addr, 10**18)
    return [account] + others

@pytest.fixture
def mock_vrf():
    """Deploy the mock VRF coordinator"""
    return MockVRFCoordinator()

@pytest.fixture
def raffle_contract(mock_vrf, ledger, clock):
    """Deploy the raffle contract"""
    subscription_id = mock_vrf.create_subscription()
    raffle_instance = Raffle(
        ENTRANCE_FEE,
        INTERVAL,
        mock_vrf,
        b"\x00" * 32,
        subscription_id,
        100000,
        ledger=ledger,
        clock=clock,
    )
    mock_vrf.add_consumer(subscription_id, raffle_instance.address)
    return raffle_instance

@pytest.fixture
def ready_raffle(raffle_contract, account, clock):
    """Raffle with one entry and the interval elapsed"""
    raffle_contract.enter_raffle(account, raffle_contract.get_entrance_fee())
    clock.time_travel(INTERVAL + 1)
    return raffle_contract
