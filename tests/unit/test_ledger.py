import pytest
from lucky_winner.clock import ManualClock
from lucky_winner.exceptions import InsufficientBalance, InvalidAddress, PaymentRejected
from lucky_winner.utils.accounts import generate_address, normalize_address


def test_unknown_account_has_zero_balance(ledger):
    assert ledger.get_balance(generate_address()) == 0

def test_transfer_moves_funds(ledger, account):
    recipient = generate_address()
    ledger.transfer(account, recipient, 10**17)
    assert ledger.get_balance(account) == 9 * 10**17
    assert ledger.get_balance(recipient) == 10**17

def test_transfer_insufficient_balance(ledger, account):
    recipient = generate_address()
    with pytest.raises(InsufficientBalance) as exc_info:
        ledger.transfer(account, recipient, 10**18 + 1)
    assert exc_info.value.available == 10**18
    assert ledger.get_balance(account) == 10**18
    assert ledger.get_balance(recipient) == 0

def test_rejected_payment_changes_nothing(ledger, account):
    recipient = generate_address()
    ledger.reject_payments(recipient)
    with pytest.raises(PaymentRejected):
        ledger.transfer(account, recipient, 1)
    assert ledger.get_balance(account) == 10**18

def test_negative_amounts_are_refused(ledger, account):
    with pytest.raises(ValueError):
        ledger.transfer(account, generate_address(), -1)
    with pytest.raises(ValueError):
        ledger.set_balance(account, -1)

def test_addresses_are_normalized(ledger, account):
    assert ledger.get_balance(account.lower()) == 10**18

def test_normalize_address_rejects_garbage():
    with pytest.raises(InvalidAddress):
        normalize_address("not-an-address")
    with pytest.raises(InvalidAddress):
        normalize_address(None)

def test_manual_clock_time_travel():
    clock = ManualClock(start=100)
    assert clock.time_travel(61) == 161
    clock.set(200)
    assert clock.now() == 200
    with pytest.raises(ValueError):
        clock.time_travel(-1)
    with pytest.raises(ValueError):
        clock.set(199)
