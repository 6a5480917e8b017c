"""Address helpers for raffle participants."""
from eth_account import Account
from eth_utils import is_address, to_checksum_address

from ..exceptions import InvalidAddress


def generate_address() -> str:
    """Return the checksummed address of a freshly created account."""
    return Account.create().address


def normalize_address(value) -> str:
    """Return ``value`` as a checksummed address.

    Raises
    ------
    InvalidAddress
        If ``value`` is not a 20-byte hex address.
    """
    if not isinstance(value, str) or not is_address(value):
        raise InvalidAddress(value)
    return to_checksum_address(value)
