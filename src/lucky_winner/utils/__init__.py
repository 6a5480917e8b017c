"""Utility helpers shared by the raffle and its scripts."""
from .accounts import generate_address, normalize_address
from .logging import setup_logger

__all__ = [
    "generate_address",
    "normalize_address",
    "setup_logger",
]
