"""
Balance Arithmetic Module

Fixed-width unsigned token amounts. Python integers never overflow on their
own, so the representable range is enforced here and every addition that
credits an account goes through checked_add.
"""

from collections.abc import Hashable
from typing import Optional

# Addresses are opaque: any hashable value with value equality will do
Address = Hashable
Balance = int

DEFAULT_BALANCE_BITS = 64


def max_balance_for_bits(bits: int) -> Balance:
    """Largest balance representable by an unsigned integer of the given width"""
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise TypeError(f"Balance width must be an integer, got {type(bits).__name__}")
    if bits <= 0:
        raise ValueError(f"Balance width must be positive, got {bits}")
    return (1 << bits) - 1


MAX_BALANCE_U64 = max_balance_for_bits(DEFAULT_BALANCE_BITS)


def validate_amount(amount: Balance, max_balance: Balance, name: str = "amount") -> Balance:
    """
    Validate that a value is a representable balance

    Args:
        amount: Value to check
        max_balance: Upper bound of the balance range (inclusive)
        name: Argument name used in error messages

    Returns:
        The amount, unchanged

    Raises:
        TypeError: If amount is not an int (bool is rejected too)
        ValueError: If amount is negative or above max_balance
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"{name} must be an integer, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"{name} cannot be negative: {amount}")
    if amount > max_balance:
        raise ValueError(f"{name} {amount} exceeds maximum balance {max_balance}")
    return amount


def checked_add(balance: Balance, amount: Balance, max_balance: Balance) -> Optional[Balance]:
    """Add two balances, returning None when the sum leaves the balance range"""
    total = balance + amount
    if total > max_balance:
        return None
    return total
