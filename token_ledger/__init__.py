"""
Token Ledger

An in-memory ERC-20 style token ledger with balance tracking, direct
transfers and delegated spending through allowances. All amounts are
fixed-width unsigned integers with overflow checks.
"""

from .balance import MAX_BALANCE_U64, Address, Balance
from .errors import (
    BalanceOverflow, InsufficientAllowance, InsufficientBalance,
    SelfApproval, SelfTransfer, TokenError, ZeroAmount
)
from .ledger import TokenLedger

__version__ = "1.0.0"

__all__ = [
    "Address",
    "Balance",
    "MAX_BALANCE_U64",
    "TokenLedger",
    "TokenError",
    "SelfTransfer",
    "ZeroAmount",
    "InsufficientBalance",
    "BalanceOverflow",
    "SelfApproval",
    "InsufficientAllowance",
]
