"""
Token Error Taxonomy

Every rejected ledger operation raises one of these. They are expected,
recoverable outcomes: the ledger checks all preconditions before writing,
so catching one always leaves the ledger exactly as it was.
"""

from typing import Any, Dict

from .balance import Balance


class TokenError(ValueError):
    """Base class for all ledger operation failures"""

    code = "token_error"

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logging"""
        return {"code": self.code}


class SelfTransfer(TokenError):
    """Source and destination of a transfer are the same address"""

    code = "self_transfer"

    def __init__(self):
        super().__init__("Cannot transfer to the same address")


class ZeroAmount(TokenError):
    """Transfer requested with an amount of zero"""

    code = "zero_amount"

    def __init__(self):
        super().__init__("Transfer amount must be greater than zero")


class SelfApproval(TokenError):
    """Owner tried to approve itself as spender"""

    code = "self_approval"

    def __init__(self):
        super().__init__("Cannot approve the owner as its own spender")


class _ShortfallError(TokenError):
    """Failure where a required amount exceeds what is available"""

    def __init__(self, required: Balance, available: Balance, message: str):
        self.required = required
        self.available = available
        super().__init__(f"{message}: required {required}, available {available}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "required": self.required,
            "available": self.available,
        }


class InsufficientBalance(_ShortfallError):
    """Source address does not hold enough tokens"""

    code = "insufficient_balance"

    def __init__(self, required: Balance, available: Balance):
        super().__init__(required, available, "Insufficient balance")


class InsufficientAllowance(_ShortfallError):
    """Spender's approved amount is smaller than the requested transfer"""

    code = "insufficient_allowance"

    def __init__(self, required: Balance, available: Balance):
        super().__init__(required, available, "Insufficient allowance")


class BalanceOverflow(TokenError):
    """Crediting the destination would exceed the representable balance range"""

    code = "balance_overflow"

    def __init__(self, balance: Balance, amount: Balance, max_balance: Balance):
        self.balance = balance
        self.amount = amount
        self.max_balance = max_balance
        super().__init__(
            f"Balance overflow: {balance} + {amount} exceeds {max_balance}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "balance": self.balance,
            "amount": self.amount,
            "max_balance": self.max_balance,
        }
