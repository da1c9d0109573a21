"""
Token Ledger Engine

In-memory ERC-20 style ledger: balances, direct transfers and delegated
spending through allowances. Every mutating operation runs all of its checks
before touching state, so a raised TokenError always leaves the ledger
unchanged.

The ledger is not thread-safe. Hosts that share one instance between threads
must serialize access to it themselves.
"""

import logging
from typing import Dict, Optional, Tuple

from .balance import Address, Balance, checked_add, max_balance_for_bits, validate_amount
from .config import get_config
from .errors import (
    BalanceOverflow, InsufficientAllowance, InsufficientBalance,
    SelfApproval, SelfTransfer, TokenError, ZeroAmount
)
from .logging_config import log_action


logger = logging.getLogger("token_ledger.ledger")


class TokenLedger:
    """
    Balance and allowance state for a single fungible token

    The whole supply is issued to the creator at construction; afterwards
    tokens only move between addresses, so the sum of all balances always
    equals total_supply.
    """

    def __init__(
        self,
        creator: Address,
        initial_supply: Balance,
        max_balance: Optional[Balance] = None
    ):
        """
        Create a ledger and credit the initial supply to the creator

        Args:
            creator: Address receiving the entire initial supply
            initial_supply: Fixed total supply of the token (0 is allowed)
            max_balance: Upper bound of the balance range; derived from the
                configured balance_bits when omitted

        Raises:
            TypeError: If initial_supply is not an integer
            ValueError: If initial_supply is outside [0, max_balance]
        """
        if max_balance is None:
            max_balance = max_balance_for_bits(get_config().balance_bits)
        validate_amount(max_balance, max_balance, "max_balance")
        validate_amount(initial_supply, max_balance, "initial_supply")

        self._max_balance = max_balance
        self._total_supply = initial_supply
        self._balances: Dict[Address, Balance] = {creator: initial_supply}
        # Single-hop lookups: one mapping keyed by (owner, spender)
        self._allowances: Dict[Tuple[Address, Address], Balance] = {}

        if logger.isEnabledFor(logging.DEBUG):
            log_action(
                logger, "debug", "Token ledger created",
                action="create", resource=repr(creator),
                extra={"initial_supply": initial_supply, "max_balance": max_balance}
            )

    @property
    def total_supply(self) -> Balance:
        """Total number of tokens in existence, fixed at creation"""
        return self._total_supply

    @property
    def max_balance(self) -> Balance:
        """Largest balance or allowance the ledger can represent"""
        return self._max_balance

    def balance_of(self, address: Address) -> Balance:
        """Get the balance held by an address (0 if never credited)"""
        return self._balances.get(address, 0)

    def allowance(self, owner: Address, spender: Address) -> Balance:
        """Get how much spender may still move on behalf of owner"""
        return self._allowances.get((owner, spender), 0)

    def transfer(self, sender: Address, recipient: Address, amount: Balance) -> None:
        """
        Move tokens from sender to recipient

        Args:
            sender: Address being debited
            recipient: Address being credited
            amount: Number of tokens to move

        Raises:
            SelfTransfer: If sender and recipient are the same address
            ZeroAmount: If amount is 0
            InsufficientBalance: If sender holds less than amount
            BalanceOverflow: If recipient's balance would leave the balance range
        """
        validate_amount(amount, self._max_balance)

        try:
            self._check_request(sender, recipient, amount)
            sender_balance, recipient_balance = self._check_movement(
                sender, recipient, amount
            )
        except TokenError as e:
            self._log_rejection("transfer", sender, e)
            raise

        self._balances[sender] = sender_balance
        self._balances[recipient] = recipient_balance

        if logger.isEnabledFor(logging.DEBUG):
            log_action(
                logger, "debug", "Transfer applied",
                action="transfer", resource=repr(sender),
                extra={"recipient": repr(recipient), "amount": amount}
            )

    def approve(self, owner: Address, spender: Address, amount: Balance) -> None:
        """
        Set the amount spender may move on behalf of owner

        Replaces any previous allowance for the pair. An amount of 0 revokes
        the approval. The owner's balance is deliberately not checked: an
        approval records intent, it does not reserve funds.

        Raises:
            SelfApproval: If owner and spender are the same address
        """
        validate_amount(amount, self._max_balance)

        if owner == spender:
            error = SelfApproval()
            self._log_rejection("approve", owner, error)
            raise error

        self._allowances[(owner, spender)] = amount

        if logger.isEnabledFor(logging.DEBUG):
            log_action(
                logger, "debug", "Allowance set",
                action="approve", resource=repr(owner),
                extra={"spender": repr(spender), "amount": amount}
            )

    def transfer_from(
        self,
        spender: Address,
        owner: Address,
        recipient: Address,
        amount: Balance
    ) -> None:
        """
        Move tokens from owner to recipient using spender's allowance

        The allowance consumed is always the (owner, spender) entry; no
        allowance involving the recipient is read or written.

        Args:
            spender: Address acting on the owner's behalf
            owner: Address being debited
            recipient: Address being credited
            amount: Number of tokens to move

        Raises:
            SelfTransfer: If owner and recipient are the same address
            ZeroAmount: If amount is 0
            InsufficientAllowance: If spender's allowance from owner is below amount
            InsufficientBalance: If owner holds less than amount
            BalanceOverflow: If recipient's balance would leave the balance range
        """
        validate_amount(amount, self._max_balance)

        try:
            self._check_request(owner, recipient, amount)
            # Allowance before balance: unapproved spenders fail on the first lookup
            current_allowance = self.allowance(owner, spender)
            if current_allowance < amount:
                raise InsufficientAllowance(required=amount, available=current_allowance)
            owner_balance, recipient_balance = self._check_movement(
                owner, recipient, amount
            )
        except TokenError as e:
            self._log_rejection("transfer_from", spender, e)
            raise

        self._balances[owner] = owner_balance
        self._balances[recipient] = recipient_balance
        self._allowances[(owner, spender)] = current_allowance - amount

        if logger.isEnabledFor(logging.DEBUG):
            log_action(
                logger, "debug", "Delegated transfer applied",
                action="transfer_from", resource=repr(spender),
                extra={
                    "owner": repr(owner),
                    "recipient": repr(recipient),
                    "amount": amount,
                    "remaining_allowance": current_allowance - amount
                }
            )

    @staticmethod
    def _check_request(sender: Address, recipient: Address, amount: Balance) -> None:
        if sender == recipient:
            raise SelfTransfer()
        if amount == 0:
            raise ZeroAmount()

    def _check_movement(
        self,
        sender: Address,
        recipient: Address,
        amount: Balance
    ) -> Tuple[Balance, Balance]:
        """
        Validate that sender can fund amount and recipient can hold it

        Returns the post-transfer balances of sender and recipient without
        writing them.
        """
        sender_balance = self.balance_of(sender)
        if sender_balance < amount:
            raise InsufficientBalance(required=amount, available=sender_balance)

        recipient_balance = self.balance_of(recipient)
        new_recipient_balance = checked_add(recipient_balance, amount, self._max_balance)
        if new_recipient_balance is None:
            raise BalanceOverflow(recipient_balance, amount, self._max_balance)

        return sender_balance - amount, new_recipient_balance

    def _log_rejection(self, action: str, caller: Address, error: TokenError) -> None:
        if not logger.isEnabledFor(logging.INFO):
            return
        log_action(
            logger, "info", f"{action} rejected: {error}",
            action=action, resource=repr(caller), extra=error.to_dict()
        )
