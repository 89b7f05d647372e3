"""
Account -- Single-owner account with strict transactional policy.

Responsibility:
    Holds the balance and the two usage counters of one account and exposes
    the complete operation set: deposit, withdraw, their ATM-routed
    variants, and management fee settlement. Every rule that can refuse an
    operation is asked of the injected AccountPolicy; the Account only
    sequences the checks and commits.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O apart from logging.
    The same class serves every profile; behaviour differences come from
    the AccountPolicy value, never from subclasses.

Invariants enforced:
    AUTHENTICATE_FIRST        -- owner check precedes every other check
    FUNDS_CHECK_BEFORE_DEBIT  -- debits pass policy.is_fundable first
    ATM_QUOTA_CEILING         -- quota checked before the delegated call
    ALL_OR_NOTHING            -- balance and counters written in _commit only
    COUNTERS_RESET_ONLY_ON_SETTLEMENT

Failure modes (explicit-error profile):
    - UnauthorizedCallerError  caller id differs from owner id
    - InsufficientFundsError   withdrawal fails the funds comparison
    - AtmQuotaExceededError    ATM call after the quota is used up
    In the silent-reject profile the same conditions return an
    OperationOutcome with committed=False. A management fee shortfall is
    silent in every profile.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Hashable, Iterator

from account_kernel.domain.amounts import AmountLike, to_amount
from account_kernel.domain.outcome import (
    AccountOperation,
    AccountSnapshot,
    OperationOutcome,
    RejectionReason,
)
from account_kernel.domain.policy import (
    BASIC_POLICY,
    AccountPolicy,
    FeeSchedule,
    strict_policy,
)
from account_kernel.exceptions import (
    AccountKernelError,
    AtmQuotaExceededError,
    InsufficientFundsError,
    UnauthorizedCallerError,
)
from account_kernel.logging_config import LogContext, get_logger

logger = get_logger("domain.account")


class Account:
    """
    Single-owner account.

    Contract:
        Each public operation takes the caller id first, returns an
        OperationOutcome, and either fully commits or leaves balance and
        counters untouched.

    Guarantees:
        - owner_id and policy never change after construction
        - balance is always a Decimal
        - atm_transaction_count <= max_atm_transactions when a quota exists

    Non-goals:
        - Does NOT validate the sign of amounts
        - Does NOT lock; callers sharing an instance must serialize access
    """

    def __init__(
        self,
        owner_id: Hashable,
        balance: AmountLike = Decimal("0"),
        policy: AccountPolicy = BASIC_POLICY,
    ):
        self._owner_id = owner_id
        self._balance = to_amount(balance)
        self._policy = policy
        self._transaction_count = 0
        self._atm_transaction_count = 0

    @classmethod
    def basic(
        cls,
        owner_id: Hashable,
        balance: AmountLike = Decimal("0"),
        fees: FeeSchedule | None = None,
    ) -> Account:
        """Silent rejections, inclusive funds check, no ATM quota."""
        policy = BASIC_POLICY if fees is None else AccountPolicy(fees=fees)
        return cls(owner_id, balance, policy)

    @classmethod
    def strict(
        cls,
        owner_id: Hashable,
        balance: AmountLike,
        max_atm_transactions: int,
        fees: FeeSchedule | None = None,
    ) -> Account:
        """Explicit errors, strict funds check, capped ATM usage."""
        return cls(owner_id, balance, strict_policy(max_atm_transactions, fees))

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def owner_id(self) -> Hashable:
        return self._owner_id

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def transaction_count(self) -> int:
        return self._transaction_count

    @property
    def atm_transaction_count(self) -> int:
        return self._atm_transaction_count

    @property
    def max_atm_transactions(self) -> int | None:
        return self._policy.max_atm_transactions

    @property
    def policy(self) -> AccountPolicy:
        return self._policy

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            balance=self._balance,
            transaction_count=self._transaction_count,
            atm_transaction_count=self._atm_transaction_count,
        )

    def pending_management_fee(self) -> Decimal:
        """Fee the next settlement would charge, given current usage."""
        return self._policy.management_fee(self._transaction_count)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def deposit(self, caller_id: Hashable, amount: AmountLike) -> OperationOutcome:
        """Credit ``amount``; refused only for a non-owner caller."""
        operation = AccountOperation.DEPOSIT
        with self._bound(caller_id, operation):
            return self._credit(caller_id, to_amount(amount), operation)

    def withdraw(self, caller_id: Hashable, amount: AmountLike) -> OperationOutcome:
        """Debit ``amount`` if the policy's funds comparison allows it."""
        operation = AccountOperation.WITHDRAW
        with self._bound(caller_id, operation):
            return self._debit(caller_id, to_amount(amount), operation)

    def deposit_via_atm(self, caller_id: Hashable, amount: AmountLike) -> OperationOutcome:
        """
        Deposit through the ATM channel.

        The ATM fee is taken off the requested amount before it is
        credited, so the balance grows by ``amount - atm_fee``.
        """
        operation = AccountOperation.DEPOSIT_VIA_ATM
        net = to_amount(amount) - self._policy.fees.atm_fee
        with self._bound(caller_id, operation):
            refused = self._check_atm_channel(caller_id, operation, net)
            if refused is not None:
                return refused
            return self._credit(caller_id, net, operation, via_atm=True)

    def withdraw_via_atm(self, caller_id: Hashable, amount: AmountLike) -> OperationOutcome:
        """
        Withdraw through the ATM channel.

        The ATM fee is added to the requested amount, and the funds check
        applies to that gross figure.
        """
        operation = AccountOperation.WITHDRAW_VIA_ATM
        gross = to_amount(amount) + self._policy.fees.atm_fee
        with self._bound(caller_id, operation):
            refused = self._check_atm_channel(caller_id, operation, gross)
            if refused is not None:
                return refused
            return self._debit(caller_id, gross, operation, via_atm=True)

    def settle_management_fee(self, caller_id: Hashable) -> OperationOutcome:
        """
        Charge ``management_fee + transaction_count * per_transaction_fee``.

        On success both counters return to zero. If the fee fails the funds
        comparison nothing changes and no exception is raised, whatever the
        rejection mode.
        """
        operation = AccountOperation.SETTLE_MANAGEMENT_FEE
        with self._bound(caller_id, operation):
            if not self._policy.is_authorized(self._owner_id, caller_id):
                return self._reject_unauthorized(caller_id, operation, None)

            fee = self.pending_management_fee()
            if not self._policy.is_fundable(self._balance, fee):
                return self._reject(
                    operation,
                    RejectionReason.INSUFFICIENT_FUNDS,
                    amount=fee,
                    error=None,
                )

            settled_count = self._transaction_count
            self._balance = self._balance - fee
            self._transaction_count = 0
            self._atm_transaction_count = 0

            logger.info(
                "management_fee_settled",
                extra={
                    "fee": fee,
                    "settled_transactions": settled_count,
                    "balance": self._balance,
                },
            )
            return OperationOutcome.committed_with(operation, self.snapshot(), fee)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _credit(
        self,
        caller_id: Hashable,
        amount: Decimal,
        operation: AccountOperation,
        via_atm: bool = False,
    ) -> OperationOutcome:
        if not self._policy.is_authorized(self._owner_id, caller_id):
            return self._reject_unauthorized(caller_id, operation, amount)
        return self._commit(operation, amount, amount, via_atm)

    def _debit(
        self,
        caller_id: Hashable,
        amount: Decimal,
        operation: AccountOperation,
        via_atm: bool = False,
    ) -> OperationOutcome:
        if not self._policy.is_authorized(self._owner_id, caller_id):
            return self._reject_unauthorized(caller_id, operation, amount)

        if not self._policy.is_fundable(self._balance, amount):
            return self._reject(
                operation,
                RejectionReason.INSUFFICIENT_FUNDS,
                amount=amount,
                error=InsufficientFundsError(
                    balance=self._balance,
                    amount=amount,
                    comparison=self._policy.funds_comparison.symbol,
                    operation=operation.value,
                ),
            )
        return self._commit(operation, -amount, amount, via_atm)

    def _check_atm_channel(
        self,
        caller_id: Hashable,
        operation: AccountOperation,
        adjusted: Decimal,
    ) -> OperationOutcome | None:
        """
        Owner check, then quota check. None means the call may proceed.

        ``adjusted`` is the fee-adjusted amount, reported on refusal.
        """
        if not self._policy.is_authorized(self._owner_id, caller_id):
            return self._reject_unauthorized(caller_id, operation, adjusted)

        if not self._policy.atm_quota_available(self._atm_transaction_count):
            limit = self._policy.max_atm_transactions
            return self._reject(
                operation,
                RejectionReason.ATM_QUOTA_EXCEEDED,
                amount=adjusted,
                error=AtmQuotaExceededError(
                    used=self._atm_transaction_count,
                    limit=limit if limit is not None else 0,
                    operation=operation.value,
                ),
            )
        return None

    def _commit(
        self,
        operation: AccountOperation,
        delta: Decimal,
        amount: Decimal,
        via_atm: bool,
    ) -> OperationOutcome:
        # Only place where balance and counters move outside settlement.
        self._balance = self._balance + delta
        self._transaction_count += 1
        if via_atm:
            self._atm_transaction_count += 1

        logger.info(
            "operation_committed",
            extra={
                "amount": amount,
                "balance": self._balance,
                "transaction_count": self._transaction_count,
                "atm_transaction_count": self._atm_transaction_count,
            },
        )
        return OperationOutcome.committed_with(operation, self.snapshot(), amount)

    def _reject_unauthorized(
        self,
        caller_id: Hashable,
        operation: AccountOperation,
        amount: Decimal | None,
    ) -> OperationOutcome:
        return self._reject(
            operation,
            RejectionReason.UNAUTHORIZED_CALLER,
            amount=amount,
            error=UnauthorizedCallerError(
                owner_id=self._owner_id,
                caller_id=caller_id,
                operation=operation.value,
            ),
        )

    def _reject(
        self,
        operation: AccountOperation,
        reason: RejectionReason,
        amount: Decimal | None,
        error: AccountKernelError | None,
    ) -> OperationOutcome:
        """Report a refusal. ``error`` is None where the refusal is always silent."""
        logger.warning(
            "operation_rejected",
            extra={
                "reason": reason.value,
                "amount": amount,
                "balance": self._balance,
            },
        )
        if error is not None and self._policy.raises_on_rejection:
            raise error
        return OperationOutcome.rejected_with(operation, self.snapshot(), reason, amount)

    @contextmanager
    def _bound(self, caller_id: Hashable, operation: AccountOperation) -> Iterator[None]:
        with LogContext.bind(
            owner_id=str(self._owner_id),
            caller_id=str(caller_id),
            operation=operation.value,
        ):
            yield

    def __repr__(self) -> str:
        return (
            f"Account(owner_id={self._owner_id!r}, balance={self._balance}, "
            f"transaction_count={self._transaction_count}, "
            f"atm_transaction_count={self._atm_transaction_count}, "
            f"rejection_mode={self._policy.rejection_mode.value})"
        )
