"""
Outcome -- Immutable results of account operations.

Responsibility:
    Every Account operation returns an OperationOutcome describing whether
    it committed, the observable state afterwards, and (when refused) the
    reason. In the silent-reject profile this is the ONLY rejection
    signal; in the explicit-error profile refusals raise before an outcome
    is built, except for management fee shortfalls.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, unique


@unique
class AccountOperation(str, Enum):
    """Public operations of an Account."""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    DEPOSIT_VIA_ATM = "deposit_via_atm"
    WITHDRAW_VIA_ATM = "withdraw_via_atm"
    SETTLE_MANAGEMENT_FEE = "settle_management_fee"


@unique
class RejectionReason(str, Enum):
    """Why an operation did not commit. Values match exception codes."""

    UNAUTHORIZED_CALLER = "UNAUTHORIZED_CALLER"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    ATM_QUOTA_EXCEEDED = "ATM_QUOTA_EXCEEDED"


@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Observable state of an account at one instant."""

    balance: Decimal
    transaction_count: int
    atm_transaction_count: int


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    """
    Result of one Account operation.

    Contract:
        Either committed (rejection is None) or rejected (rejection set),
        never both. On rejection the snapshot equals the state before the
        call.

    Guarantees:
        - Immutable (frozen dataclass)
        - amount is the value that moved the balance, after any ATM fee
          adjustment; for a settlement it is the fee charged or due.
    """

    operation: AccountOperation
    snapshot: AccountSnapshot
    amount: Decimal | None = None
    rejection: RejectionReason | None = None

    @classmethod
    def committed_with(
        cls,
        operation: AccountOperation,
        snapshot: AccountSnapshot,
        amount: Decimal,
    ) -> OperationOutcome:
        return cls(operation=operation, snapshot=snapshot, amount=amount)

    @classmethod
    def rejected_with(
        cls,
        operation: AccountOperation,
        snapshot: AccountSnapshot,
        reason: RejectionReason,
        amount: Decimal | None = None,
    ) -> OperationOutcome:
        return cls(
            operation=operation,
            snapshot=snapshot,
            amount=amount,
            rejection=reason,
        )

    @property
    def committed(self) -> bool:
        return self.rejection is None

    @property
    def balance(self) -> Decimal:
        return self.snapshot.balance

    def __bool__(self) -> bool:
        return self.committed
