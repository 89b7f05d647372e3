"""
AccountPolicy -- Fee, quota, funds and rejection configuration.

Responsibility:
    Decides, for one Account, whether a caller is authorized, whether an
    amount is fundable, whether an ATM transaction fits the quota, and how
    large the periodic management fee is. The Account entity asks; the
    policy answers. Two historical profiles are expressed as values of this
    one type rather than as account subclasses.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by account_kernel.domain.account and by the
    account_config bridges.

Invariants enforced:
    - Fee amounts and the ATM quota are non-negative (InvalidPolicyError).
    - Policies are immutable; two accounts may carry different fee
      schedules side by side.

Failure modes:
    - InvalidPolicyError on construction with a negative fee or quota.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, unique
from typing import Hashable

from account_kernel.domain.amounts import AmountLike, to_amount
from account_kernel.exceptions import InvalidPolicyError

DEFAULT_ATM_FEE = Decimal("1")
DEFAULT_MANAGEMENT_FEE = Decimal("5")
DEFAULT_PER_TRANSACTION_FEE = Decimal("0.1")


@unique
class RejectionMode(str, Enum):
    """How a refused operation is reported to the caller."""

    SILENT = "silent"
    """No exception; the returned outcome has committed=False."""

    EXPLICIT = "explicit"
    """A typed AccountKernelError subclass is raised."""


@unique
class FundsComparison(str, Enum):
    """How the balance is compared with a debit amount."""

    INCLUSIVE = "inclusive"
    """balance >= amount; a debit may bring the balance to exactly zero."""

    STRICT = "strict"
    """balance > amount; a debit equal to the balance is refused."""

    @property
    def symbol(self) -> str:
        return ">=" if self is FundsComparison.INCLUSIVE else ">"

    def allows(self, balance: Decimal, amount: Decimal) -> bool:
        if self is FundsComparison.INCLUSIVE:
            return balance >= amount
        return balance > amount


@dataclass(frozen=True, slots=True)
class FeeSchedule:
    """
    Fixed fees charged by an account.

    Guarantees:
        - Every fee is a non-negative Decimal.
    """

    atm_fee: Decimal = DEFAULT_ATM_FEE
    management_fee: Decimal = DEFAULT_MANAGEMENT_FEE
    per_transaction_fee: Decimal = DEFAULT_PER_TRANSACTION_FEE

    def __post_init__(self) -> None:
        for name in ("atm_fee", "management_fee", "per_transaction_fee"):
            raw = getattr(self, name)
            try:
                value = to_amount(raw)
            except (TypeError, ValueError) as e:
                raise InvalidPolicyError(name, raw, str(e)) from e
            if value < 0:
                raise InvalidPolicyError(name, raw, "fee must not be negative")
            object.__setattr__(self, name, value)

    @classmethod
    def of(
        cls,
        atm_fee: AmountLike = DEFAULT_ATM_FEE,
        management_fee: AmountLike = DEFAULT_MANAGEMENT_FEE,
        per_transaction_fee: AmountLike = DEFAULT_PER_TRANSACTION_FEE,
    ) -> FeeSchedule:
        """Build a schedule from any amount-like values; coercion happens in __post_init__."""
        return cls(
            atm_fee=atm_fee,  # type: ignore[arg-type]
            management_fee=management_fee,  # type: ignore[arg-type]
            per_transaction_fee=per_transaction_fee,  # type: ignore[arg-type]
        )

    def management_fee_for(self, transaction_count: int) -> Decimal:
        """Flat management fee plus the per-transaction charge."""
        return self.management_fee + transaction_count * self.per_transaction_fee


@dataclass(frozen=True, slots=True)
class AccountPolicy:
    """
    Complete behavioural configuration of an Account.

    Contract:
        Pure predicates over values handed in by the Account. The policy
        holds no account state.

    Guarantees:
        - Immutable and hashable.
        - max_atm_transactions is None (quota-free) or a non-negative int.

    Non-goals:
        - Does NOT mutate balances or counters.
        - Does NOT raise on rejection; the Account decides how to signal.
    """

    rejection_mode: RejectionMode = RejectionMode.SILENT
    funds_comparison: FundsComparison = FundsComparison.INCLUSIVE
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    max_atm_transactions: int | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "rejection_mode", RejectionMode(self.rejection_mode))
        except ValueError as e:
            raise InvalidPolicyError("rejection_mode", self.rejection_mode, str(e)) from e
        try:
            object.__setattr__(self, "funds_comparison", FundsComparison(self.funds_comparison))
        except ValueError as e:
            raise InvalidPolicyError("funds_comparison", self.funds_comparison, str(e)) from e

        quota = self.max_atm_transactions
        if quota is not None:
            if isinstance(quota, bool) or not isinstance(quota, int):
                raise InvalidPolicyError("max_atm_transactions", quota, "quota must be an int or None")
            if quota < 0:
                raise InvalidPolicyError("max_atm_transactions", quota, "quota must not be negative")

    @property
    def raises_on_rejection(self) -> bool:
        return self.rejection_mode is RejectionMode.EXPLICIT

    @property
    def has_atm_quota(self) -> bool:
        return self.max_atm_transactions is not None

    def is_authorized(self, owner_id: Hashable, caller_id: Hashable) -> bool:
        """Plain equality; the owner id is not a credential."""
        return owner_id == caller_id

    def is_fundable(self, balance: Decimal, amount: Decimal) -> bool:
        return self.funds_comparison.allows(balance, amount)

    def atm_quota_available(self, atm_transaction_count: int) -> bool:
        if self.max_atm_transactions is None:
            return True
        return atm_transaction_count < self.max_atm_transactions

    def management_fee(self, transaction_count: int) -> Decimal:
        return self.fees.management_fee_for(transaction_count)


BASIC_POLICY = AccountPolicy(
    rejection_mode=RejectionMode.SILENT,
    funds_comparison=FundsComparison.INCLUSIVE,
)
"""Silent rejections, ``>=`` funds check, no ATM quota."""


def strict_policy(
    max_atm_transactions: int,
    fees: FeeSchedule | None = None,
) -> AccountPolicy:
    """Explicit errors, ``>`` funds check, capped ATM usage."""
    return AccountPolicy(
        rejection_mode=RejectionMode.EXPLICIT,
        funds_comparison=FundsComparison.STRICT,
        fees=fees or FeeSchedule(),
        max_atm_transactions=max_atm_transactions,
    )
