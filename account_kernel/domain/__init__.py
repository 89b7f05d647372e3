"""
Pure domain layer.

This module contains the account entity, its policy value and the
immutable operation outcomes, with NO dependencies on:
- Database
- Time/clock
- Configuration files
- I/O (other than structured logging)
"""

from account_kernel.domain.account import Account
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
    FundsComparison,
    RejectionMode,
    strict_policy,
)

__all__ = [
    # Entity
    "Account",
    # Policy
    "AccountPolicy",
    "FeeSchedule",
    "FundsComparison",
    "RejectionMode",
    "BASIC_POLICY",
    "strict_policy",
    # Outcomes
    "AccountOperation",
    "AccountSnapshot",
    "OperationOutcome",
    "RejectionReason",
    # Amounts
    "AmountLike",
    "to_amount",
]
