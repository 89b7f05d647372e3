"""
Config -> Kernel Bridges.

Functions that convert parsed profile definitions into kernel inputs.
These live in account_config (the producer) because the kernel must NEVER
import account_config.

Usage:
    from account_config.bridges import build_account_policy

    policy = build_account_policy(profile_definition)
    account = Account(owner_id, balance, policy)
"""

from __future__ import annotations

from account_config.schema import FeeScheduleDef, ProfileDefinition
from account_kernel.domain.policy import (
    AccountPolicy,
    FeeSchedule,
    FundsComparison,
    RejectionMode,
)


def build_fee_schedule(fees: FeeScheduleDef) -> FeeSchedule:
    """Build a kernel FeeSchedule from its string-valued definition."""
    return FeeSchedule.of(
        atm_fee=fees.atm_fee,
        management_fee=fees.management_fee,
        per_transaction_fee=fees.per_transaction_fee,
    )


def build_account_policy(
    profile: ProfileDefinition,
    max_atm_transactions: int | None = None,
) -> AccountPolicy:
    """Build an AccountPolicy from a ProfileDefinition.

    ``max_atm_transactions``, when given, replaces the profile's quota so
    one profile can serve accounts with different ATM allowances.

    Raises:
        InvalidPolicyError: if the kernel refuses a value.
    """
    quota = profile.max_atm_transactions
    if max_atm_transactions is not None:
        quota = max_atm_transactions

    return AccountPolicy(
        rejection_mode=RejectionMode(profile.rejection_mode),
        funds_comparison=FundsComparison(profile.funds_comparison),
        fees=build_fee_schedule(profile.fees),
        max_atm_transactions=quota,
    )
