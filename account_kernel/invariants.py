"""
Account Invariants Contract.

These invariants are structural law for every Account, whatever
AccountPolicy it was built with. No rejection mode, funds comparison, or
fee schedule may switch them off.

This module exists solely to declare these invariants explicitly. The
enforcement lives in account_kernel.domain.account.
"""

from enum import Enum, unique


@unique
class AccountInvariant(str, Enum):
    """Non-configurable invariants enforced by the account kernel.

    Configuration may change *how* a rejection is signalled, but never
    *whether* these rules apply.
    """

    AUTHENTICATE_FIRST = "authenticate_first"
    """The caller id is compared with the owner id before any other check
    and before any write. A failed comparison produces zero mutation."""

    FUNDS_CHECK_BEFORE_DEBIT = "funds_check_before_debit"
    """The balance only decreases through a withdrawal or fee charge that
    passed the policy's funds comparison."""

    ATM_QUOTA_CEILING = "atm_quota_ceiling"
    """When a quota is configured, atm_transaction_count never exceeds
    max_atm_transactions. Checked before commit, never after."""

    TRANSACTION_COUNT_FIDELITY = "transaction_count_fidelity"
    """transaction_count equals the number of committed deposits and
    withdrawals since the last management fee settlement."""

    ALL_OR_NOTHING = "all_or_nothing"
    """Every operation either fully commits or leaves balance and both
    counters unchanged."""

    COUNTERS_RESET_ONLY_ON_SETTLEMENT = "counters_reset_only_on_settlement"
    """Only a committed management fee settlement resets the counters."""


# All invariants as a frozenset for programmatic checks.
ALL_ACCOUNT_INVARIANTS: frozenset[AccountInvariant] = frozenset(AccountInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "account_config",
)
