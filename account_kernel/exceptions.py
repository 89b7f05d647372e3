"""
Typed Exception Hierarchy for the Account Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

An account in the explicit-error profile must tell its caller exactly why a
call was refused. Callers branch on the exception TYPE and read structured
attributes; they never parse message strings.

Example - WRONG way to handle errors:
    try:
        account.withdraw(caller, amount)
    except Exception as e:
        if "funds" in str(e):  # FRAGILE - message might change
            ...

Example - RIGHT way (what this module enables):
    try:
        account.withdraw(caller, amount)
    except InsufficientFundsError as e:
        log.warning("short by %s", e.amount - e.balance)
        api_response(code=e.code, balance=e.balance)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from AccountKernelError:

    AccountKernelError (base)
    |
    +-- AuthorizationError
    |   +-- UnauthorizedCallerError
    |
    +-- FundsError
    |   +-- InsufficientFundsError
    |
    +-- QuotaError
    |   +-- AtmQuotaExceededError
    |
    +-- PolicyError
        +-- InvalidPolicyError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                  | When Raised
----------------|-----------------------|-----------------------------------------
Authorization   | UNAUTHORIZED_CALLER   | Caller id differs from the owner id
----------------|-----------------------|-----------------------------------------
Funds           | INSUFFICIENT_FUNDS    | Amount fails the funds comparison
----------------|-----------------------|-----------------------------------------
Quota           | ATM_QUOTA_EXCEEDED    | ATM call after the cycle quota is used
----------------|-----------------------|-----------------------------------------
Policy          | INVALID_POLICY        | Negative fee or quota at construction

All account failures are raised strictly BEFORE any balance or counter write.
Management fee settlement never raises INSUFFICIENT_FUNDS; a shortfall there
is reported only through the returned OperationOutcome.
"""

from decimal import Decimal
from typing import Any, Hashable


class AccountKernelError(Exception):
    """
    Base exception for all account kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "ACCOUNT_KERNEL_ERROR"


# Authorization exceptions


class AuthorizationError(AccountKernelError):
    """Base exception for caller authorization failures."""

    code: str = "AUTHORIZATION_ERROR"


class UnauthorizedCallerError(AuthorizationError):
    """Caller identifier does not match the account owner."""

    code: str = "UNAUTHORIZED_CALLER"

    def __init__(self, owner_id: Hashable, caller_id: Hashable, operation: str):
        self.owner_id = owner_id
        self.caller_id = caller_id
        self.operation = operation
        super().__init__(
            f"Caller {caller_id!r} is not the owner of this account "
            f"(operation: {operation})"
        )


# Funds exceptions


class FundsError(AccountKernelError):
    """Base exception for funds sufficiency failures."""

    code: str = "FUNDS_ERROR"


class InsufficientFundsError(FundsError):
    """Requested amount fails the active funds comparison."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(
        self,
        balance: Decimal,
        amount: Decimal,
        comparison: str,
        operation: str,
    ):
        self.balance = balance
        self.amount = amount
        self.comparison = comparison
        self.operation = operation
        super().__init__(
            f"Insufficient funds for {operation}: balance={balance}, "
            f"amount={amount}, comparison={comparison}"
        )


# Quota exceptions


class QuotaError(AccountKernelError):
    """Base exception for channel quota failures."""

    code: str = "QUOTA_ERROR"


class AtmQuotaExceededError(QuotaError):
    """ATM transaction quota for the current settlement cycle is exhausted."""

    code: str = "ATM_QUOTA_EXCEEDED"

    def __init__(self, used: int, limit: int, operation: str):
        self.used = used
        self.limit = limit
        self.operation = operation
        super().__init__(
            f"ATM transaction quota exceeded for {operation}: "
            f"{used} of {limit} already used"
        )


# Policy exceptions


class PolicyError(AccountKernelError):
    """Base exception for account policy problems."""

    code: str = "POLICY_ERROR"


class InvalidPolicyError(PolicyError):
    """Account policy field holds a value the kernel cannot honour."""

    code: str = "INVALID_POLICY"

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid policy field {field}={value!r}: {reason}")
