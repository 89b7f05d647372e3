"""
Profile Validator (``account_config.validator``).

Responsibility
--------------
Validates parsed profiles before they are bridged into kernel policies,
so a bad YAML edit is reported as a list of readable problems rather than
as the first exception the kernel happens to raise.

Invariants enforced
-------------------
* Profile name uniqueness within a set.
* Rejection mode and funds comparison name a known kernel value.
* Fees parse as finite, non-negative decimals.
* ATM quota is absent or a non-negative integer.

Failure modes
-------------
* Validation errors (``ProfileValidationResult.errors``)  -> the profile
  MUST NOT be bridged.
* Validation warnings  -> the profile is usable but should be reviewed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from account_config.schema import ProfileDefinition, ProfileSet
from account_kernel.domain.policy import FundsComparison, RejectionMode

_REJECTION_MODES = frozenset(m.value for m in RejectionMode)
_FUNDS_COMPARISONS = frozenset(c.value for c in FundsComparison)


@dataclass
class ProfileValidationResult:
    """
    Result of profile validation.

    Contract
    --------
    * ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def merge(self, other: ProfileValidationResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def validate_profile(profile: ProfileDefinition) -> ProfileValidationResult:
    """Validate one profile definition."""
    result = ProfileValidationResult()
    label = f"profile '{profile.name}'"

    if not profile.name:
        result.add_error("profile name must not be empty")

    if profile.rejection_mode not in _REJECTION_MODES:
        result.add_error(
            f"{label}: unknown rejection_mode '{profile.rejection_mode}' "
            f"(expected one of {sorted(_REJECTION_MODES)})"
        )
    if profile.funds_comparison not in _FUNDS_COMPARISONS:
        result.add_error(
            f"{label}: unknown funds_comparison '{profile.funds_comparison}' "
            f"(expected one of {sorted(_FUNDS_COMPARISONS)})"
        )

    total_fees = Decimal("0")
    for fee_name in ("atm_fee", "management_fee", "per_transaction_fee"):
        raw = getattr(profile.fees, fee_name)
        try:
            value = Decimal(raw)
        except InvalidOperation:
            result.add_error(f"{label}: {fee_name} '{raw}' is not a decimal")
            continue
        if not value.is_finite():
            result.add_error(f"{label}: {fee_name} '{raw}' is not finite")
        elif value < 0:
            result.add_error(f"{label}: {fee_name} '{raw}' must not be negative")
        else:
            total_fees += value

    quota = profile.max_atm_transactions
    if quota is not None and quota < 0:
        result.add_error(f"{label}: max_atm_transactions {quota} must not be negative")
    if quota == 0:
        result.add_warning(f"{label}: max_atm_transactions is 0, every ATM call will be refused")

    if result.is_valid and total_fees == 0:
        result.add_warning(f"{label}: all fees are zero")

    return result


def validate_profile_set(profile_set: ProfileSet) -> ProfileValidationResult:
    """Validate every profile plus set-level rules."""
    result = ProfileValidationResult()

    if not profile_set.profiles:
        result.add_error(f"config set '{profile_set.config_id}' defines no profiles")

    seen: set[str] = set()
    for profile in profile_set.profiles:
        if profile.name in seen:
            result.add_error(f"duplicate profile name '{profile.name}'")
        seen.add(profile.name)
        result.merge(validate_profile(profile))

    return result
