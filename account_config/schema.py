"""
Account profile schema.

Defines the human-authored, reviewable source artifact for account
policies. YAML files are parsed into these types by the loader, checked by
the validator, and turned into kernel ``AccountPolicy`` values by the
bridges.

Key distinction:
  ProfileDefinition = source artifact (human-authored, strings as written)
  AccountPolicy     = runtime artifact (typed, validated, frozen)
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeeScheduleDef:
    """Fee amounts as decimal strings, so no float ever touches them."""

    atm_fee: str = "1"
    management_fee: str = "5"
    per_transaction_fee: str = "0.1"


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProfileDefinition:
    """One named account profile."""

    name: str
    rejection_mode: str  # "silent" or "explicit"
    funds_comparison: str  # "inclusive" (>=) or "strict" (>)
    fees: FeeScheduleDef = FeeScheduleDef()
    max_atm_transactions: int | None = None
    description: str = ""


@dataclass(frozen=True)
class ProfileSet:
    """All profiles found in one configuration directory."""

    config_id: str
    version: int
    profiles: tuple[ProfileDefinition, ...] = ()
    checksum: str = ""

    def get(self, name: str) -> ProfileDefinition | None:
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.profiles)
