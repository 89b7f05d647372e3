"""
account_config -- single public entrypoint for account profile configuration.

Responsibility:
    Provides the way to obtain an ``AccountPolicy`` from YAML-authored
    profiles through ``get_profile()``.  YAML loading, validation and
    bridging are internal steps of that call.

Architecture position:
    Configuration -- sits above ``account_kernel``.  The kernel MUST NEVER
    import from ``account_config``; ``bridges`` translates parsed profiles
    into kernel values.

Failure modes:
    - ``FileNotFoundError`` -- no YAML files in the configuration directory.
    - ``ProfileNotFoundError`` -- the requested profile name is not defined.
    - ``ValueError`` -- profile validation failed.

Audit relevance:
    Every successful ``get_profile()`` call emits an
    ``ACCOUNT_CONFIG_TRACE`` log entry with the config id, version,
    checksum and the resolved policy fields.
"""

from __future__ import annotations

import logging
from pathlib import Path

from account_config.bridges import build_account_policy
from account_config.loader import load_profile_set
from account_config.schema import ProfileSet
from account_config.validator import validate_profile_set
from account_kernel.domain.policy import AccountPolicy

_logger = logging.getLogger("account_kernel.config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


class ProfileNotFoundError(KeyError):
    """Requested profile name is not defined in the configuration set."""

    code: str = "PROFILE_NOT_FOUND"

    def __init__(self, name: str, available: tuple[str, ...]):
        self.name = name
        self.available = available
        super().__init__(
            f"Account profile '{name}' not found (available: {', '.join(available) or 'none'})"
        )


def load_profiles(config_dir: Path | None = None) -> ProfileSet:
    """Load and validate the profile set in ``config_dir``.

    Raises:
        FileNotFoundError: If the directory holds no YAML files.
        ValueError: If profile validation fails.
    """
    profile_set = load_profile_set(config_dir or _DEFAULT_CONFIG_DIR)

    validation = validate_profile_set(profile_set)
    if not validation.is_valid:
        raise ValueError(
            "Profile validation failed:\n"
            + "\n".join(f"  - {e}" for e in validation.errors)
        )
    for warning in validation.warnings:
        _logger.warning("profile_validation_warning", extra={"detail": warning})

    return profile_set


def get_profile(
    name: str,
    config_dir: Path | None = None,
    max_atm_transactions: int | None = None,
) -> AccountPolicy:
    """Resolve a named profile into an ``AccountPolicy``.

    Args:
        name: Profile name, e.g. ``"basic"`` or ``"strict"``.
        config_dir: Override path to the profile directory.
            Defaults to account_config/sets/.
        max_atm_transactions: Optional quota replacing the profile's own.

    Raises:
        FileNotFoundError: If no profile files are found.
        ValueError: If profile validation fails.
        ProfileNotFoundError: If ``name`` is not defined.
    """
    profile_set = load_profiles(config_dir)

    definition = profile_set.get(name)
    if definition is None:
        raise ProfileNotFoundError(name, profile_set.names)

    policy = build_account_policy(definition, max_atm_transactions)

    _logger.info(
        "ACCOUNT_CONFIG_TRACE",
        extra={
            "trace_type": "ACCOUNT_CONFIG_TRACE",
            "config_id": profile_set.config_id,
            "config_version": profile_set.version,
            "config_checksum": profile_set.checksum,
            "profile": name,
            "rejection_mode": policy.rejection_mode.value,
            "funds_comparison": policy.funds_comparison.value,
            "max_atm_transactions": policy.max_atm_transactions,
        },
    )
    return policy


def list_profiles(config_dir: Path | None = None) -> tuple[str, ...]:
    """Names of all profiles in the configuration set."""
    return load_profiles(config_dir).names


__all__ = [
    "ProfileNotFoundError",
    "get_profile",
    "list_profiles",
    "load_profiles",
]
