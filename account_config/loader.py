"""
Profile Loader (``account_config.loader``).

Responsibility
--------------
Loads YAML profile files and parses them into typed
``account_config.schema`` dataclass instances.  This is build/test
tooling; runtime callers go through ``account_config.get_profile()``.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Fee values are kept as strings so decimal precision survives parsing.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Non-integer quota  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from account_config.schema import FeeScheduleDef, ProfileDefinition, ProfileSet


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_fee_schedule(data: dict[str, Any] | None) -> FeeScheduleDef:
    """Parse a FeeScheduleDef; absent keys keep their defaults."""
    if not data:
        return FeeScheduleDef()
    defaults = FeeScheduleDef()
    return FeeScheduleDef(
        atm_fee=str(data.get("atm_fee", defaults.atm_fee)),
        management_fee=str(data.get("management_fee", defaults.management_fee)),
        per_transaction_fee=str(data.get("per_transaction_fee", defaults.per_transaction_fee)),
    )


def parse_quota(value: Any) -> int | None:
    """Parse ``max_atm_transactions``; ``None`` means no quota."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse ATM quota from {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    raise ValueError(f"Cannot parse ATM quota from {value!r}")


def parse_profile(data: dict[str, Any]) -> ProfileDefinition:
    """
    Parse a ``ProfileDefinition`` from a dict.

    Preconditions:
        - ``data`` has ``name``, ``rejection_mode`` and ``funds_comparison``.
    Raises:
        KeyError: if a required key is missing.
    """
    return ProfileDefinition(
        name=data["name"],
        rejection_mode=str(data["rejection_mode"]),
        funds_comparison=str(data["funds_comparison"]),
        fees=parse_fee_schedule(data.get("fees")),
        max_atm_transactions=parse_quota(data.get("max_atm_transactions")),
        description=data.get("description", ""),
    )


def parse_profile_set(data: dict[str, Any], checksum: str = "") -> ProfileSet:
    """Parse a ``ProfileSet`` from a dict with ``config_id`` and ``profiles``."""
    return ProfileSet(
        config_id=data["config_id"],
        version=int(data.get("version", 1)),
        profiles=tuple(parse_profile(p) for p in data.get("profiles", [])),
        checksum=checksum,
    )


def load_profile_set(config_dir: Path) -> ProfileSet:
    """
    Load every ``*.yaml`` file in ``config_dir`` into one ProfileSet.

    Files are read in name order. The first file that declares
    ``config_id``/``version`` names the set; ``profiles`` lists are
    concatenated.

    Raises:
        FileNotFoundError: if the directory holds no YAML files.
    """
    paths = sorted(config_dir.glob("*.yaml"))
    if not paths:
        raise FileNotFoundError(f"No profile files found in {config_dir}")

    config_id: str | None = None
    version: Any = 1
    profiles: list[dict[str, Any]] = []
    for path in paths:
        data = load_yaml_file(path)
        if config_id is None and data.get("config_id"):
            config_id = data["config_id"]
            version = data.get("version", 1)
        profiles.extend(data.get("profiles") or [])

    merged = {
        "config_id": config_id or config_dir.name,
        "version": version,
        "profiles": profiles,
    }
    return parse_profile_set(merged, checksum=compute_checksum(merged))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
