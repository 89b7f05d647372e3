"""
Tests for account profile configuration loading and bridging.

Covers:
- Schema types -- pure construction and immutability
- Loader -- YAML dict parsing, directory merging, checksums
- Validator -- errors and warnings
- Bridges -- ProfileDefinition to AccountPolicy
- End-to-end (get_profile) -- shipped and custom YAML
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest
import yaml

from account_config import (
    ProfileNotFoundError,
    get_profile,
    list_profiles,
    load_profiles,
)
from account_config.bridges import build_account_policy
from account_config.loader import (
    compute_checksum,
    load_profile_set,
    parse_profile,
    parse_quota,
)
from account_config.schema import FeeScheduleDef, ProfileDefinition, ProfileSet
from account_config.validator import validate_profile, validate_profile_set
from account_kernel.domain.account import Account
from account_kernel.domain.policy import FundsComparison, RejectionMode
from account_kernel.exceptions import AtmQuotaExceededError


def _profile_dict(**overrides) -> dict:
    data = {
        "name": "custom",
        "rejection_mode": "explicit",
        "funds_comparison": "strict",
        "max_atm_transactions": 2,
        "fees": {"atm_fee": "1", "management_fee": "5", "per_transaction_fee": "0.1"},
    }
    data.update(overrides)
    return data


# =========================================================================
# 1. Schema types
# =========================================================================


class TestSchema:

    def test_fee_defaults(self):
        fees = FeeScheduleDef()
        assert (fees.atm_fee, fees.management_fee, fees.per_transaction_fee) == ("1", "5", "0.1")

    def test_profile_definition_frozen(self):
        profile = ProfileDefinition(name="p", rejection_mode="silent", funds_comparison="inclusive")
        with pytest.raises(dataclasses.FrozenInstanceError):
            profile.name = "q"  # type: ignore[misc]

    def test_profile_set_lookup(self):
        a = ProfileDefinition(name="a", rejection_mode="silent", funds_comparison="inclusive")
        b = ProfileDefinition(name="b", rejection_mode="explicit", funds_comparison="strict")
        profile_set = ProfileSet(config_id="x", version=1, profiles=(a, b))
        assert profile_set.get("b") is b
        assert profile_set.get("c") is None
        assert profile_set.names == ("a", "b")


# =========================================================================
# 2. Loader
# =========================================================================


class TestLoader:

    def test_parse_profile(self):
        profile = parse_profile(_profile_dict())
        assert profile.name == "custom"
        assert profile.rejection_mode == "explicit"
        assert profile.max_atm_transactions == 2
        assert profile.fees.per_transaction_fee == "0.1"

    def test_parse_profile_missing_fees_uses_defaults(self):
        data = _profile_dict()
        del data["fees"]
        assert parse_profile(data).fees == FeeScheduleDef()

    def test_parse_profile_unquoted_fee(self):
        profile = parse_profile(_profile_dict(fees={"per_transaction_fee": 0.25}))
        assert profile.fees.per_transaction_fee == "0.25"
        assert profile.fees.atm_fee == "1"

    def test_parse_profile_missing_key(self):
        data = _profile_dict()
        del data["rejection_mode"]
        with pytest.raises(KeyError):
            parse_profile(data)

    @pytest.mark.parametrize(("raw", "expected"), [(None, None), (3, 3), ("4", 4), ("-1", -1)])
    def test_parse_quota(self, raw, expected):
        assert parse_quota(raw) == expected

    @pytest.mark.parametrize("raw", ["many", 2.5, True])
    def test_parse_quota_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_quota(raw)

    def test_load_profile_set(self, write_profiles):
        config_dir = write_profiles([_profile_dict()], config_id="bank-a", version=3)
        profile_set = load_profile_set(config_dir)
        assert profile_set.config_id == "bank-a"
        assert profile_set.version == 3
        assert profile_set.names == ("custom",)
        assert len(profile_set.checksum) == 64

    def test_load_merges_files_in_name_order(self, write_profiles):
        config_dir = write_profiles([_profile_dict(name="first")])
        extra = {"profiles": [_profile_dict(name="second")]}
        (config_dir / "zz_extra.yaml").write_text(yaml.safe_dump(extra))

        assert load_profile_set(config_dir).names == ("first", "second")

    def test_empty_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profile_set(tmp_path)

    def test_checksum_deterministic(self):
        data = {"b": 1, "a": [Decimal("0.1")]}
        assert compute_checksum(data) == compute_checksum({"a": [Decimal("0.1")], "b": 1})
        assert compute_checksum(data) != compute_checksum({"a": [], "b": 1})


# =========================================================================
# 3. Validator
# =========================================================================


class TestValidator:

    def test_valid_profile(self):
        result = validate_profile(parse_profile(_profile_dict()))
        assert result.is_valid
        assert result.warnings == []

    def test_unknown_mode_and_comparison(self):
        profile = parse_profile(_profile_dict(rejection_mode="loud", funds_comparison="fuzzy"))
        result = validate_profile(profile)
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_bad_fees(self):
        profile = parse_profile(
            _profile_dict(fees={"atm_fee": "-1", "management_fee": "abc", "per_transaction_fee": "NaN"})
        )
        result = validate_profile(profile)
        assert len(result.errors) == 3

    def test_negative_quota(self):
        result = validate_profile(parse_profile(_profile_dict(max_atm_transactions=-2)))
        assert not result.is_valid

    def test_zero_quota_warns(self):
        result = validate_profile(parse_profile(_profile_dict(max_atm_transactions=0)))
        assert result.is_valid
        assert any("max_atm_transactions is 0" in w for w in result.warnings)

    def test_zero_fees_warn(self):
        zero = {"atm_fee": "0", "management_fee": "0", "per_transaction_fee": "0"}
        result = validate_profile(parse_profile(_profile_dict(fees=zero)))
        assert result.is_valid
        assert any("all fees are zero" in w for w in result.warnings)

    def test_duplicate_names(self):
        profile = parse_profile(_profile_dict())
        result = validate_profile_set(ProfileSet(config_id="x", version=1, profiles=(profile, profile)))
        assert "duplicate profile name 'custom'" in result.errors

    def test_empty_set(self):
        result = validate_profile_set(ProfileSet(config_id="x", version=1))
        assert not result.is_valid


# =========================================================================
# 4. Bridges
# =========================================================================


class TestBridges:

    def test_build_account_policy(self):
        policy = build_account_policy(parse_profile(_profile_dict()))
        assert policy.rejection_mode is RejectionMode.EXPLICIT
        assert policy.funds_comparison is FundsComparison.STRICT
        assert policy.max_atm_transactions == 2
        assert policy.fees.per_transaction_fee == Decimal("0.1")

    def test_quota_override(self):
        policy = build_account_policy(parse_profile(_profile_dict()), max_atm_transactions=7)
        assert policy.max_atm_transactions == 7

    def test_quota_free_profile(self):
        policy = build_account_policy(parse_profile(_profile_dict(max_atm_transactions=None)))
        assert not policy.has_atm_quota


# =========================================================================
# 5. End-to-end
# =========================================================================


class TestGetProfile:

    def test_shipped_profiles(self):
        assert set(list_profiles()) >= {"basic", "strict"}

    def test_shipped_basic_profile(self):
        policy = get_profile("basic")
        assert policy.rejection_mode is RejectionMode.SILENT
        assert policy.funds_comparison is FundsComparison.INCLUSIVE
        assert policy.max_atm_transactions is None
        assert policy.fees.atm_fee == Decimal("1")
        assert policy.fees.management_fee == Decimal("5")
        assert policy.fees.per_transaction_fee == Decimal("0.1")

    def test_shipped_strict_profile_with_quota(self):
        policy = get_profile("strict", max_atm_transactions=1)
        account = Account(1, Decimal("100"), policy)

        account.deposit_via_atm(1, 10)
        with pytest.raises(AtmQuotaExceededError):
            account.deposit_via_atm(1, 10)

    def test_unknown_profile(self):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            get_profile("platinum")
        assert exc_info.value.code == "PROFILE_NOT_FOUND"
        assert "basic" in exc_info.value.available

    def test_invalid_set_refused(self, write_profiles):
        config_dir = write_profiles([_profile_dict(rejection_mode="loud")])
        with pytest.raises(ValueError, match="Profile validation failed"):
            load_profiles(config_dir)

    def test_custom_directory(self, write_profiles):
        config_dir = write_profiles([_profile_dict(name="gold", fees={"atm_fee": "0"})])
        policy = get_profile("gold", config_dir=config_dir)
        assert policy.fees.atm_fee == Decimal("0")

    def test_trace_logged(self, write_profiles, captured_logs):
        config_dir = write_profiles([_profile_dict()], config_id="traced")

        get_profile("custom", config_dir=config_dir)

        traces = [r for r in captured_logs() if r["message"] == "ACCOUNT_CONFIG_TRACE"]
        assert len(traces) == 1
        assert traces[0]["config_id"] == "traced"
        assert traces[0]["profile"] == "custom"
        assert traces[0]["max_atm_transactions"] == 2
