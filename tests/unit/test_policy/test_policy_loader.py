#!/usr/bin/env python3
"""Tests for policy document loading and normalization."""

import json
from decimal import Decimal

import pytest
import yaml

from rebudget.core.models import AccountRange
from rebudget.engine import is_eligible
from rebudget.policy import PolicyDocumentError, default_policy_template, load_policy, normalize_policy


class TestNormalizePolicy:
    """Test mapping schema variants onto PolicyRateDocument."""

    @pytest.mark.unit
    def test_simple_schema(self, rates_document):
        policy = normalize_policy(rates_document)

        assert policy.indirect_rate == Decimal("0.276")
        assert policy.indirect_account == "58960"
        assert policy.eligible_accounts == frozenset({"51110", "52000", "53000"})
        assert policy.eligible_ranges == ()

    @pytest.mark.unit
    def test_comprehensive_schema_uses_off_campus_rate(self):
        policy = normalize_policy(default_policy_template())

        assert policy.indirect_rate == Decimal("0.276")
        assert AccountRange(52000, 52999) in policy.eligible_ranges
        assert policy.excluded_accounts == frozenset({"56575", "56961", "56581"})
        assert is_eligible("52150", policy)
        assert not is_eligible("58960", policy)

    @pytest.mark.unit
    def test_comprehensive_schema_falls_back_to_on_campus(self):
        data = {"fa_rates": {"on_campus": {"research": {"rate": 0.52}}}}
        assert normalize_policy(data).indirect_rate == Decimal("0.52")

    @pytest.mark.unit
    def test_flat_schema(self):
        data = {"indirect_rate": "0.3", "indirect_account": "58000", "eligible_accounts": ["52000"]}
        policy = normalize_policy(data, default_indirect_account="58960")

        assert policy.indirect_rate == Decimal("0.3")
        assert policy.indirect_account == "58000"

    @pytest.mark.unit
    def test_missing_indirect_account_uses_default(self):
        policy = normalize_policy({"fa_rate": {"rate": 0.1}}, default_indirect_account="59999")
        assert policy.indirect_account == "59999"
        assert policy.eligible_accounts == frozenset()

    @pytest.mark.unit
    def test_no_rate(self):
        with pytest.raises(PolicyDocumentError, match="no F&A rate"):
            normalize_policy({"mtdc_eligible_accounts": ["52000"]})

    @pytest.mark.unit
    @pytest.mark.parametrize("rate", [-0.1, 1.5, "abc", "NaN"])
    def test_bad_rate(self, rate):
        with pytest.raises(PolicyDocumentError):
            normalize_policy({"fa_rate": {"rate": rate}})

    @pytest.mark.unit
    def test_reversed_range(self):
        with pytest.raises(PolicyDocumentError, match="reversed"):
            normalize_policy({"fa_rate": {"rate": 0.2}, "mtdc_eligible_accounts": ["52999-52000"]})


class TestLoadPolicy:
    """Test reading policy files."""

    @pytest.mark.unit
    def test_load_json(self, temp_dir, rates_document):
        path = temp_dir / "rates.json"
        path.write_text(json.dumps(rates_document))

        policy = load_policy(path)
        assert policy.indirect_rate == Decimal("0.276")
        assert policy.indirect_description == "F&A"

    @pytest.mark.unit
    def test_load_yaml(self, temp_dir, rates_document):
        path = temp_dir / "rates.yaml"
        path.write_text(yaml.safe_dump(rates_document))

        assert load_policy(path).eligible_accounts == frozenset({"51110", "52000", "53000"})

    @pytest.mark.unit
    def test_default_account_from_environment(self, temp_dir, monkeypatch):
        monkeypatch.setenv("REBUDGET_INDIRECT_ACCOUNT", "58999")
        path = temp_dir / "rates.json"
        path.write_text(json.dumps({"fa_rate": {"rate": 0.276}}))

        assert load_policy(path).indirect_account == "58999"

    @pytest.mark.unit
    def test_missing_file(self, temp_dir):
        with pytest.raises(PolicyDocumentError, match="not found"):
            load_policy(temp_dir / "nope.json")

    @pytest.mark.unit
    def test_malformed_json(self, temp_dir):
        path = temp_dir / "rates.json"
        path.write_text("{not json")
        with pytest.raises(PolicyDocumentError, match="Could not parse"):
            load_policy(path)

    @pytest.mark.unit
    def test_top_level_must_be_object(self, temp_dir):
        path = temp_dir / "rates.json"
        path.write_text("[1, 2]")
        with pytest.raises(PolicyDocumentError):
            load_policy(path)

    @pytest.mark.unit
    def test_directory_instead_of_file(self, temp_dir):
        path = temp_dir / "rates.yaml"
        path.mkdir()
        with pytest.raises(PolicyDocumentError, match="Could not read"):
            load_policy(path)
