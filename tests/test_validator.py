"""Tests for configuration and upload validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd

from data.validator import validate_run_config, validate_users, validate_partition_coverage


def make_users_df(rows=None):
    return pd.DataFrame(rows if rows is not None else [
        {"User ID": "a", "Partition": "P", "Dependencies": "b", "Weight": 1.0},
        {"User ID": "b", "Partition": "P", "Dependencies": None, "Weight": 2.0},
    ])


class TestValidateRunConfig:
    def test_matching_partitions(self):
        result = validate_run_config({"a": 1, "b": 2}, {"a": [], "b": []})
        assert result.is_valid
        assert result.errors == []

    def test_mismatch_reports_both_directions(self):
        result = validate_run_config({"a": 1}, {"b": []})
        assert not result.is_valid
        assert len(result.errors) == 2


class TestValidateUsers:
    def test_valid(self):
        result = validate_users(make_users_df())
        assert result.is_valid
        assert result.warnings == []

    def test_missing_columns(self):
        result = validate_users(pd.DataFrame([{"User ID": "a"}]))
        assert not result.is_valid
        assert "Partition" in result.errors[0]

    def test_empty(self):
        result = validate_users(pd.DataFrame(columns=["User ID", "Partition"]))
        assert not result.is_valid

    def test_non_numeric_weight(self):
        df = make_users_df()
        df["Weight"] = ["heavy", 1.0]
        result = validate_users(df)
        assert not result.is_valid

    def test_infinite_weight(self):
        df = make_users_df()
        df["Weight"] = [float("inf"), 1.0]
        result = validate_users(df)
        assert not result.is_valid
        assert "finite" in result.errors[0]

    def test_warnings(self):
        result = validate_users(make_users_df([
            {"User ID": "a", "Partition": "P", "Dependencies": "ghost", "Weight": 0.0},
            {"User ID": "a", "Partition": "P", "Dependencies": None, "Weight": 1.0},
        ]))
        assert result.is_valid
        text = " ".join(result.warnings)
        assert "ghost" in text
        assert "Duplicate" in text
        assert "non-positive" in text


class TestPartitionCoverage:
    def test_coverage_warnings(self):
        result = validate_partition_coverage(make_users_df(), {"Q": 1})
        assert result.is_valid
        assert len(result.warnings) == 2
