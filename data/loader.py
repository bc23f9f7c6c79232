"""Input parsing: text, JSON and CSV/XLSX into typed model lists."""

import json
import math
from typing import Dict, List, Sequence

import pandas as pd

from models.errors import AvailabilityParseError, ConfigValidationError, UserParseError
from models.run_config import RunConfig
from models.user import Availability, Partition, User
from data.validator import validate_run_config
from config.defaults import DEFAULT_WEIGHT


# --- Line-oriented users: "ID" or "ID:dep1,dep2" ---

def parse_user_line(line: str, partition: Partition = "") -> User:
    """Parse one user definition; raises ValueError on an empty ID or dependency."""
    user_part, sep, deps_part = line.partition(":")
    user_id = user_part.strip()
    deps = []
    if sep:
        for dep in deps_part.split(","):
            dep = dep.strip()
            if dep == "":
                raise ValueError("user dependency entry cannot be the empty string")
            deps.append(dep)
    if user_id == "":
        raise ValueError("user id cannot be empty")
    return User(user_id=user_id, partition=partition, deps=deps)


def parse_user_lines(lines: Sequence[str], partition: Partition = "") -> List[User]:
    """Parse a batch of user lines; the first bad line rejects the whole batch."""
    users = []
    for line_number, line in enumerate(lines, start=1):
        try:
            users.append(parse_user_line(line, partition))
        except ValueError as e:
            raise UserParseError(line_number, str(e)) from e
    return users


def load_user_text(text: str, partition: Partition = "") -> List[User]:
    return parse_user_lines(text.splitlines(), partition)


# --- Availabilities: "partition:passes" ---

def parse_availability(value: str) -> Availability:
    partition, sep, passes = value.partition(":")
    if not sep:
        raise AvailabilityParseError(
            f"availability {value!r} must have a ':'. Format `partition:passes`, e.g. `leaders:33`"
        )
    try:
        available = int(passes)
    except ValueError:
        raise AvailabilityParseError(
            f"availability {value!r} must contain a valid number. Format `partition:passes`, e.g. `leaders:33`"
        ) from None
    return Availability(partition=partition, available=available)


def parse_availabilities(values: Sequence[str]) -> List[Availability]:
    """Parse availability strings; a later entry for the same partition wins."""
    by_partition: Dict[Partition, Availability] = {}
    for value in values:
        a = parse_availability(value)
        by_partition[a.partition] = a
    return list(by_partition.values())


# --- JSON run configuration ---

def _lookup(entry: dict, key: str, default=None):
    """Case-insensitive key lookup, matching how the config keys are documented."""
    for k, v in entry.items():
        if k.lower() == key.lower():
            return v
    return default


def _reject_duplicate_keys(pairs):
    obj = {}
    for key, value in pairs:
        if key in obj:
            raise ConfigValidationError(f"format error: {key} is listed multiple times")
        obj[key] = value
    return obj


def _parse_config_user(entry, partition: Partition) -> User:
    if not isinstance(entry, dict):
        raise ConfigValidationError(f"format error: user entry {entry!r} in partition {partition} is not an object")
    user_id = _lookup(entry, "ID")
    if not isinstance(user_id, str) or user_id == "":
        raise ConfigValidationError(f"value error: user in partition {partition} has no ID")
    deps = _lookup(entry, "Deps") or []
    if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
        raise ConfigValidationError(f"format error: Deps of user {user_id} must be a list of IDs")
    weight = _lookup(entry, "Weight", DEFAULT_WEIGHT)
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ConfigValidationError(f"format error: Weight of user {user_id} must be a number")
    if not math.isfinite(weight):
        raise ConfigValidationError(f"value error: Weight of user {user_id} must be a finite number")
    return User(user_id=user_id, partition=partition, deps=list(deps), weight=float(weight))


def parse_run_config(data: dict) -> RunConfig:
    """Build a RunConfig from a decoded JSON document, validating it first."""
    if not isinstance(data, dict):
        raise ConfigValidationError("format error: configuration must be a JSON object")
    passes_raw = _lookup(data, "Passes") or {}
    users_raw = _lookup(data, "Users") or {}
    if not isinstance(passes_raw, dict) or not isinstance(users_raw, dict):
        raise ConfigValidationError("format error: Passes and Users must be objects keyed by partition")

    result = validate_run_config(passes_raw, users_raw)
    if not result.is_valid:
        raise ConfigValidationError("; ".join(result.errors))

    passes = {}
    for partition, n in passes_raw.items():
        if isinstance(n, bool) or not isinstance(n, int):
            raise ConfigValidationError(f"format error: passes for partition {partition} must be an integer")
        passes[partition] = n

    users = {}
    for partition, entries in users_raw.items():
        if not isinstance(entries, list):
            raise ConfigValidationError(f"format error: users of partition {partition} must be a list")
        users[partition] = [_parse_config_user(e, partition) for e in entries]

    return RunConfig(passes=passes, users=users)


def load_run_config_json(text) -> RunConfig:
    """Decode and validate a JSON run configuration (str or bytes)."""
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"format error: invalid JSON: {e}") from e
    return parse_run_config(data)


# --- Tabular users (CSV / XLSX) ---

def _split_deps(value) -> List[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return []
    return [d.strip() for d in str(value).split(",") if d.strip()]


def parse_users(df: pd.DataFrame) -> List[User]:
    """Convert a users DataFrame into User objects."""
    users = []
    for _, row in df.iterrows():
        weight = DEFAULT_WEIGHT
        if "Weight" in df.columns and pd.notna(row.get("Weight")):
            weight = float(row["Weight"])
        deps: List[str] = []
        if "Dependencies" in df.columns:
            deps = _split_deps(row.get("Dependencies"))
        users.append(User(
            user_id=str(row["User ID"]).strip(),
            partition=str(row["Partition"]).strip(),
            deps=deps,
            weight=weight,
        ))
    return users


def users_to_df(users: List[User]) -> pd.DataFrame:
    return pd.DataFrame(
        [{
            "User ID": u.user_id,
            "Partition": u.partition,
            "Dependencies": ",".join(u.deps),
            "Weight": u.weight,
        } for u in users],
        columns=["User ID", "Partition", "Dependencies", "Weight"],
    )


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")
