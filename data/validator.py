"""Schema validation for run configurations and uploaded user files."""

from dataclasses import dataclass, field
from typing import List, Mapping

import pandas as pd


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


USER_REQUIRED_COLUMNS = [
    "User ID",
    "Partition",
]


def validate_run_config(passes: Mapping, users: Mapping) -> ValidationResult:
    """Every partition with users needs a pass count, and vice versa."""
    result = ValidationResult()

    for partition in sorted(passes):
        if partition not in users:
            result.is_valid = False
            result.errors.append(f"value error: found partition {partition} with passes but no users")

    for partition in sorted(users):
        if partition not in passes:
            result.is_valid = False
            result.errors.append(f"value error: found partition {partition} with users but no passes")

    return result


def validate_users(df: pd.DataFrame) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in USER_REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"Users: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append("Users: File contains no data rows.")
    if not result.is_valid:
        return result

    ids = df["User ID"].astype(str).str.strip()
    if (df["User ID"].isna() | (ids == "")).any():
        result.is_valid = False
        result.errors.append("Users: User ID cannot be empty.")

    if (df["Partition"].isna() | (df["Partition"].astype(str).str.strip() == "")).any():
        result.is_valid = False
        result.errors.append("Users: Partition cannot be empty.")

    if "Weight" in df.columns:
        weights = pd.to_numeric(df["Weight"], errors="coerce")
        if (weights.isna() & df["Weight"].notna()).any():
            result.is_valid = False
            result.errors.append("Users: Weight must be numeric.")
        elif weights.isin([float("inf"), float("-inf")]).any():
            result.is_valid = False
            result.errors.append("Users: Weight must be a finite number.")
        elif (weights <= 0).any():
            bad = ids[weights <= 0].tolist()
            result.warnings.append(
                f"Users with non-positive weight (treated as weight 1): {', '.join(bad)}"
            )

    dupes = ids[ids.duplicated(keep=False)]
    if not dupes.empty:
        result.warnings.append(
            f"Duplicate user IDs (last row wins): {', '.join(sorted(dupes.unique()))}"
        )

    if "Dependencies" in df.columns:
        known = set(ids)
        dangling = set()
        for value in df["Dependencies"].dropna():
            for dep in str(value).split(","):
                dep = dep.strip()
                if dep and dep not in known:
                    dangling.add(dep)
        if dangling:
            result.warnings.append(
                f"Dependencies on unknown users (ignored): {', '.join(sorted(dangling))}"
            )

    return result


def validate_partition_coverage(df: pd.DataFrame, passes: Mapping) -> ValidationResult:
    """Cross-check uploaded users against the pass counts entered for each partition."""
    result = ValidationResult()
    partitions = set(df["Partition"].astype(str).str.strip())

    missing_passes = partitions - set(passes)
    unknown = set(passes) - partitions

    if missing_passes:
        result.warnings.append(
            f"Partitions without a pass count: {', '.join(sorted(missing_passes))}. "
            "They will get 0 passes."
        )
    if unknown:
        result.warnings.append(
            f"Pass counts for partitions without users: {', '.join(sorted(unknown))}. "
            "These will be ignored."
        )
    return result
