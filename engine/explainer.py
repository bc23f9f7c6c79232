"""Generates human-readable reports for allocation runs."""

from typing import Dict, List

import pandas as pd

from models.solution import Solution
from models.user import Availability, Partition
from engine.refusal_engine import PassRunner


def explain_solution(
    runner: PassRunner,
    solution: Solution,
    availabilities: List[Availability],
) -> List[str]:
    """Produce a per-partition report of winners and refused users."""
    requested: Dict[Partition, int] = {a.partition: a.available for a in availabilities}
    lines = ["Executed run for the following availabilities:"]

    for partition in sorted(solution.passes):
        winners = solution.passes[partition]
        winner_set = set(winners)
        refused = [u for u in runner.users(partition) if u not in winner_set]

        lines.append(
            f"{partition} - Handed out {len(winners)} out of "
            f"{requested.get(partition, 0)} passes for partition:"
        )
        for user_id in winners:
            lines.append(f" O {user_id}")

        lines.append(f"{partition} - The following {len(refused)} users did not get a pass:")
        for user_id in refused:
            lines.append(f" x {user_id}")

    return lines


def summarize_solution(
    runner: PassRunner,
    solution: Solution,
    availabilities: List[Availability],
) -> pd.DataFrame:
    """One row per partition: requested vs handed out."""
    requested = {a.partition: a.available for a in availabilities}
    rows = []
    for partition in sorted(solution.passes):
        total = len(runner.users(partition))
        handed_out = solution.count(partition)
        rows.append({
            "Partition": partition,
            "Requested": requested.get(partition, 0),
            "Handed Out": handed_out,
            "Refused": total - handed_out,
            "Users": total,
        })
    return pd.DataFrame(rows, columns=["Partition", "Requested", "Handed Out", "Refused", "Users"])
