"""Monte-Carlo statistics over repeated runs of one runner."""

import logging
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from models.user import Availability, Partition, UserID
from engine.refusal_engine import PassRunner

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    runs: int
    user_stats: pd.DataFrame       # Partition, User ID, Passes, Probability
    partition_stats: pd.DataFrame  # Partition, Users, Requested, Mean Handed Out, Min, Max

    def probability(self, user_id: UserID) -> float:
        row = self.user_stats[self.user_stats["User ID"] == user_id]
        if row.empty:
            raise KeyError(user_id)
        return float(row["Probability"].iloc[0])


def simulate(
    runner: PassRunner,
    availabilities: List[Availability],
    runs: int,
) -> SimulationResult:
    """Run the allocation `runs` times and count how often each user wins.

    All runs share the runner's random stream, so the counts are an unbiased
    sample of the allocation distribution.
    """
    if runs <= 0:
        raise ValueError(f"runs must be positive, got {runs}")

    requested = {a.partition: a.available for a in availabilities}
    pass_counts: Dict[UserID, int] = {}
    handed_out: Dict[Partition, List[int]] = {p: [] for p in runner.partitions()}

    for _ in range(runs):
        solution = runner.run(availabilities)
        for partition, winners in solution.passes.items():
            handed_out[partition].append(len(winners))
            for user_id in winners:
                pass_counts[user_id] = pass_counts.get(user_id, 0) + 1

    user_rows = []
    partition_rows = []
    for partition in runner.partitions():
        members = runner.users(partition)
        for user_id in members:
            n = pass_counts.get(user_id, 0)
            user_rows.append({
                "Partition": partition,
                "User ID": user_id,
                "Passes": n,
                "Probability": n / runs,
            })
        counts = handed_out[partition]
        partition_rows.append({
            "Partition": partition,
            "Users": len(members),
            "Requested": requested.get(partition, 0),
            "Mean Handed Out": sum(counts) / runs,
            "Min Handed Out": min(counts),
            "Max Handed Out": max(counts),
        })

    logger.info("Simulated %d runs over %d partitions", runs, len(partition_rows))
    return SimulationResult(
        runs=runs,
        user_stats=pd.DataFrame(user_rows, columns=["Partition", "User ID", "Passes", "Probability"]),
        partition_stats=pd.DataFrame(partition_rows, columns=[
            "Partition", "Users", "Requested", "Mean Handed Out", "Min Handed Out", "Max Handed Out",
        ]),
    )
