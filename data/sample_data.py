"""Generate sample events for the Passdraw pass allocation tool."""

import json
import os
from typing import Dict, List, Optional

import pandas as pd

from models.run_config import RunConfig
from models.user import User
from data.loader import users_to_df
from config.defaults import (
    SAMPLE_PASSES, LEADER_PARTITION, FOLLOW_PARTITION,
    DANCE_EVENT_PASSES, DANCE_EVENT_COUPLE_PARTITION,
    DANCE_EVENT_FULL_COUPLES, DANCE_EVENT_PARTY_COUPLES, DANCE_EVENT_OVERBOOK_RATIO,
)


def generate_sample_users() -> List[User]:
    """Small Leader/Follow event: solo users, chained and cross-partition dependencies, couples."""
    L, F = LEADER_PARTITION, FOLLOW_PARTITION
    users = [User(f"L{i}", L) for i in range(1, 6)]
    users += [User(f"F{i}", F) for i in range(1, 6)]
    users += [
        User("La->F1", L, ["F1"]),
        User("Lb->F2", L, ["F2"]),
        User("Lc->F3", L, ["F3"]),
        User("Fa->L3", F, ["L3"]),
        User("Fb->L4", F, ["L4"]),
        User("Fc->L5", F, ["L5"]),
        User("Lx->L1", L, ["L1"]),
        User("Ly->L2", L, ["L2"]),
        User("Fx->F2", F, ["F2"]),
        User("Fy->F3", F, ["F3"]),
        User("Lp->Fx", L, ["Fx->F2"]),
        User("Lq->Fy,F3", L, ["Fy->F3", "F3"]),
        User("LC1", L, ["FC1"]),
        User("FC1", F, ["LC1"]),
        User("LC2", L, ["FC2"]),
        User("FC2", F, ["LC2"]),
    ]
    return users


def generate_sample_config(passes: int = SAMPLE_PASSES) -> RunConfig:
    """Split `passes` between leaders and followers, leaders getting the smaller half."""
    users: Dict[str, List[User]] = {}
    for u in generate_sample_users():
        users.setdefault(u.partition, []).append(u)
    return RunConfig(
        passes={LEADER_PARTITION: passes // 2, FOLLOW_PARTITION: passes - passes // 2},
        users=users,
    )


def generate_dance_event(
    passes: Optional[Dict[str, int]] = None,
    full_couples: int = DANCE_EVENT_FULL_COUPLES,
    party_couples: int = DANCE_EVENT_PARTY_COUPLES,
    overbook_ratio: float = DANCE_EVENT_OVERBOOK_RATIO,
) -> RunConfig:
    """Overbooked dance event; each couple member depends on the partner in the matching partition."""
    passes = dict(passes or DANCE_EVENT_PASSES)
    num_couples = {
        "leader_full": full_couples,
        "follow_full": full_couples,
        "leader_part": party_couples,
        "follow_part": party_couples,
    }

    users: Dict[str, List[User]] = {}
    for part, num_passes in passes.items():
        num_users = int(num_passes * overbook_ratio)
        couples = num_couples.get(part, 0)
        num_solo = num_users - 2 * couples

        part_users = [User(f"{part}-{n:03d}", part) for n in range(1, num_solo + 1)]
        partner_part = DANCE_EVENT_COUPLE_PARTITION.get(part)
        for n in range(1, couples + 1):
            part_users.append(User(
                f"{part}-couple-{n:02d}", part, [f"{partner_part}-couple-{n:02d}"],
            ))
        users[part] = part_users

    return RunConfig(passes=passes, users=users)


def generate_sample_users_df() -> pd.DataFrame:
    return users_to_df(generate_sample_users())


def generate_sample_files(output_dir: str):
    """Write the sample event as CSV and both events as JSON configurations."""
    os.makedirs(output_dir, exist_ok=True)
    generate_sample_users_df().to_csv(os.path.join(output_dir, "sample_users.csv"), index=False)
    with open(os.path.join(output_dir, "sample_event.json"), "w", encoding="utf-8") as f:
        json.dump(generate_sample_config().to_dict(), f, indent=1)
    with open(os.path.join(output_dir, "dance_event.json"), "w", encoding="utf-8") as f:
        json.dump(generate_dance_event().to_dict(), f, indent=1)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_files(out)
    print("Sample CSV and JSON files generated in sample_files/")
