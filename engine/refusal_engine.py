"""Weighted random pass allocation by repeated refusal.

Every partition starts with all of its users as candidates. Candidates are
refused one at a time, drawn with probability proportional to their
internal (refusal) weight, until each partition is down to its number of
available passes. Refusing a user also refuses everyone who depends on
that user, in any partition, so a partition can reach its target purely
through refusals made elsewhere. The candidates left at the end get the
passes.
"""

import logging
import random
from typing import Dict, Iterable, List, Optional

from models.errors import RandomSourceError
from models.solution import Solution
from models.user import Availability, Partition, User, UserID
from engine.registry import UserRegistry
from engine.session import AllocationSession

logger = logging.getLogger(__name__)


class PassRunner:
    """Allocation component bound to one fixed set of users.

    The random source is shared by all runs of a runner, so repeated runs
    continue one random stream. A runner is not safe to use from several
    threads at once.
    """

    def __init__(self, users: Iterable[User], rng: Optional[random.Random] = None):
        if rng is None:
            rng = random.Random()
        if not callable(getattr(rng, "random", None)):
            raise RandomSourceError(
                f"random source {rng!r} has no random() method"
            )
        self._registry = UserRegistry(users)
        self._rng = rng

    @classmethod
    def from_seed(cls, users: Iterable[User], seed: int) -> "PassRunner":
        return cls(users, random.Random(seed))

    # --- Registry access ---

    def partitions(self) -> List[Partition]:
        return self._registry.partitions()

    def users(self, partition: Partition) -> List[UserID]:
        return self._registry.members(partition)

    def user(self, user_id: UserID) -> User:
        return self._registry.get(user_id)

    # --- Allocation ---

    def run(self, availabilities: Iterable[Availability]) -> Solution:
        """Allocate passes; partitions without an availability entry keep 0."""
        available: Dict[Partition, int] = {}
        for a in availabilities:
            available[a.partition] = a.available

        session = AllocationSession.start(self._registry)
        open_partitions = self._registry.partitions()

        made_progress = True
        while made_progress:
            made_progress = False
            still_open = []
            for partition in open_partitions:
                pool = session.pools[partition]
                # Refusals in other partitions may already have closed this one.
                if available.get(partition, 0) >= len(pool):
                    continue
                if self._refuse_one(session, partition):
                    made_progress = True
                    still_open.append(partition)
                else:
                    logger.warning(
                        "Refused all %d possible users for partition %s",
                        len(self._registry.members(partition)), partition,
                    )
            open_partitions = still_open

        return assemble_solution(session)

    def _refuse_one(self, session: AllocationSession, partition: Partition) -> bool:
        """Draw one candidate of `partition` by refusal weight and refuse it."""
        pool = session.pools[partition]
        threshold = self._rng.random() * pool.weight_sum

        user_id = pool.select(threshold)
        if user_id is None:
            return False
        return session.refuse(user_id) > 0


def assemble_solution(session: AllocationSession) -> Solution:
    """Collect the surviving candidates of every partition, sorted by ID."""
    passes = {p: pool.survivors() for p, pool in sorted(session.pools.items())}
    logger.debug(
        "Handed out %s",
        ", ".join(f"{p}={len(ids)}" for p, ids in passes.items()),
    )
    return Solution(passes=passes)
