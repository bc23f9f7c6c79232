"""Per-run working state: dependency index and per-partition candidate pools."""

from bisect import bisect_left
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Dict, Iterator, List, Optional, Set

from models.user import Partition, UserID
from engine.registry import UserRegistry


def build_dependents(registry: UserRegistry) -> Dict[UserID, List[UserID]]:
    """Reverse every dependency edge: dependency ID -> users that depend on it.

    Dangling dependency IDs get an entry like any other; nothing ever
    refuses them, so they have no effect.
    """
    dependents: Dict[UserID, List[UserID]] = {}
    for user_id, user in sorted(registry.users().items()):
        for dep in user.deps:
            dependents.setdefault(dep, []).append(user_id)
    return dependents


class CandidatePool:
    """Users of one partition that have not been refused yet.

    Members keep the registry's ascending ID order; a refused member stays
    in place with refusal weight 0 so cumulative sums keep that order.
    """

    def __init__(self, partition: Partition, registry: UserRegistry):
        self.partition = partition
        self._registry = registry
        self._order = tuple(registry.members(partition))
        self._position = {u: i for i, u in enumerate(self._order)}
        self._weights = [registry.internal_weight(u) for u in self._order]
        self._candidates: Set[UserID] = set(self._order)
        self.weight_sum = sum(self._weights)

    def __contains__(self, user_id: UserID) -> bool:
        return user_id in self._candidates

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[UserID]:
        """Walk candidates in ascending ID order."""
        return (u for u in self._order if u in self._candidates)

    def remove(self, user_id: UserID) -> None:
        """Drop a candidate without touching its dependents."""
        self._candidates.remove(user_id)
        self._weights[self._position[user_id]] = 0.0
        self.weight_sum -= self._registry.internal_weight(user_id)

    def select(self, threshold: float) -> Optional[UserID]:
        """First candidate, in ascending ID order, whose cumulative refusal weight reaches `threshold`."""
        if not self._candidates:
            return None
        cumulative = list(accumulate(self._weights))
        start = bisect_left(cumulative, threshold)
        for user_id in self._order[start:]:
            if user_id in self._candidates:
                return user_id
        # Float rounding can leave the threshold just above the final cumulative sum.
        for user_id in reversed(self._order):
            if user_id in self._candidates:
                return user_id
        return None

    def survivors(self) -> List[UserID]:
        return [u for u in self._order if u in self._candidates]


@dataclass
class AllocationSession:
    registry: UserRegistry
    dependents: Dict[UserID, List[UserID]] = field(default_factory=dict)
    pools: Dict[Partition, CandidatePool] = field(default_factory=dict)

    @classmethod
    def start(cls, registry: UserRegistry) -> "AllocationSession":
        """Build a fresh session with every user still a candidate."""
        return cls(
            registry=registry,
            dependents=build_dependents(registry),
            pools={p: CandidatePool(p, registry) for p in registry.partitions()},
        )

    def is_refused(self, user_id: UserID) -> bool:
        if user_id not in self.registry:
            return True
        pool = self.pools[self.registry.get(user_id).partition]
        return user_id not in pool

    def refuse(self, user_id: UserID) -> int:
        """Refuse a user and everyone depending on it, directly or transitively.

        Returns the number of newly refused users; 0 if `user_id` was
        already refused or is unknown.
        """
        if self.is_refused(user_id):
            return 0

        refused = 0
        stack = [user_id]
        while stack:
            current = stack.pop()
            if self.is_refused(current):
                continue
            self.pools[self.registry.get(current).partition].remove(current)
            refused += 1
            for dependent in self.dependents.get(current, []):
                if not self.is_refused(dependent):
                    stack.append(dependent)
        return refused
