"""Immutable catalogue of users, indexed by ID and partition."""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from models.user import Partition, User, UserID
from config.defaults import NEUTRAL_INTERNAL_WEIGHT

logger = logging.getLogger(__name__)


def internal_weight(external_weight: float) -> float:
    """Convert a "times as likely to win" weight into a refusal weight.

    Users are drawn for refusal, so a user twice as likely to get a pass
    must be half as likely to be refused: internal weight = 1 / weight.
    Weights <= 0 are treated as neutral.
    """
    if external_weight <= 0:
        return NEUTRAL_INTERNAL_WEIGHT
    return 1.0 / external_weight


class UserRegistry:
    """Read-only view over the users of one allocation component."""

    def __init__(self, users: Iterable[User]):
        by_id: Dict[UserID, User] = {}
        weights: Dict[UserID, float] = {}
        for u in users:
            if u.user_id in by_id:
                logger.debug("Duplicate user %s; keeping the last definition", u.user_id)
            if u.weight < 0:
                logger.warning(
                    "User %s has negative weight %s; treating it as neutral weight 1",
                    u.user_id, u.weight,
                )
            by_id[u.user_id] = User(u.user_id, u.partition, list(u.deps), u.weight)
            weights[u.user_id] = internal_weight(u.weight)

        members: Dict[Partition, List[UserID]] = {}
        for user_id in sorted(by_id):
            members.setdefault(by_id[user_id].partition, []).append(user_id)

        self._by_id = MappingProxyType(by_id)
        self._weights = MappingProxyType(weights)
        self._members = MappingProxyType({p: tuple(ids) for p, ids in members.items()})

    def __contains__(self, user_id: UserID) -> bool:
        return user_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, user_id: UserID) -> User:
        return self._by_id[user_id]

    def internal_weight(self, user_id: UserID) -> float:
        return self._weights[user_id]

    def users(self) -> Mapping[UserID, User]:
        return self._by_id

    def partitions(self) -> List[Partition]:
        return sorted(self._members)

    def members(self, partition: Partition) -> List[UserID]:
        """User IDs of a partition in ascending order; empty for unknown partitions."""
        return list(self._members.get(partition, ()))
