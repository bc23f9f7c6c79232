from dataclasses import dataclass, field
from typing import Dict, List, Set

from models.user import Partition, UserID


@dataclass
class Solution:
    passes: Dict[Partition, List[UserID]] = field(default_factory=dict)  # sorted winners per partition

    def count(self, partition: Partition) -> int:
        return len(self.passes.get(partition, []))

    @property
    def winners(self) -> Set[UserID]:
        return {u for ids in self.passes.values() for u in ids}
