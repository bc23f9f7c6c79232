from dataclasses import dataclass, field
from typing import Dict, List

from models.user import Availability, Partition, User


@dataclass
class RunConfig:
    """Validated run configuration: pass counts and users, both keyed by partition."""
    passes: Dict[Partition, int] = field(default_factory=dict)
    users: Dict[Partition, List[User]] = field(default_factory=dict)

    def all_users(self) -> List[User]:
        result = []
        for partition in sorted(self.users):
            for u in self.users[partition]:
                result.append(User(u.user_id, partition, list(u.deps), u.weight))
        return result

    def availabilities(self) -> List[Availability]:
        return [Availability(p, n) for p, n in sorted(self.passes.items())]

    def to_dict(self) -> dict:
        """Serialize to the JSON document shape accepted by the loader."""
        users = {}
        for partition, part_users in self.users.items():
            entries = []
            for u in part_users:
                entry = {"ID": u.user_id}
                if u.deps:
                    entry["Deps"] = list(u.deps)
                if u.weight != 1.0:
                    entry["Weight"] = u.weight
                entries.append(entry)
            users[partition] = entries
        return {"Passes": dict(self.passes), "Users": users}
