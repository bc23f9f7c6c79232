from dataclasses import dataclass, field
from typing import List

UserID = str
Partition = str


@dataclass
class User:
    user_id: UserID
    partition: Partition = ""
    deps: List[UserID] = field(default_factory=list)  # refusing any of these refuses this user
    weight: float = 1.0  # 2.0 = twice as likely to get a pass; <= 0 is treated as neutral


@dataclass
class Availability:
    partition: Partition
    available: int  # passes the partition should retain
