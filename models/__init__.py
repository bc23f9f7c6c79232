from models.user import User, Availability, UserID, Partition
from models.solution import Solution
from models.run_config import RunConfig
from models.errors import (
    PassdrawError, RandomSourceError, UserParseError,
    AvailabilityParseError, ConfigValidationError,
)
