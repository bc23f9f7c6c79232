"""Default configuration constants for the Passdraw pass allocation tool."""

import logging

# Weights
DEFAULT_WEIGHT = 1.0          # External weight of a user with no preference
NEUTRAL_INTERNAL_WEIGHT = 1.0  # Internal (refusal) weight used for weights <= 0

# Simulation
DEFAULT_SIMULATION_RUNS = 10000
MAX_SIMULATION_RUNS = 1000000
PROBABILITY_TOLERANCE = 0.02  # Acceptable gap between empirical and expected win rate

# Sample event (Leader / Follow with couples)
SAMPLE_PASSES = 10
LEADER_PARTITION = "Leader"
FOLLOW_PARTITION = "Follow"

# Generated dance event
DANCE_EVENT_PASSES = {
    "leader_full": 150,
    "leader_part": 85,
    "follow_full": 170,
    "follow_part": 85,
}
DANCE_EVENT_COUPLE_PARTITION = {
    "leader_full": "follow_full",
    "follow_full": "leader_full",
    "leader_part": "follow_part",
    "follow_part": "leader_part",
}
DANCE_EVENT_FULL_COUPLES = 30
DANCE_EVENT_PARTY_COUPLES = 10
DANCE_EVENT_OVERBOOK_RATIO = 1.5

# Logging
LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
