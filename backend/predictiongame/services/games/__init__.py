"""Game domain services: questions, scoring and game storage.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and CLI commands, keeping transport concerns separated
from core game mechanics.
"""

# Number of questions in a single round.
NUM_QUESTIONS = 12

# Share of answers a well-calibrated player should get right. Shown to the
# player; never enforced by scoring.
EXPECTED_CONFIDENCE = 0.5
