"""Centralized constants for keikaku.

Scheduling policy thresholds and defaults live here so the domain, the
scheduler adapter and the CLI all read from a single source of truth.
"""

# ---------- Memory parameters ----------
DIFFICULTY_MIN = 1.0
DIFFICULTY_MAX = 10.0

# ---------- Daily history classification ----------
# A reviewed card whose stability reaches this many days counts as "known".
KNOWN_STABILITY_DAYS = 21.0
# Reviewed cards at or above this difficulty count as "high difficulty".
HIGH_DIFFICULTY_THRESHOLD = 7.0

# ---------- FSRS defaults ----------
DEFAULT_DESIRED_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500  # days

# ---------- Lesson selection ----------
DEFAULT_NEW_CARDS_PER_LESSON = 10
DEFAULT_FIXATION_CARDS_LIMIT = 50

# ---------- LLM requests ----------
LLM_REQUEST_TIMEOUT = 30.0  # seconds
