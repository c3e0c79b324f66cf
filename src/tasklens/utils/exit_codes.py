"""
Exit codes for tasklens.

Semantic exit codes so scripts wrapping the CLI can tell a bad argument
from a missing snapshot.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, unreadable snapshot, or validation error
ERROR_INVALID_ARGS = 2

# Snapshot file or referenced task not found
ERROR_NOT_FOUND = 5
