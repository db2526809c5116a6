"""Shared constants."""

# Storage slot holding the serialized habit list
DEFAULT_STORAGE_KEY = "habitTrackerHabits"
