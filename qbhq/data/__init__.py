"""Data loading and in-memory state."""
