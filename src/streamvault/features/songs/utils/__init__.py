"""Song utilities module."""
