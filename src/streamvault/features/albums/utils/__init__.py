"""Album utilities module."""
