"""User utilities module."""
