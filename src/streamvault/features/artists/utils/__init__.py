"""Artist utilities module."""
