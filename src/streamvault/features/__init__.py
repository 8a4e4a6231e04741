"""Feature modules for streamvault."""
