"""Core building blocks shared by every streamvault feature."""
