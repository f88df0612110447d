"""Business logic: authorization policy and user directory operations."""
