"""Core domain logic: status trackers, query cache, session and navigation."""
