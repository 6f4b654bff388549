"""Business logic: account flows, sessions, and family records."""
