"""Kinship API: family records service with token authentication."""
