"""Persistence helpers for the client key-value store."""
