"""Logging setup (structlog + Logfire)."""
