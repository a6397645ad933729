"""Dependency injection."""

from surebet_aggregator.DI.container import Container

__all__ = ["Container"]
