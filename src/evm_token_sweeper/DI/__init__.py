"""Dependency injection container."""

from evm_token_sweeper.DI.container import Container

__all__ = ["Container"]
