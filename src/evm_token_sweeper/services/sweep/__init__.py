"""Sweep execution."""

from evm_token_sweeper.services.sweep.sweep_executor import SweepExecutor

__all__ = ["SweepExecutor"]
