"""Token details lookup."""

from evm_token_sweeper.services.token_details.token_details_resolver import TokenDetailsResolver

__all__ = ["TokenDetailsResolver"]
