"""Transfer log polling."""

from evm_token_sweeper.services.transfer_polling.transfer_log_poller import TransferLogPoller

__all__ = ["TransferLogPoller"]
