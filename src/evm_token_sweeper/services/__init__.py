# -*- coding: utf-8 -*-
"""Application services."""

from evm_token_sweeper.services.monitor import MonitorSession, MonitorStatus, NetworkMonitor
from evm_token_sweeper.services.notifications import SweepEventNotifier
from evm_token_sweeper.services.sweep import SweepExecutor
from evm_token_sweeper.services.token_details import TokenDetailsResolver
from evm_token_sweeper.services.transfer_handling import IncomingTransferHandler
from evm_token_sweeper.services.transfer_polling import TransferLogPoller

__all__ = [
    "IncomingTransferHandler",
    "MonitorSession",
    "MonitorStatus",
    "NetworkMonitor",
    "SweepEventNotifier",
    "SweepExecutor",
    "TokenDetailsResolver",
    "TransferLogPoller",
]
