"""Per-network monitoring."""

from evm_token_sweeper.services.monitor.network_monitor import (
    MonitorSession,
    MonitorStatus,
    NetworkMonitor,
)

__all__ = ["MonitorSession", "MonitorStatus", "NetworkMonitor"]
