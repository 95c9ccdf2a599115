"""Application services of the notification stream client.

Components (leaf to root):
    TokenRefreshCoordinator → HeartbeatMonitor → EventDispatcher
    → ConnectionManager → LifecycleSupervisor
"""

from src.application.services.connection_manager import ConnectionManager
from src.application.services.event_dispatcher import EventDispatcher
from src.application.services.heartbeat_monitor import HeartbeatMonitor
from src.application.services.lifecycle_supervisor import LifecycleSupervisor
from src.application.services.token_refresh_coordinator import TokenRefreshCoordinator

__all__ = [
    "ConnectionManager",
    "EventDispatcher",
    "HeartbeatMonitor",
    "LifecycleSupervisor",
    "TokenRefreshCoordinator",
]
