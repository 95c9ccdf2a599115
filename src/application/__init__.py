"""Application layer - Stream orchestration.

This layer drives the domain state machine with real time and I/O:
- services/: the five stream components (refresh coordinator, heartbeat
  monitor, event dispatcher, connection manager, lifecycle supervisor)

Components depend only on domain protocols; adapters are injected by the
composition root in ``src.core.container``.
"""
