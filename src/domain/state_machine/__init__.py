"""Notification stream state machine.

Signals in, (state, effects) out. See ``transitions.transition``.
"""

from src.domain.state_machine.effects import (
    AbortStream,
    CancelReconnect,
    DispatchFrame,
    EmitConnected,
    EmitDisconnected,
    ForceLogout,
    OpenStream,
    ScheduleReconnect,
    StartHeartbeat,
    StartRefresh,
    StopHeartbeat,
    StreamEffect,
    TouchHeartbeat,
)
from src.domain.state_machine.signals import (
    Activated,
    AuthorizationRejected,
    FrameReceived,
    HeartbeatTimedOut,
    OpenRequested,
    Opened,
    ReconnectDue,
    RefreshFailed,
    RefreshSucceeded,
    StreamClosed,
    StreamSignal,
    TeardownRequested,
    TransportFailed,
    VisibilityRestored,
)
from src.domain.state_machine.transitions import ReconnectPolicy, transition

__all__ = [
    # Signals
    "StreamSignal",
    "Activated",
    "OpenRequested",
    "Opened",
    "FrameReceived",
    "AuthorizationRejected",
    "RefreshSucceeded",
    "RefreshFailed",
    "TransportFailed",
    "StreamClosed",
    "ReconnectDue",
    "HeartbeatTimedOut",
    "VisibilityRestored",
    "TeardownRequested",
    # Effects
    "StreamEffect",
    "OpenStream",
    "AbortStream",
    "ScheduleReconnect",
    "CancelReconnect",
    "StartRefresh",
    "StartHeartbeat",
    "StopHeartbeat",
    "TouchHeartbeat",
    "DispatchFrame",
    "EmitConnected",
    "EmitDisconnected",
    "ForceLogout",
    # Transition
    "ReconnectPolicy",
    "transition",
]
