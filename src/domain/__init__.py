"""Domain layer - Pure stream semantics.

This layer contains the value objects, the connection entity, the pure
state machine, protocols (ports) and domain events. It has NO
dependencies on HTTP, logging backends or the event loop.

Structure:
    - enums/: ConnectionStatus, NotificationType
    - errors/: StreamError family, TokenRefreshError
    - value_objects/: CredentialPair, StreamFrame, NotificationEnvelope
    - entities/: StreamConnection (state + guard flags)
    - state_machine/: signals, effects, transition()
    - events/: NotificationReceived, StreamConnected, ...
    - protocols/: ports implemented by infrastructure
"""
