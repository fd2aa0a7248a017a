"""Services Layer: one module per gateway capability.

Invariants:
    - Each operation issues exactly one outbound call through UpstreamClient
    - Failures are mapped by core.response_policy and raised as GatewayError
    - Settings and clients are passed in explicitly, never imported as globals
"""
