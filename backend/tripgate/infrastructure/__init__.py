"""Infrastructure Layer: outbound HTTP, connection lifecycle, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All outbound calls carry a timeout and return an UpstreamResult
"""
