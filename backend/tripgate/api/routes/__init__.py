"""Route Modules: one file per capability.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic (delegate to services/)
"""
