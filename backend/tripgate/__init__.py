"""tripgate: HTTP gateway for places search, LLM chat and Open Graph scraping.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
