"""Infrastructure Layer - database, hosted auth provider, summarizer, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - External failures are mapped to core/errors.py types before leaving this layer
"""
