"""Services Layer - per-resource query and mutation orchestration.

Invariants:
    - Services receive a request-scoped AsyncSession and never commit across requests
    - Failures are raised as SpeechKarmaError subclasses, never returned as values
"""
