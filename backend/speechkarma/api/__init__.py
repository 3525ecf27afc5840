"""API Layer - FastAPI routers, dependencies, presenters and error handlers.

Invariants:
    - Routers registered explicitly in main.py
    - Success bodies are {"data": ...}; failures are the SpeechKarmaError envelope
"""
