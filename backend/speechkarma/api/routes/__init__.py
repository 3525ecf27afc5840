"""Route Modules - one router per resource, each with its own prefix and tags.

Invariants:
    - Routes parse, authenticate and shape responses; services own the queries
"""
