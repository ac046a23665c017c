# Services package init
"""
Aviary Backend: Services Layer
===============================

Business logic between routes (HTTP) and repositories (persistence).

Service Inventory:
    - BirdService: creation policy, not-found handling, listing
"""
