# Repositories package init
"""
Aviary Backend: Repositories Layer
===================================

What:  Persistence gateways, one per resource, built around an AsyncSession.
Why:   Services ask for entities by intent (create, find_by_id, list_all)
       instead of composing SQL; tests swap the session for a mock.

Repository Inventory:
    - BirdRepository: create / find_by_id / list_all over the birds table
"""
