# Routes package init
"""
Aviary Backend: API Routes Package
===================================

Route Inventory:
    - birds.py:   POST /birds            (create a bird)
                  GET  /birds            (list birds)
                  GET  /birds/{id}       (get single bird)
    - health.py:  GET  /health           (service health check)

Routes are thin: they extract data from the request, call the service and
pick the status code. Business rules live in services.
"""
