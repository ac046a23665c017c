# Middleware package init
"""
Aviary Backend: Middleware Package
===================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set first so the access log line carries it; the
    logging middleware sees the final status code on the way back out.
"""
