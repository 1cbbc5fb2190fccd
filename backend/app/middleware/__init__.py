# Middleware package init
"""
Product Catalog Backend: Middleware Package
===========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID used by logs and error bodies
    2. Logging: one access line per request, tagged with that ID

    Responses pass back through the chain in reverse, so the X-Request-ID
    header is set and the access line sees the final status code.
"""
