# Routes package init
"""
Product Catalog Backend: API Routes Package
==============================================

Route Inventory:
    - products.py:  GET/POST      /products
                    GET/PUT/DELETE /products/{id}
    - health.py:    GET /         (greeting)
                    GET /health   (service health check)

Uploaded images are served by a StaticFiles mount at the upload URL prefix
(see main.py), not by a route module.

Routes stay thin: they parse the request, call the record store or the
asset service, and pick the status code.
"""
