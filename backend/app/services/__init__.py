# Services package init
"""
Product Catalog Backend: Services Layer
==========================================

What:  The layer between routes (HTTP) and the database / file system.

Service Inventory:
    - ProductStore (abstract): Record store contract used by the routes
    - SqlProductStore: ProductStore over an async SQLAlchemy session
    - AssetService: Stores uploaded images and resolves image URLs
"""
