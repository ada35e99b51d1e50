# Routes package init
"""
Bookshelf API - API Routes Package
==================================

Route Inventory:
    - books.py:   POST   /books            (create)
                  GET    /books            (list)
                  GET    /books/{id}       (fetch one)
                  PUT    /books/{id}       (partial update)
                  DELETE /books/{id}       (delete)
    - health.py:  GET    /                 (liveness message)
                  GET    /health           (database health check)

Routes stay thin: parse the request, call the service, pick the status code.
"""
