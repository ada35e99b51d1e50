# Services package init
"""
Bookshelf API - Services Layer
==============================

What:  Domain rules sitting between the routes (HTTP) and the record store.

Service Inventory:
    - BookService: create / find_all / find_one / update / remove,
      each returning a tagged result (Ok, NotFound, Duplicate, Unexpected)
"""
