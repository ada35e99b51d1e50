# Middleware package init
"""
Bookshelf API - Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

    Request ID runs first so every access log line carries the correlation id.
"""
