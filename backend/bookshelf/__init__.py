"""
Bookshelf API - Application Package
===================================

What: A small CRUD service for book records (create, list, fetch, update, delete).
How:  FastAPI on top of async SQLAlchemy, split into thin layers:

    ┌─────────────────────────────────────┐
    │        Routes (Controller)          │  ← validation, envelope, status codes
    ├─────────────────────────────────────┤
    │        Services (Domain rules)      │  ← duplicate title, must-exist, merge
    ├─────────────────────────────────────┤
    │      Repositories (Record store)    │  ← CRUD against the books table
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← engine, sessions, ORM base
    └─────────────────────────────────────┘

    Data only ever flows routes → services → repositories and back.
"""

__version__ = "1.0.0"
