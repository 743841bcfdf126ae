"""
NoteKeeper Backend — Application Package
==========================================

A small REST service storing titled text/HTML notes.

    ┌─────────────────────────────────────┐
    │   Routes (notekeeper.routes)        │  ← HTTP in, outcome → response
    ├─────────────────────────────────────┤
    │   NoteService (operation handlers)  │  ← validate, call storage, map errors
    ├─────────────────────────────────────┤
    │   Validation · Error mapper         │  ← pure rules / error taxonomy
    ├─────────────────────────────────────┤
    │   StorageClient (one per process)   │  ← async SQLAlchemy engine + pool
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
