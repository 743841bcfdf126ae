"""
NoteKeeper Backend — API Routes Package

    - notes.py:   /notes and /notes/{id} (list, get, create, update, delete)
    - health.py:  GET /health

Routes stay thin: read the request, call one NoteService operation, render
the outcome.
"""
