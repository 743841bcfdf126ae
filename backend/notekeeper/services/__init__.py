# Services package init
"""
NoteKeeper Backend — Services Layer

    - NoteService:        the five note operations, returning outcomes
    - map_storage_error:  storage failure → API error
"""
