"""
Noteful Backend — API Routes Package
=====================================

Route Inventory:
    - folders.py: GET/POST /api/folders, GET/DELETE/PATCH /api/folders/{id}
    - notes.py:   GET/POST /api/notes,   GET/DELETE/PATCH /api/notes/{id}
    - health.py:  GET /health

Routes stay thin: they check the body for required fields, call the table
repository, and wrap rows in sanitizing response schemas. Looking up the
row for `{id}` routes happens in noteful.dependencies before the handler runs.
"""
