"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes load AppState, call core functions, save; nothing else
    - Every error leaves through error_handlers.py as structured JSON
"""
