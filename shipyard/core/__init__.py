"""Core Layer — pure marketplace logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Time and randomness enter through arguments (`now`) or ids, never through IO

Design Decisions:
    - Functional core separated from imperative shell: routes load AppState, call
      core functions, and save the result
"""
