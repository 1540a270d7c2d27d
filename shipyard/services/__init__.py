"""Services Layer — async orchestration around the pure core.

Invariants:
    - Services own the await points (DB, uploads); core functions stay synchronous
    - No marketplace rule is decided here, only sequenced
"""
