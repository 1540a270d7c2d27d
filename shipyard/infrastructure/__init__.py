"""Infrastructure Layer — storage, file encoding and cross-cutting concerns.

Invariants:
    - Infrastructure holds no marketplace rules; it moves bytes and documents
    - All driver errors mapped to core/errors.py types at this boundary
"""
