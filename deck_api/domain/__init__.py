"""Domain layer (pure logic).

- Keep card, deck and shuffle rules here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no locks.
- Prefer deterministic functions (random sources passed in as arguments).
"""
