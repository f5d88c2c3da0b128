"""Infrastructure Layer: database, tokens, password hashing, cache, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All driver exceptions mapped to the core error hierarchy

Design Decisions:
    - One module per external concern, each with a process-wide instance
      created in the FastAPI lifespan
"""
