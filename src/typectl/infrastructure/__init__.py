"""Infrastructure layer — database, scopes, cache, repositories.

This layer depends on stdlib, SQLAlchemy, and the domain models it
persists. It must never import from services, commands, or output.
The service layer bridges between callers and repositories.
"""
