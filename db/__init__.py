"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool, builds parameterized SQL and runs it.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
