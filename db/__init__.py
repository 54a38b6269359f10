"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, schema initialization and one-off
data fixups.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
