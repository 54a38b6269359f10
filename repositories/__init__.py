"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories borrow connections from the injected pool, receive raw rows
from the database and return domain model objects via ``row_mapper``.
"""
