"""
services/ - Business Logic Layer
=================================
Validation, defaults and workflow rules. Services receive repositories in
their constructor and raise ``utils.errors`` exceptions; they know nothing
about HTTP.
"""
