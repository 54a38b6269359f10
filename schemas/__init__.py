"""
schemas/ - Request Bodies
==========================
Pydantic models for incoming JSON. Field names are snake_case with the
API's camelCase names as aliases.
"""
