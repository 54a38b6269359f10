"""
security/ - Caller identity for the HTTP layer.
"""
