"""
utils/ - Logging, error taxonomy and slug helpers shared by every layer.
"""
