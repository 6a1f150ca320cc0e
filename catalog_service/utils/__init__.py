"""
Utility helpers shared across the Catalog Service: logging, exceptions,
store path handling and timestamps.
"""
