"""
Catalog Service: resolves service keys to stored service records and manages
the catalog items nested under them.
"""

__version__ = "0.1.0"
