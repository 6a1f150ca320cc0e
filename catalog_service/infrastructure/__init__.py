"""
Infrastructure package for the Catalog Service.

This package contains the document store backends and the repositories
that persist service records and catalog items through them.
"""
