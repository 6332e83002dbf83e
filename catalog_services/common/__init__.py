"""
Shared process-level helpers: logging setup, store access, and DDL bootstrap.
"""
