"""
Integration tests running full loggers against a temporary directory.
"""
