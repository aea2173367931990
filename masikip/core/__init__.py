"""
Core infrastructure: configuration, logging, exceptions, and shared utilities.
"""
