"""
Note transforms and backend wrappers.
"""
