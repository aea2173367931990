"""
Wire schemas for the notes backend.
"""
