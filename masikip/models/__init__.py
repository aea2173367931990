"""
Client-side models.
"""
