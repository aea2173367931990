"""
Client state owners.
"""
