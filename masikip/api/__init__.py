"""
Backend API access.

The client is a thin transport: it knows the base URL, timeout and the
frontend header, and nothing about notes. Note semantics live in
masikip.services.
"""
