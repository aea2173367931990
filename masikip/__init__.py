"""
Masikip Notes client.

- api/: HTTP client for the notes backend (httpx)
- core/: Configuration, logging, exceptions, utilities
- models/: UI note model
- schemas/: Backend wire schemas (pydantic)
- services/: Backend note transforms and REST wrappers
- state/: Note collection state owner
- views/: Sidebar and editor view-models
- tui/: Terminal interface (Textual)
"""

__version__ = "0.1.0"
