"""
Terminal interface for Masikip Notes (Textual).
"""
