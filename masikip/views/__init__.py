"""
View-models for the sidebar and the editor.

Pure functions of the note collection plus each view's own ephemeral state,
so the rendering toolkit only has to draw what these return.
"""
