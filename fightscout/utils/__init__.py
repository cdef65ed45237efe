"""
Shared helpers: id factories and Markdown cleanup.
"""
