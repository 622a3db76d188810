"""
Grounded search backend.

Streams Gemini answers grounded by Google Search and assembles them into
footnote-annotated documents with a deduplicated source list.
"""

__version__ = "0.1.0"
