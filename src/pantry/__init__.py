"""Pantry - minimal headless CMS backend.

Collections, schema-less items, media uploads and webhook notifications
behind a small JSON API.
"""

__version__ = "0.1.0"
