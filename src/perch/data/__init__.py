"""Data sources for record resolution.

Usage::

    from perch.data import Collection

    posts = Collection([{"id": "1", "title": "Hello"}])
"""

from perch.data.collection import Collection, DataSource, record_value

__all__ = ["Collection", "DataSource", "record_value"]
