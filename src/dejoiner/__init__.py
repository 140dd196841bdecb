"""Dejoiner: design-resource index with deep search.

Indexes design files, repositories and documents shared by a team and
ranks them against free-text queries.
"""

__version__ = "0.3.0"
