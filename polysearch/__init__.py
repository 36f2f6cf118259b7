"""
polysearch package.

Indexes records of heterogeneous types into one shared SQLite FTS5 table
(or a MySQL FULLTEXT-indexed table) and queries it by relevance, mapping
hits back to typed records.
"""

__version__ = "1.0.0"
