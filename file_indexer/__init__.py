"""
File Indexer Package.

Crawls directory trees, extracts text from heterogeneous file formats,
builds per-file word-frequency profiles and stores them in SQLite for
name-, path- and content-based lookup.
"""

__version__ = "1.0.0"
