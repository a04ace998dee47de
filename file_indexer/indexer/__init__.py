"""
Indexer module for orchestrating the indexing pipeline.

Coordinates the tree walk, text extraction, tokenization and the batched
database write.
"""

from .tokenizer import Tokenizer, is_valid_word, NOISE_WORDS
from .file_walker import FileWalker, WalkStats
from .index_builder import IndexBuilder, IndexingStats

__all__ = [
    "Tokenizer",
    "is_valid_word",
    "NOISE_WORDS",
    "FileWalker",
    "WalkStats",
    "IndexBuilder",
    "IndexingStats"
]
