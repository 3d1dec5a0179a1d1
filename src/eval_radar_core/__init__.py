"""
eval-radar-core

Validates LLM evaluation batches, manages them as named datasets, and
aggregates per-model metrics into a normalized radar comparison.
"""

__version__ = "0.1.0"
