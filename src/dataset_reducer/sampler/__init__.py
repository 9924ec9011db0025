"""
Sampler

Reduces large datasets to a bounded subset with a guaranteed recency tail.
"""

from .sampler import Sampler, reduce, remove_duplicates

__all__ = ['Sampler', 'reduce', 'remove_duplicates']
