"""
Summary Builder

Generates the structural summary of a full dataset: column types and
numeric aggregates.
"""

from .summarizer import Summarizer, summarize

__all__ = ['Summarizer', 'summarize']
