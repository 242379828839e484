"""
Refactoring opportunity feature.
"""

from .opportunities import DuplicatedBlock, find_duplicated_blocks, find_refactoring_opportunities

__all__ = [
    "DuplicatedBlock",
    "find_duplicated_blocks",
    "find_refactoring_opportunities",
]
