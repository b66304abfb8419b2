"""
Train/test splitting.

Public API:
    train_test_split(data, seed, train_fraction=0.8) -> SplitResult
"""

from lmstep.sampling._split import SplitResult, train_test_split

__all__ = [
    "SplitResult",
    "train_test_split",
]
