"""
Reference datasets.

Public API:
    load_mtcars() -> DataSource
"""

from lmstep.datasets._mtcars import (
    MTCARS_COLUMNS,
    MTCARS_ROW_NAMES,
    mtcars,
    load_mtcars,
)

__all__ = [
    "MTCARS_COLUMNS",
    "MTCARS_ROW_NAMES",
    "mtcars",
    "load_mtcars",
]
