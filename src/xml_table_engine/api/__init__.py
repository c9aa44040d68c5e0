"""Public API for the XML table engine."""

from .adapters import (
    ConversionResult,
    GridAdapter,
    PandasGridAdapter,
    dataframe_to_grid,
    grid_to_dataframe,
    read_csv_grid,
    write_csv_grid,
)
from .engine import DocumentEngine

__all__ = [
    "ConversionResult",
    "DocumentEngine",
    "GridAdapter",
    "PandasGridAdapter",
    "dataframe_to_grid",
    "grid_to_dataframe",
    "read_csv_grid",
    "write_csv_grid",
]
