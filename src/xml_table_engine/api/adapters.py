"""Integration adapters between grids and tabular libraries.

Adapters convert a ``Grid`` to and from another tabular representation. The
pandas adapter backs CSV import and export in the command-line tool.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from xml_table_engine.shared import get_logger
from xml_table_engine.tables import Grid


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float = 0.0
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class GridAdapter(ABC):
    """Abstract base class for grid conversion adapters."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the adapter.

        Args:
            correlation_id: Optional correlation ID for session tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def target_library(self) -> str:
        """Name of the library this adapter converts to."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def to_target(self, grid: Grid) -> ConversionResult:
        """Convert a grid to the target representation."""

    @abstractmethod
    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert the target representation to a grid."""

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        """Create a ConversionResult for error conditions."""
        self._logger.warning(error_message, extra={"target_library": self.target_library})
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
        )


class PandasGridAdapter(GridAdapter):
    """Adapter for bidirectional conversion with pandas DataFrame.

    All values are kept as strings; missing values become ``""``.
    """

    @property
    def target_library(self) -> str:
        return "pandas"

    def is_available(self) -> bool:
        """Check if pandas is available."""
        try:
            import pandas  # noqa: F401
            return True
        except ImportError:
            return False

    def to_target(self, grid: Grid) -> ConversionResult:
        """Convert a grid to a DataFrame with one column per header."""
        start_time = time.time()

        try:
            import pandas as pd

            data = [
                [grid.cell(row, column) for column in range(grid.column_count)]
                for row in range(grid.row_count)
            ]
            df = pd.DataFrame(data, columns=list(grid.headers), dtype=str)

            return ConversionResult(
                success=True,
                converted_data=df,
                original_data=grid,
                conversion_time_ms=(time.time() - start_time) * 1000,
                metadata={"dataframe_shape": df.shape},
            )

        except (ImportError, ValueError) as e:
            return self._create_error_result(
                f"Failed to convert to pandas DataFrame: {e}",
                grid,
                (time.time() - start_time) * 1000
            )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert a DataFrame to a grid, stringifying every value."""
        start_time = time.time()

        try:
            import pandas as pd
        except ImportError as e:
            return self._create_error_result(f"pandas is not available: {e}", target_data)

        if not isinstance(target_data, pd.DataFrame):
            return self._create_error_result(
                "Target data is not a pandas DataFrame",
                target_data,
                (time.time() - start_time) * 1000
            )

        headers = [str(column) for column in target_data.columns]
        rows = [
            ["" if pd.isna(value) else str(value) for value in record]
            for record in target_data.itertuples(index=False, name=None)
        ]

        return ConversionResult(
            success=True,
            converted_data=Grid(headers=headers, rows=rows),
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            metadata={"dataframe_shape": target_data.shape},
        )


def grid_to_dataframe(grid: Grid) -> Any:
    """Convert ``grid`` to a DataFrame, raising ValueError on failure."""
    result = PandasGridAdapter().to_target(grid)
    if not result.success:
        raise ValueError("; ".join(result.errors))
    return result.converted_data


def dataframe_to_grid(df: Any) -> Grid:
    """Convert a DataFrame to a grid, raising ValueError on failure."""
    result = PandasGridAdapter().from_target(df)
    if not result.success:
        raise ValueError("; ".join(result.errors))
    return result.converted_data


def read_csv_grid(path: Union[str, Path]) -> Grid:
    """Read a CSV file into a grid; every value is read as a string."""
    import pandas as pd

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return dataframe_to_grid(df)


def write_csv_grid(grid: Grid, path: Union[str, Path, None] = None) -> Optional[str]:
    """Write ``grid`` as CSV to ``path``; with no path the CSV text is returned."""
    return grid_to_dataframe(grid).to_csv(path, index=False)
