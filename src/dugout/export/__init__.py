"""Lineup export helpers (CSV grid, terminal grid)."""

from .grid import BENCH_LABEL, GridExportError, export_lineup_to_csv, format_grid, lineup_grid_rows

__all__ = [
    "BENCH_LABEL",
    "GridExportError",
    "export_lineup_to_csv",
    "format_grid",
    "lineup_grid_rows",
]
