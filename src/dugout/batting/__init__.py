"""Fair batting order generation."""

from .order import PlayerBandCounts, band_sizes, calculate_band_counts, generate_batting_order, get_band

__all__ = [
    "PlayerBandCounts",
    "band_sizes",
    "calculate_band_counts",
    "generate_batting_order",
    "get_band",
]
