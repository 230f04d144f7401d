"""Spatial rate maps used to derive field indices and field sizes."""

from .rate_maps import lookup_rate, make_bin_edges, make_rate_map, supra_threshold_volume

__all__ = ["make_rate_map", "make_bin_edges", "lookup_rate", "supra_threshold_volume"]
