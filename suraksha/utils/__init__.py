"""Suraksha utilities."""

from .yaml_loader import load_yaml_file, get_available_catalogs, DATA_DIR
from .rounding import round_half_up, percent_of

__all__ = [
    "load_yaml_file",
    "get_available_catalogs",
    "DATA_DIR",
    "round_half_up",
    "percent_of",
]
