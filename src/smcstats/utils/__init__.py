from .cli import parse_list, parse_list_floats
from .loading import MISSING_TOKENS, load_observations

__all__ = [
    "MISSING_TOKENS",
    "load_observations",
    "parse_list",
    "parse_list_floats",
]
