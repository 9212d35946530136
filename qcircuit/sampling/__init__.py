"""Shot sampling and histogram utilities."""

from .bitstrings import (
    bitstring_to_bits,
    index_to_bitstring,
    sample_indices,
    validate_shots,
)
from .hist import bitstring_counts, counts_to_probs, most_frequent

__all__ = [
    "validate_shots",
    "sample_indices",
    "index_to_bitstring",
    "bitstring_to_bits",
    "bitstring_counts",
    "counts_to_probs",
    "most_frequent",
]
