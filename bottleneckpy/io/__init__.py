"""I/O utilities for persistence interval files."""

from bottleneckpy.io.persistence import (
    read_persistence_intervals_and_dimension,
    read_persistence_intervals_in_dimension,
    read_persistence_intervals_in_one_dimension_from_file,
)

__all__ = [
    "read_persistence_intervals_and_dimension",
    "read_persistence_intervals_in_dimension",
    "read_persistence_intervals_in_one_dimension_from_file",
]
