"""
Utils Package

Serialization and random-source utilities.
"""

from .random_source import (
    RandomSource,
    HotRandom,
    SeededRandom,
    PooledRandom,
    ConstantRandom,
    symmetric,
    spawn_source,
    numpy_generator,
)
from .serialization import (
    serialize_style,
    deserialize_style,
    serialize_profile,
    deserialize_profile,
    load_style_file,
    save_style_file,
)

__all__ = [
    "RandomSource",
    "HotRandom",
    "SeededRandom",
    "PooledRandom",
    "ConstantRandom",
    "symmetric",
    "spawn_source",
    "numpy_generator",
    "serialize_style",
    "deserialize_style",
    "serialize_profile",
    "deserialize_profile",
    "load_style_file",
    "save_style_file",
]
