"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- Series: A series tracked in the local library
"""

from src.core.entities.series import Series

__all__ = [
    "Series",
]
