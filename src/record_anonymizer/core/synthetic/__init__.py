"""
Synthetic data module.

Generates plausible fake values guided by a field's semantic type, used by
the masking strategy.

Main components:
- BaseSyntheticGenerator: Faker instance management (seeded / shared)
- SyntheticDataGenerator: per-type generation policies
"""

from record_anonymizer.core.synthetic.base import BaseSyntheticGenerator
from record_anonymizer.core.synthetic.generator import (
    SyntheticDataGenerator,
    get_synthetic_generator,
)

__all__ = [
    "BaseSyntheticGenerator",
    "SyntheticDataGenerator",
    "get_synthetic_generator",
]
