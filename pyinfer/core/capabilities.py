"""
Capability string constants for PyInfer.

Import from here, never use raw strings.

Usage:
    from pyinfer.core.capabilities import CAPABILITY_CATEGORICAL

    if ds.supports(CAPABILITY_CATEGORICAL):
        labels = ds['outcome']
"""

# Columns are held in memory as numpy arrays
CAPABILITY_MATERIALIZED = 'materialized'

# Columns can be read any number of times
CAPABILITY_REPEATABLE = 'repeatable'

# At least one column holds non-numeric labels
CAPABILITY_CATEGORICAL = 'categorical'

ALL_CAPABILITIES = frozenset({
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
    CAPABILITY_CATEGORICAL,
})

__all__ = [
    'CAPABILITY_MATERIALIZED',
    'CAPABILITY_REPEATABLE',
    'CAPABILITY_CATEGORICAL',
    'ALL_CAPABILITIES',
]
