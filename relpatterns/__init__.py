"""Classification and validation of relation extraction patterns.

This package provides the tooling around dependency path patterns used to
extract (argument, relation, argument) triples from parsed sentences.

The pipeline:
1. Deserialize a pattern from its textual form
2. Classify its captures into argument, relation and slot roles
3. Check the pattern against the validity heuristics
4. Detect whether the pattern is symmetric in its arguments
"""

__version__ = "1.0.0"

from .classification import (
    AliasClassificationError,
    ExtractorPattern,
    PatternValidator,
    classify,
    is_symmetric,
    is_valid,
)
from .patterns import Pattern, PatternDeserializationError, deserialize, serialize

__all__ = [
    "Pattern",
    "ExtractorPattern",
    "PatternValidator",
    "PatternDeserializationError",
    "AliasClassificationError",
    "deserialize",
    "serialize",
    "classify",
    "is_valid",
    "is_symmetric",
]
