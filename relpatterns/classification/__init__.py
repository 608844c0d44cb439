"""Classification of extraction patterns.

Lifts generic captures into argument, relation and slot roles and answers
the two questions asked of every extraction pattern: is it acceptable for
extraction, and is it symmetric in its arguments.

Usage:
    from relpatterns.classification import classify
    from relpatterns.patterns import deserialize

    pattern = classify(deserialize("{arg1} >nsubj> {rel} <dobj< {arg2}"))
    pattern.valid, pattern.symmetric
"""

from .extractor_pattern import (
    AliasClassificationError,
    ExtractorPattern,
    classify,
    classify_capture,
)
from .symmetry import is_symmetric
from .validity import (
    RULE_REGISTRY,
    EdgeLabelPrefixRule,
    EdgeLabelRule,
    MultiplePrepositionRule,
    PatternRule,
    PatternValidator,
    SlotAtBoundaryRule,
    SlotBordersLabelRule,
    default_rules,
    is_valid,
)

__all__ = [
    # Classifier
    'ExtractorPattern',
    'AliasClassificationError',
    'classify',
    'classify_capture',
    # Validity
    'PatternValidator',
    'PatternRule',
    'EdgeLabelRule',
    'EdgeLabelPrefixRule',
    'MultiplePrepositionRule',
    'SlotAtBoundaryRule',
    'SlotBordersLabelRule',
    'RULE_REGISTRY',
    'default_rules',
    'is_valid',
    # Symmetry
    'is_symmetric',
]
