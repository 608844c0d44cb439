"""Dependency pattern model and textual format.

Usage:
    from relpatterns.patterns import deserialize

    pattern = deserialize("{arg1} <nsubj< {rel} >dobj> {arg2}")
    pattern.edge_matchers()
"""

from .matchers import (
    AttributeNode,
    Capture,
    ConjunctiveNode,
    Direction,
    EdgeMatcher,
    EdgeUnion,
    LabeledEdge,
    Matcher,
    NodeMatcher,
    RegexEdge,
    Role,
    TrivialNode,
    base_node_matchers,
)
from .pattern import Pattern, PatternStructureError
from .serialization import PatternDeserializationError, deserialize, serialize

__all__ = [
    # Matchers
    'Matcher',
    'NodeMatcher',
    'EdgeMatcher',
    'TrivialNode',
    'AttributeNode',
    'ConjunctiveNode',
    'Capture',
    'LabeledEdge',
    'RegexEdge',
    'EdgeUnion',
    'Direction',
    'Role',
    'base_node_matchers',
    # Pattern value
    'Pattern',
    'PatternStructureError',
    # Text format
    'deserialize',
    'serialize',
    'PatternDeserializationError',
]
