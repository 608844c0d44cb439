"""Validity heuristics for extraction patterns.

This module provides the ordered battery of structural heuristics that
decides whether a pattern is acceptable for extraction. The heuristics reject
dependency shapes that tend to produce noisy or redundant extractions:
unspecified ``dep`` edges, stacked prepositions, coordination, and slots
that are unconstrained at the ends of the path or next to noun compounds.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, Union

import yaml

from ..config import (
    CONJUNCTION_LABELS,
    CONJUNCTION_PREFIX,
    NOUN_COMPOUND_LABEL,
    PREPOSITION_EDGE_COUNT,
    PREPOSITION_MARKER,
    UNSPECIFIED_DEP_LABEL,
)
from ..patterns import Capture, LabeledEdge, Matcher, Pattern, Role, base_node_matchers

logger = logging.getLogger(__name__)


def is_slot(matcher: Matcher) -> bool:
    """Return True for a capture classified as a slot."""
    return isinstance(matcher, Capture) and matcher.role is Role.SLOT


class PatternRule(ABC):
    """Base class for a single validity heuristic.

    A rule is *violated* when the pattern has the shape the rule guards
    against; a violated rule makes the pattern invalid.
    """

    name: str = ""

    def __init__(self, reason: Optional[str] = None):
        self._reason = reason

    @property
    def reason(self) -> str:
        """Short diagnostic shown when the rule fires."""
        return self._reason or self.default_reason()

    @abstractmethod
    def default_reason(self) -> str:
        pass

    @abstractmethod
    def violated(self, pattern: Pattern) -> bool:
        """Check whether ``pattern`` has the rejected shape.

        Parameters
        ----------
        pattern : Pattern
            Classified pattern to inspect

        Returns
        -------
        bool
            True if the rule fires, False otherwise
        """
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize rule to dictionary."""
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, config: Dict[str, Any]) -> "PatternRule":
        """Create rule from dictionary."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()})"


class EdgeLabelRule(PatternRule):
    """Rejects patterns with a base edge carrying exactly ``label``."""

    name = "edge_label"

    def __init__(self, label: str, reason: Optional[str] = None):
        super().__init__(reason)
        self.label = label

    def default_reason(self) -> str:
        return f"{self.label} edge"

    def violated(self, pattern: Pattern) -> bool:
        return any(e.label == self.label for e in pattern.base_edge_labels())

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.name, "label": self.label, "reason": self.reason}

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "EdgeLabelRule":
        return cls(label=config["label"], reason=config.get("reason"))


class EdgeLabelPrefixRule(PatternRule):
    """Rejects patterns with a base edge label starting with ``prefix``."""

    name = "edge_label_prefix"

    def __init__(self, prefix: str = CONJUNCTION_PREFIX, reason: Optional[str] = None):
        super().__init__(reason)
        self.prefix = prefix

    def default_reason(self) -> str:
        return f"{self.prefix}* edge"

    def violated(self, pattern: Pattern) -> bool:
        return any(e.label.startswith(self.prefix) for e in pattern.base_edge_labels())

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.name, "prefix": self.prefix, "reason": self.reason}

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "EdgeLabelPrefixRule":
        return cls(
            prefix=config.get("prefix", CONJUNCTION_PREFIX),
            reason=config.get("reason"),
        )


class MultiplePrepositionRule(PatternRule):
    """Rejects ``edge_count``-edge patterns with more than one preposition edge.

    A label counts as a preposition when it contains ``marker``.
    """

    name = "multiple_prepositions"

    def __init__(
        self,
        edge_count: int = PREPOSITION_EDGE_COUNT,
        marker: str = PREPOSITION_MARKER,
        reason: Optional[str] = None,
    ):
        super().__init__(reason)
        self.edge_count = edge_count
        self.marker = marker

    def default_reason(self) -> str:
        return "multiple preps"

    def violated(self, pattern: Pattern) -> bool:
        if len(pattern.edge_matchers()) != self.edge_count:
            return False
        preps = [e for e in pattern.base_edge_labels() if self.marker in e.label]
        return len(preps) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.name,
            "edge_count": self.edge_count,
            "marker": self.marker,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MultiplePrepositionRule":
        return cls(
            edge_count=config.get("edge_count", PREPOSITION_EDGE_COUNT),
            marker=config.get("marker", PREPOSITION_MARKER),
            reason=config.get("reason"),
        )


class SlotAtBoundaryRule(PatternRule):
    """Rejects patterns that start or end with a slot capture."""

    name = "slot_at_boundary"

    def default_reason(self) -> str:
        return "ends with slot"

    def violated(self, pattern: Pattern) -> bool:
        nodes = pattern.node_matchers()
        return bool(nodes) and (is_slot(nodes[0]) or is_slot(nodes[-1]))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.name, "reason": self.reason}

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "SlotAtBoundaryRule":
        return cls(reason=config.get("reason"))


class SlotBordersLabelRule(PatternRule):
    """Rejects a slot next to a node constrained by a ``label`` edge.

    Neighbours are taken in the node sequence, so for node ``i`` the nodes
    ``i - 1`` and ``i + 1`` are inspected. A neighbour borders the label when
    one of its base node matchers is a labeled edge with that label, e.g.
    ``{arg1:>nn>}``.
    """

    name = "slot_borders_label"

    def __init__(self, label: str = NOUN_COMPOUND_LABEL, reason: Optional[str] = None):
        super().__init__(reason)
        self.label = label

    def default_reason(self) -> str:
        return f"slot borders {self.label}"

    def _has_label(self, node: Matcher) -> bool:
        return any(
            isinstance(base, LabeledEdge) and base.label == self.label
            for base in base_node_matchers(node)
        )

    def violated(self, pattern: Pattern) -> bool:
        nodes = pattern.node_matchers()
        for i, node in enumerate(nodes):
            if not is_slot(node):
                continue
            for j in (i - 1, i + 1):
                if 0 <= j < len(nodes) and self._has_label(nodes[j]):
                    return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.name, "label": self.label, "reason": self.reason}

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "SlotBordersLabelRule":
        return cls(
            label=config.get("label", NOUN_COMPOUND_LABEL),
            reason=config.get("reason"),
        )


# Registry of rule types
RULE_REGISTRY: Dict[str, Type[PatternRule]] = {
    EdgeLabelRule.name: EdgeLabelRule,
    EdgeLabelPrefixRule.name: EdgeLabelPrefixRule,
    MultiplePrepositionRule.name: MultiplePrepositionRule,
    SlotAtBoundaryRule.name: SlotAtBoundaryRule,
    SlotBordersLabelRule.name: SlotBordersLabelRule,
}


def default_rules() -> List[PatternRule]:
    """Create the default heuristic battery, in evaluation order.

    Returns
    -------
    List[PatternRule]
        The rules, each evaluated only if all earlier rules passed
    """
    conj_and, conj_or = CONJUNCTION_LABELS
    return [
        EdgeLabelRule(UNSPECIFIED_DEP_LABEL),
        MultiplePrepositionRule(),
        EdgeLabelRule(conj_and, reason=conj_and),
        EdgeLabelRule(conj_or, reason=conj_or),
        EdgeLabelPrefixRule(CONJUNCTION_PREFIX, reason="alt conj"),
        SlotAtBoundaryRule(),
        SlotBordersLabelRule(),
    ]


class PatternValidator:
    """Apply an ordered battery of validity rules to patterns.

    Parameters
    ----------
    rules : Optional[Iterable[PatternRule]]
        Rules in evaluation order (None = :func:`default_rules`)
    """

    def __init__(self, rules: Optional[Iterable[PatternRule]] = None):
        self.rules = list(rules) if rules is not None else default_rules()

    def first_violation(self, pattern: Pattern) -> Optional[PatternRule]:
        """Return the first rule that fires on ``pattern``, if any."""
        for rule in self.rules:
            if rule.violated(pattern):
                return rule
        return None

    def validate(self, pattern: Pattern) -> bool:
        """Check a pattern against the rules.

        Evaluation stops at the first rule that fires; the rule's reason is
        logged at DEBUG level.

        Parameters
        ----------
        pattern : Pattern
            Classified pattern

        Returns
        -------
        bool
            True if no rule fires
        """
        rule = self.first_violation(pattern)
        if rule is not None:
            logger.debug(f"invalid: {rule.reason}: {pattern}")
            return False
        return True

    def explain(self, pattern: Pattern) -> Optional[str]:
        """Return the reason the pattern is invalid, or None if it is valid."""
        rule = self.first_violation(pattern)
        return rule.reason if rule is not None else None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "PatternValidator":
        """Build a validator from a configuration dictionary.

        Parameters
        ----------
        config : Dict[str, Any]
            Mapping with a ``rules`` list; each entry has a ``type`` key
            naming a :data:`RULE_REGISTRY` entry plus that rule's options

        Raises
        ------
        ValueError
            If a rule type is unknown
        """
        rules = []
        for rule_config in config.get("rules", []):
            rule_type = rule_config.get("type")
            if rule_type not in RULE_REGISTRY:
                raise ValueError(f"Unknown rule type: {rule_type}")
            rules.append(RULE_REGISTRY[rule_type].from_dict(rule_config))
        return cls(rules)

    @classmethod
    def load_from_yaml(cls, yaml_path: Union[str, Path]) -> "PatternValidator":
        """Build a validator from a YAML rules file."""
        with open(yaml_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        validator = cls.from_config(config)
        logger.info(f"Loaded {len(validator.rules)} validity rules from {yaml_path}")
        return validator

    def to_config(self) -> Dict[str, List[Dict[str, Any]]]:
        """Export the rules to a configuration dictionary."""
        return {"rules": [rule.to_dict() for rule in self.rules]}


def is_valid(pattern: Pattern) -> bool:
    """Check ``pattern`` against the default rules."""
    return PatternValidator().validate(pattern)
