"""Export of extraction patterns.

This module converts extraction patterns into spaCy DependencyMatcher
specifications and writes classification reports to YAML files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import yaml
from spacy.matcher import DependencyMatcher
from spacy.vocab import Vocab

from .classification import ExtractorPattern, PatternValidator, is_symmetric
from .patterns import (
    AttributeNode,
    Capture,
    ConjunctiveNode,
    Direction,
    EdgeMatcher,
    EdgeUnion,
    LabeledEdge,
    Matcher,
    Pattern,
    RegexEdge,
    TrivialNode,
)

logger = logging.getLogger(__name__)

# Node attribute -> spaCy token attribute
TOKEN_ATTRS = {
    "postag": "TAG",
    "text": "ORTH",
    "lemma": "LEMMA",
    "regex": "ORTH",
}

# ">" means "A is the head of B" (A > B)
# "<" means "A is a child of B" (A < B)
REL_OPS = {
    Direction.DOWN: ">",
    Direction.UP: "<",
}


def _dep_attr(edge: EdgeMatcher) -> Any:
    """Build the DEP attribute value accepted by ``edge``."""
    if isinstance(edge, LabeledEdge):
        return {"NOT_IN": [edge.label]} if edge.negated else edge.label
    if isinstance(edge, RegexEdge):
        return {"REGEX": edge.pattern}
    if isinstance(edge, EdgeUnion):
        if any(m.negated for m in edge.members):
            raise ValueError(f"Cannot export negated union member in {edge}")
        return {"IN": [m.label for m in edge.members]}
    raise ValueError(f"Cannot export edge matcher {edge!r}")


def _set_attr(attrs: Dict[str, Any], key: str, value: Any, node_id: str) -> None:
    if key in attrs:
        raise ValueError(f"Node {node_id} constrains {key} twice")
    attrs[key] = value


def _node_id(index: int, node: Matcher) -> str:
    if isinstance(node, Capture):
        return node.alias
    return f"node_{index}"


def _node_constraints(node: Matcher) -> List[Matcher]:
    # edge matchers stay whole so a union maps to a single DEP constraint
    if isinstance(node, Capture):
        return _node_constraints(node.inner)
    if isinstance(node, ConjunctiveNode):
        return [c for part in node.parts for c in _node_constraints(part)]
    return [node]


def _node_specs(
    node: Matcher, node_id: str, attrs: Dict[str, Any]
) -> List[Dict[str, Any]]:
    """Fill ``attrs`` from the node's constraints.

    Returns specs for the extra dependents required by edge constraints
    inside the node (e.g. ``{arg1:>nn>}``).
    """
    children = []
    for base in _node_constraints(node):
        if isinstance(base, TrivialNode):
            continue
        if isinstance(base, AttributeNode):
            value = base.value
            if base.attribute == "regex":
                value = {"REGEX": base.value}
            _set_attr(attrs, TOKEN_ATTRS[base.attribute], value, node_id)
        elif isinstance(base, EdgeMatcher):
            if base.direction is Direction.UP:
                _set_attr(attrs, "DEP", _dep_attr(base), node_id)
            else:
                children.append({
                    "LEFT_ID": node_id,
                    "REL_OP": ">",
                    "RIGHT_ID": f"{node_id}_child_{len(children)}",
                    "RIGHT_ATTRS": {"DEP": _dep_attr(base)},
                })
        else:
            raise ValueError(f"Cannot export node matcher {base!r}")
    return children


def to_dependency_matcher(pattern: Pattern) -> List[Dict[str, Any]]:
    """Convert a pattern to a spaCy DependencyMatcher specification.

    The pattern follows the structure:
    1. First node is the anchor (RIGHT_ID, RIGHT_ATTRS)
    2. Each later node references its predecessor (LEFT_ID, REL_OP, RIGHT_ID, RIGHT_ATTRS)

    Every edge puts its DEP constraint on its dependent end.

    Parameters
    ----------
    pattern : Pattern
        Pattern to convert

    Returns
    -------
    List[Dict[str, Any]]
        DependencyMatcher pattern specification

    Raises
    ------
    ValueError
        If a node would need two governors or two values for one attribute
    """
    nodes = pattern.node_matchers()
    edges = pattern.edge_matchers()
    if not nodes:
        return []

    ids = [_node_id(i, node) for i, node in enumerate(nodes)]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate node ids in {pattern}")

    attrs: List[Dict[str, Any]] = [{} for _ in nodes]
    children = [_node_specs(node, ids[i], attrs[i]) for i, node in enumerate(nodes)]

    for i, edge in enumerate(edges):
        dependent = i + 1 if edge.direction is Direction.DOWN else i
        _set_attr(attrs[dependent], "DEP", _dep_attr(edge), ids[dependent])

    spec = [{"RIGHT_ID": ids[0], "RIGHT_ATTRS": attrs[0]}]
    spec.extend(children[0])
    for i, edge in enumerate(edges):
        spec.append({
            "LEFT_ID": ids[i],
            "REL_OP": REL_OPS[edge.direction],
            "RIGHT_ID": ids[i + 1],
            "RIGHT_ATTRS": attrs[i + 1],
        })
        spec.extend(children[i + 1])

    return spec


def compile_dependency_matcher(
    patterns: Sequence[Pattern], vocab: Vocab
) -> Tuple[DependencyMatcher, Dict[str, Pattern]]:
    """Compile patterns into a single DependencyMatcher.

    Parameters
    ----------
    patterns : Sequence[Pattern]
        Patterns to compile
    vocab : Vocab
        Vocabulary shared with the documents to match

    Returns
    -------
    Tuple[DependencyMatcher, Dict[str, Pattern]]
        The matcher and a lookup from match id to source pattern
    """
    dep_matcher = DependencyMatcher(vocab)
    pattern_lookup: Dict[str, Pattern] = {}

    for i, pattern in enumerate(patterns):
        match_id = f"pattern_{i}"
        dep_matcher.add(match_id, [to_dependency_matcher(pattern)])
        pattern_lookup[match_id] = pattern

    logger.info(f"Compiled {len(pattern_lookup)} patterns into DependencyMatcher")
    return dep_matcher, pattern_lookup


@dataclass
class PatternReport:
    """Classification result of one pattern.

    Attributes
    ----------
    pattern : str
        Pattern text
    valid : bool
        Whether the validity heuristics accept the pattern
    reason : Optional[str]
        Reason of the first heuristic that fired, None when valid
    symmetric : bool
        Whether the pattern is symmetric in its arguments
    arguments, relations, slots : List[str]
        Capture aliases per role, in path order
    """

    pattern: str
    valid: bool
    reason: Optional[str]
    symmetric: bool
    arguments: List[str] = field(default_factory=list)
    relations: List[str] = field(default_factory=list)
    slots: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML export."""
        return {
            "pattern": self.pattern,
            "valid": self.valid,
            "reason": self.reason,
            "symmetric": self.symmetric,
            "arguments": self.arguments,
            "relations": self.relations,
            "slots": self.slots,
        }


def build_report(
    pattern: ExtractorPattern, validator: Optional[PatternValidator] = None
) -> PatternReport:
    validator = validator or PatternValidator()
    reason = validator.explain(pattern)
    return PatternReport(
        pattern=str(pattern),
        valid=reason is None,
        reason=reason,
        symmetric=is_symmetric(pattern),
        arguments=[c.alias for c in pattern.arguments],
        relations=[c.alias for c in pattern.relations],
        slots=[c.alias for c in pattern.slots],
    )


def export_reports_yaml(
    reports: Iterable[PatternReport], output_path: Union[str, Path]
) -> None:
    """Export pattern reports to a YAML file.

    Parameters
    ----------
    reports : Iterable[PatternReport]
        Reports in input order
    output_path : Union[str, Path]
        Output YAML file path
    """
    entries = [r.to_dict() for r in reports]
    config = {
        "version": "1.0",
        "total": len(entries),
        "valid": sum(1 for e in entries if e["valid"]),
        "patterns": entries,
    }

    # Create output directory if needed
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Exported {len(entries)} pattern reports to: {output_path}")
