"""Textual pattern format.

One pattern per line, matchers separated by whitespace::

    {arg1} <nsubj< {rel:postag=VBD} >dobj> {arg2}
    {arg1} >prep_of|prep_in> postag=NN;text=city <nn< {arg2}

Node tokens
    ``*`` any node; ``attr=value`` with attr in postag, text, lemma, regex;
    several constraints joined by ``;``; ``{alias}`` or
    ``{alias:constraints}`` for captures. An edge token used as a constraint
    (``{arg1:>nn>}``) requires the node to carry that edge.
Edge tokens
    ``>label>`` (left governs right), ``<label<`` (right governs left),
    ``!label`` for negation, ``a|b`` for alternatives and ``regex:PATTERN``
    for a label regular expression.

Regular expressions may not contain whitespace, and node constraints may not
contain ``;``.
"""

import re
from typing import List

from .matchers import (
    AttributeNode,
    Capture,
    ConjunctiveNode,
    Direction,
    EdgeMatcher,
    EdgeUnion,
    LabeledEdge,
    Matcher,
    RegexEdge,
    TrivialNode,
)
from .pattern import Pattern, PatternStructureError

ALIAS_RE = re.compile(r"^[A-Za-z_]\w*$")
EDGE_MARKERS = {d.value: d for d in Direction}


class PatternDeserializationError(ValueError):
    """Raised when a pattern string cannot be parsed.

    Parameters
    ----------
    text : str
        The offending pattern text
    reason : str
        What is wrong with it
    """

    def __init__(self, text: str, reason: str):
        super().__init__(f"Cannot deserialize pattern {text!r}: {reason}")
        self.text = text
        self.reason = reason


def deserialize(text: str) -> Pattern:
    """Parse a single pattern line.

    Parameters
    ----------
    text : str
        Pattern in the textual format

    Returns
    -------
    Pattern
        Pattern with generic (unclassified) captures

    Raises
    ------
    PatternDeserializationError
        If the text is empty or malformed
    """
    tokens = text.split()
    if not tokens:
        raise PatternDeserializationError(text, "empty pattern")

    matchers: List[Matcher] = []
    for i, token in enumerate(tokens):
        try:
            if i % 2 == 0:
                matchers.append(_parse_node(token))
            else:
                matchers.append(_parse_edge(token))
        except ValueError as e:
            raise PatternDeserializationError(text, f"token {i} {token!r}: {e}") from e

    try:
        return Pattern(matchers)
    except PatternStructureError as e:
        raise PatternDeserializationError(text, str(e)) from e


def serialize(pattern: Pattern) -> str:
    """Render a pattern in the textual format."""
    return pattern.serialize()


def _parse_edge(token: str) -> EdgeMatcher:
    if len(token) < 3 or token[0] not in EDGE_MARKERS or token[-1] != token[0]:
        raise ValueError("expected an edge such as >label> or <label<")
    direction = EDGE_MARKERS[token[0]]
    body = token[1:-1]

    if body.startswith("regex:"):
        return RegexEdge(body[len("regex:"):], direction)

    members = [_parse_label(part, direction) for part in body.split("|")]
    if len(members) == 1:
        return members[0]
    return EdgeUnion(tuple(members))


def _parse_label(text: str, direction: Direction) -> LabeledEdge:
    negated = text.startswith("!")
    label = text[1:] if negated else text
    if not label or any(c in label for c in "<>!"):
        raise ValueError(f"invalid edge label {text!r}")
    return LabeledEdge(label, direction, negated)


def _parse_node(token: str) -> Matcher:
    if token[0] in EDGE_MARKERS:
        raise ValueError("expected a node, found an edge")
    if token.startswith("{"):
        return _parse_capture(token)
    return _parse_constraints(token)


def _parse_capture(token: str) -> Capture:
    if not token.endswith("}"):
        raise ValueError("unterminated capture")
    body = token[1:-1]
    alias, sep, constraints = body.partition(":")
    if not ALIAS_RE.match(alias):
        raise ValueError(f"invalid capture alias {alias!r}")
    if not sep:
        return Capture(alias)
    return Capture(alias, _parse_constraints(constraints))


def _parse_constraints(text: str) -> Matcher:
    parts = [_parse_constraint(part) for part in text.split(";")]
    if len(parts) == 1:
        return parts[0]
    return ConjunctiveNode(tuple(parts))


def _parse_constraint(text: str) -> Matcher:
    if not text:
        raise ValueError("empty node constraint")
    if text == "*":
        return TrivialNode()
    if text[0] in EDGE_MARKERS:
        return _parse_edge(text)
    attribute, sep, value = text.partition("=")
    if not sep:
        raise ValueError(f"expected attr=value, got {text!r}")
    return AttributeNode(attribute, value)
