"""Matcher model for dependency extraction patterns.

A pattern is a path over a dependency graph written as an alternating
sequence of node matchers and edge matchers::

    {arg1} <nsubj< {rel:postag=VBD} >dobj> {arg2}

Node matchers constrain the words on the path, edge matchers constrain the
dependency labels between them. Captures (``{alias}``) additionally tag the
matched node so it can be read back as part of an extraction.

All matchers are frozen dataclasses: they compare structurally, hash, and
can be shared freely between patterns.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from ..config import NODE_ATTRIBUTES


class Direction(Enum):
    """Direction in which an edge is traversed.

    ``DOWN`` (``>``) walks from the governor on the left to the dependent on
    the right, ``UP`` (``<``) walks from a dependent to its governor.
    """

    DOWN = ">"
    UP = "<"

    def flip(self) -> "Direction":
        """Return the opposite traversal direction."""
        return Direction.UP if self is Direction.DOWN else Direction.DOWN


class Role(Enum):
    """Semantic role of a typed capture."""

    ARGUMENT = "argument"
    RELATION = "relation"
    SLOT = "slot"


class Matcher(ABC):
    """Base class for every element of a pattern."""

    @abstractmethod
    def render(self) -> str:
        """Return the textual form of this matcher."""
        pass

    def __str__(self) -> str:
        return self.render()


class NodeMatcher(Matcher):
    """A matcher that constrains a single node."""


class EdgeMatcher(Matcher):
    """A matcher that constrains a single dependency edge.

    Subclasses expose a ``direction`` attribute and the text between the two
    direction markers through :meth:`body`.
    """

    @abstractmethod
    def flip(self) -> "EdgeMatcher":
        """Return the matcher for the same edge traversed the other way."""
        pass

    @abstractmethod
    def body(self) -> str:
        """Return the text between the direction markers."""
        pass

    def base_edge_matchers(self) -> List["EdgeMatcher"]:
        """Return the elementary edge matchers this matcher is built from."""
        return [self]

    def render(self) -> str:
        marker = self.direction.value
        return f"{marker}{self.body()}{marker}"


@dataclass(frozen=True)
class TrivialNode(NodeMatcher):
    """Matches any node."""

    def render(self) -> str:
        return "*"


@dataclass(frozen=True)
class AttributeNode(NodeMatcher):
    """Matches a node by one of its token attributes.

    Attributes
    ----------
    attribute : str
        One of ``postag``, ``text``, ``lemma`` or ``regex`` (regular
        expression over the token text)
    value : str
        Expected value
    """

    attribute: str
    value: str

    def __post_init__(self):
        if self.attribute not in NODE_ATTRIBUTES:
            raise ValueError(f"Unknown node attribute: {self.attribute}")
        if not self.value:
            raise ValueError(f"Empty value for node attribute: {self.attribute}")

    def render(self) -> str:
        return f"{self.attribute}={self.value}"


@dataclass(frozen=True)
class ConjunctiveNode(NodeMatcher):
    """Matches a node satisfying every one of its parts.

    Parts are node matchers or edge matchers. An edge matcher used as a part
    requires the node to carry such an edge: ``>nn>`` means the node governs
    an ``nn`` dependent, ``<nn<`` means the node is attached by ``nn``.
    """

    parts: Tuple[Matcher, ...]

    def __post_init__(self):
        object.__setattr__(self, "parts", tuple(self.parts))
        if len(self.parts) < 2:
            raise ValueError("A conjunctive node needs at least two parts")

    def render(self) -> str:
        return ";".join(part.render() for part in self.parts)


@dataclass(frozen=True)
class Capture(NodeMatcher):
    """A node matcher that tags the matched node under an alias.

    A capture with ``role=None`` is generic, as produced by the
    deserializer. Classification assigns the role once; it is never rendered,
    so a classified capture prints exactly like its generic source.

    Attributes
    ----------
    alias : str
        Name under which the matched node is reported
    inner : Matcher
        Further constraint on the captured node
    role : Optional[Role]
        Argument, relation or slot, or None when not yet classified
    """

    alias: str
    inner: Matcher = field(default_factory=TrivialNode)
    role: Optional[Role] = None

    def __post_init__(self):
        if not self.alias:
            raise ValueError("Capture alias must not be empty")

    @property
    def is_typed(self) -> bool:
        return self.role is not None

    def with_inner(self, inner: Matcher) -> "Capture":
        """Return a copy of this capture constraining the node with ``inner``."""
        return replace(self, inner=inner)

    def with_role(self, role: Role) -> "Capture":
        return replace(self, role=role)

    def render(self) -> str:
        if isinstance(self.inner, TrivialNode):
            return "{" + self.alias + "}"
        return "{" + self.alias + ":" + self.inner.render() + "}"


@dataclass(frozen=True)
class LabeledEdge(EdgeMatcher):
    """Matches an edge by its exact dependency label.

    Attributes
    ----------
    label : str
        Dependency label, e.g. ``nsubj`` or ``prep_of``
    direction : Direction
        Traversal direction
    negated : bool
        If True the edge must carry any label except ``label``
    """

    label: str
    direction: Direction = Direction.DOWN
    negated: bool = False

    def __post_init__(self):
        if not self.label:
            raise ValueError("Edge label must not be empty")

    def flip(self) -> "LabeledEdge":
        return replace(self, direction=self.direction.flip())

    def body(self) -> str:
        return ("!" if self.negated else "") + self.label


@dataclass(frozen=True)
class RegexEdge(EdgeMatcher):
    """Matches an edge whose label matches a regular expression."""

    pattern: str
    direction: Direction = Direction.DOWN

    def __post_init__(self):
        if not self.pattern:
            raise ValueError("Edge regex must not be empty")
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"Invalid edge regex {self.pattern!r}: {e}") from e

    def flip(self) -> "RegexEdge":
        return replace(self, direction=self.direction.flip())

    def body(self) -> str:
        return "regex:" + self.pattern


@dataclass(frozen=True)
class EdgeUnion(EdgeMatcher):
    """Matches an edge accepted by any of its labeled members."""

    members: Tuple[LabeledEdge, ...]

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))
        if len(self.members) < 2:
            raise ValueError("An edge union needs at least two members")
        if not all(isinstance(m, LabeledEdge) for m in self.members):
            raise ValueError("Edge union members must be labeled edges")
        if len({m.direction for m in self.members}) != 1:
            raise ValueError("Edge union members must share one direction")

    @property
    def direction(self) -> Direction:
        return self.members[0].direction

    def flip(self) -> "EdgeUnion":
        return EdgeUnion(tuple(m.flip() for m in self.members))

    def body(self) -> str:
        return "|".join(m.body() for m in self.members)

    def base_edge_matchers(self) -> List[EdgeMatcher]:
        return list(self.members)


def base_node_matchers(matcher: Matcher) -> List[Matcher]:
    """Flatten a node matcher into its elementary constraints.

    Captures are unwrapped to their inner matcher and conjunctions to their
    parts, recursively. Edge matchers used as node constraints are reduced to
    their base edge matchers.
    """
    if isinstance(matcher, Capture):
        return base_node_matchers(matcher.inner)
    if isinstance(matcher, ConjunctiveNode):
        return [base for part in matcher.parts for base in base_node_matchers(part)]
    if isinstance(matcher, EdgeMatcher):
        return list(matcher.base_edge_matchers())
    return [matcher]
