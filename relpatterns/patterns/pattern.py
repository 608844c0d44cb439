"""Immutable dependency pattern value."""

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .matchers import EdgeMatcher, LabeledEdge, Matcher, NodeMatcher


class PatternStructureError(ValueError):
    """Raised when matchers do not alternate node, edge, node, ..., node."""


@dataclass(frozen=True)
class Pattern:
    """An alternating sequence of node and edge matchers.

    Even positions hold node matchers, odd positions hold edge matchers, so a
    non-empty pattern has odd length and one edge fewer than it has nodes.

    Attributes
    ----------
    matchers : Tuple[Matcher, ...]
        The matcher sequence, starting and ending with a node matcher
    """

    matchers: Tuple[Matcher, ...]

    def __post_init__(self):
        object.__setattr__(self, "matchers", tuple(self.matchers))
        self._check_alternation(self.matchers)

    @staticmethod
    def _check_alternation(matchers: Sequence[Matcher]) -> None:
        if matchers and len(matchers) % 2 == 0:
            raise PatternStructureError(
                f"Pattern must end with a node matcher, got {len(matchers)} matchers"
            )
        for i, matcher in enumerate(matchers):
            expected = NodeMatcher if i % 2 == 0 else EdgeMatcher
            if not isinstance(matcher, expected):
                raise PatternStructureError(
                    f"Expected {expected.__name__} at position {i}, "
                    f"got {type(matcher).__name__}: {matcher}"
                )

    def __len__(self) -> int:
        return len(self.matchers)

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self.matchers)

    def node_matchers(self) -> List[NodeMatcher]:
        """Return the node matchers in path order."""
        return list(self.matchers[0::2])

    def edge_matchers(self) -> List[EdgeMatcher]:
        """Return the edge matchers in path order.

        Edge ``i`` connects node ``i`` and node ``i + 1``.
        """
        return list(self.matchers[1::2])

    def base_edge_matchers(self) -> List[EdgeMatcher]:
        """Return the edge matchers with unions unwrapped."""
        return [base for edge in self.edge_matchers() for base in edge.base_edge_matchers()]

    def base_edge_labels(self) -> List[LabeledEdge]:
        """Return the label-bearing base edge matchers.

        Matchers without a fixed label, such as regex edges, are left out.
        """
        return [e for e in self.base_edge_matchers() if isinstance(e, LabeledEdge)]

    def serialize(self) -> str:
        return " ".join(matcher.render() for matcher in self.matchers)

    def __str__(self) -> str:
        return self.serialize()
