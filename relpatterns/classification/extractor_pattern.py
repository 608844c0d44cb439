"""Patterns intended for binary relation extraction.

An extractor pattern is a dependency pattern whose captures have been lifted
into typed roles. The role comes from the alias prefix:

- ``arg...`` -> argument (the two extracted entities)
- ``rel...`` -> relation (the connecting predicate)
- ``slo...`` -> slot (an auxiliary placeholder)
"""

from dataclasses import dataclass
from typing import List

from ..config import ALIAS_PREFIX_LENGTH, ARGUMENT_PREFIX, RELATION_PREFIX, SLOT_PREFIX
from ..patterns import Capture, Matcher, Pattern, Role
from .symmetry import is_symmetric
from .validity import PatternValidator

ROLE_BY_PREFIX = {
    ARGUMENT_PREFIX: Role.ARGUMENT,
    RELATION_PREFIX: Role.RELATION,
    SLOT_PREFIX: Role.SLOT,
}

_default_validator = PatternValidator()


class AliasClassificationError(ValueError):
    """Raised when a capture alias does not name a known role."""

    def __init__(self, alias: str):
        super().__init__(f"Unknown capture alias: {alias}")
        self.alias = alias


def classify_capture(capture: Capture) -> Capture:
    """Assign a role to a generic capture; typed captures pass through."""
    if capture.is_typed:
        return capture
    role = ROLE_BY_PREFIX.get(capture.alias[:ALIAS_PREFIX_LENGTH])
    if role is None:
        raise AliasClassificationError(capture.alias)
    return capture.with_role(role)


def _classify_matcher(matcher: Matcher) -> Matcher:
    if isinstance(matcher, Capture):
        return classify_capture(matcher)
    return matcher


@dataclass(frozen=True)
class ExtractorPattern(Pattern):
    """A pattern whose captures carry argument, relation or slot roles.

    Construction classifies every generic capture and fails with
    :class:`AliasClassificationError` on the first unknown alias, so an
    instance never holds a partially classified sequence. Edge matchers and
    other node matchers are kept as they are, which keeps the rendering
    identical to the source pattern.
    """

    def __post_init__(self):
        object.__setattr__(
            self, "matchers", tuple(_classify_matcher(m) for m in self.matchers)
        )
        super().__post_init__()

    @classmethod
    def from_pattern(cls, pattern: Pattern) -> "ExtractorPattern":
        return cls(pattern.matchers)

    def captures(self, role: Role) -> List[Capture]:
        """Return the node captures holding ``role``, in path order."""
        return [
            m for m in self.node_matchers()
            if isinstance(m, Capture) and m.role is role
        ]

    @property
    def arguments(self) -> List[Capture]:
        return self.captures(Role.ARGUMENT)

    @property
    def relations(self) -> List[Capture]:
        return self.captures(Role.RELATION)

    @property
    def slots(self) -> List[Capture]:
        return self.captures(Role.SLOT)

    @property
    def valid(self) -> bool:
        """Whether the pattern passes the default validity heuristics."""
        return _default_validator.validate(self)

    @property
    def invalid_reason(self):
        """Reason of the first heuristic that rejects the pattern, or None."""
        return _default_validator.explain(self)

    @property
    def symmetric(self) -> bool:
        """Whether the pattern reads the same when its arguments are swapped,
        such as ``{arg1} >prep> {rel} <prep< {arg2}``."""
        return is_symmetric(self)


def classify(pattern: Pattern) -> ExtractorPattern:
    """Lift the captures of ``pattern`` into typed roles.

    Parameters
    ----------
    pattern : Pattern
        Raw pattern, typically from :func:`relpatterns.patterns.deserialize`

    Returns
    -------
    ExtractorPattern
        Classified pattern of the same length and order

    Raises
    ------
    AliasClassificationError
        If a capture alias starts with none of ``arg``, ``rel`` or ``slo``
    """
    return ExtractorPattern.from_pattern(pattern)
