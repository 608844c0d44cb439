"""Symmetry detection for extraction patterns."""

from ..patterns import Capture, EdgeMatcher, Matcher, Pattern, Role


def _is_argument(matcher: Matcher) -> bool:
    return isinstance(matcher, Capture) and matcher.role is Role.ARGUMENT


def _mirrors(forward: Matcher, backward: Matcher) -> bool:
    # arguments are the two interchangeable endpoints, so they need not agree
    if _is_argument(forward) and _is_argument(backward):
        return True
    if isinstance(forward, EdgeMatcher) and isinstance(backward, EdgeMatcher):
        return forward == backward.flip()
    return forward == backward


def is_symmetric(pattern: Pattern) -> bool:
    """Check whether a pattern is its own mirror image.

    The matcher sequence is compared position by position with its reversal.
    Argument captures always agree, edges must be flips of each other and
    every other matcher must be equal. For example
    ``{arg1} >prep> {rel} <prep< {arg2}`` is symmetric: swapping the
    arguments yields the same extraction, so only one of the two mirrored
    extractions needs to be emitted.
    """
    matchers = list(pattern.matchers)
    return all(_mirrors(f, b) for f, b in zip(matchers, reversed(matchers)))
