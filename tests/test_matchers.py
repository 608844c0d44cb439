"""Tests for the matcher model and the pattern value."""

import pytest

from relpatterns.patterns import (
    AttributeNode,
    Capture,
    ConjunctiveNode,
    Direction,
    EdgeUnion,
    LabeledEdge,
    Pattern,
    PatternStructureError,
    RegexEdge,
    Role,
    TrivialNode,
    base_node_matchers,
)


class TestDirection:
    def test_flip(self):
        assert Direction.DOWN.flip() is Direction.UP
        assert Direction.UP.flip() is Direction.DOWN


class TestLabeledEdge:
    def test_flip_reverses_direction_only(self):
        edge = LabeledEdge("prep_of", Direction.DOWN)
        assert edge.flip() == LabeledEdge("prep_of", Direction.UP)

    def test_double_flip_is_identity(self):
        edge = LabeledEdge("nsubj", Direction.UP, negated=True)
        assert edge.flip().flip() == edge

    def test_equality_includes_negation(self):
        assert LabeledEdge("dobj") != LabeledEdge("dobj", negated=True)

    def test_render(self):
        assert LabeledEdge("prep_of").render() == ">prep_of>"
        assert LabeledEdge("dep", Direction.UP, negated=True).render() == "<!dep<"

    def test_empty_label_rejected(self):
        with pytest.raises(ValueError):
            LabeledEdge("")


class TestCompositeEdges:
    def test_union_flip(self):
        union = EdgeUnion((LabeledEdge("nsubj"), LabeledEdge("nsubjpass")))
        flipped = union.flip()
        assert flipped.direction is Direction.UP
        assert flipped.render() == "<nsubj|nsubjpass<"

    def test_union_base_edges(self):
        union = EdgeUnion((LabeledEdge("a"), LabeledEdge("b", negated=True)))
        assert union.base_edge_matchers() == [LabeledEdge("a"), LabeledEdge("b", negated=True)]

    def test_union_mixed_directions_rejected(self):
        with pytest.raises(ValueError):
            EdgeUnion((LabeledEdge("a", Direction.DOWN), LabeledEdge("b", Direction.UP)))

    def test_regex_edge_invalid_expression(self):
        with pytest.raises(ValueError):
            RegexEdge("prep_(of")

    def test_regex_edge_flip(self):
        assert RegexEdge("prep_.*").flip().render() == "<regex:prep_.*<"


class TestCapture:
    def test_structural_equality(self):
        inner = AttributeNode("postag", "VBD")
        assert Capture("rel", inner, Role.RELATION) == Capture("rel", inner, Role.RELATION)

    def test_role_is_part_of_equality(self):
        assert Capture("x", role=Role.SLOT) != Capture("x", role=Role.ARGUMENT)

    def test_render_hides_trivial_inner_and_role(self):
        assert Capture("arg1", role=Role.ARGUMENT).render() == "{arg1}"
        assert Capture("rel", AttributeNode("postag", "VBD")).render() == "{rel:postag=VBD}"

    def test_with_inner_keeps_alias_and_role(self):
        capture = Capture("slot0", role=Role.SLOT).with_inner(AttributeNode("text", "of"))
        assert capture.alias == "slot0"
        assert capture.role is Role.SLOT
        assert capture.inner == AttributeNode("text", "of")

    def test_empty_alias_rejected(self):
        with pytest.raises(ValueError):
            Capture("")


class TestNodeMatchers:
    def test_unknown_attribute_rejected(self):
        with pytest.raises(ValueError):
            AttributeNode("color", "red")

    def test_base_node_matchers_flatten(self):
        postag = AttributeNode("postag", "NN")
        nn = LabeledEdge("nn")
        capture = Capture("arg1", ConjunctiveNode((postag, nn)))
        assert base_node_matchers(capture) == [postag, nn]

    def test_base_node_matchers_of_plain_node(self):
        assert base_node_matchers(TrivialNode()) == [TrivialNode()]


class TestPattern:
    def test_views(self):
        pattern = Pattern([
            Capture("arg1"), LabeledEdge("nsubj", Direction.UP),
            Capture("rel"), LabeledEdge("dobj"), Capture("arg2"),
        ])
        assert len(pattern) == 5
        assert pattern.node_matchers() == [Capture("arg1"), Capture("rel"), Capture("arg2")]
        assert pattern.edge_matchers() == [LabeledEdge("nsubj", Direction.UP), LabeledEdge("dobj")]
        assert len(pattern.node_matchers()) == len(pattern.edge_matchers()) + 1

    def test_base_edge_labels_skip_unlabeled(self):
        pattern = Pattern([
            Capture("arg1"), EdgeUnion((LabeledEdge("a"), LabeledEdge("b"))),
            Capture("rel"), RegexEdge("prep_.*"), Capture("arg2"),
        ])
        assert [e.label for e in pattern.base_edge_labels()] == ["a", "b"]

    def test_empty_pattern(self):
        pattern = Pattern(())
        assert pattern.node_matchers() == []
        assert pattern.edge_matchers() == []
        assert str(pattern) == ""

    def test_even_length_rejected(self):
        with pytest.raises(PatternStructureError):
            Pattern([Capture("arg1"), LabeledEdge("nsubj")])

    def test_misplaced_matcher_rejected(self):
        with pytest.raises(PatternStructureError):
            Pattern([Capture("arg1"), Capture("rel"), Capture("arg2")])

    def test_patterns_are_hashable(self):
        pattern = Pattern([Capture("arg1"), LabeledEdge("nsubj"), Capture("rel")])
        assert len({pattern, Pattern(list(pattern.matchers))}) == 1
