"""Tests for capture classification."""

import pytest

from relpatterns.classification import (
    AliasClassificationError,
    ExtractorPattern,
    classify,
    classify_capture,
)
from relpatterns.patterns import AttributeNode, Capture, LabeledEdge, Role, deserialize


class TestClassify:
    def test_roles_from_alias_prefix(self, extractor):
        pattern = extractor("{arg1} >nsubj> {rel} >prep_of> {slot0} <dobj< {arg2}")
        roles = [m.role for m in pattern.node_matchers()]
        assert roles == [Role.ARGUMENT, Role.RELATION, Role.SLOT, Role.ARGUMENT]

    def test_only_prefix_matters(self, extractor):
        pattern = extractor("{argument} >nsubj> {relation} >dobj> {slob}")
        assert [m.role for m in pattern.node_matchers()] == [
            Role.ARGUMENT, Role.RELATION, Role.SLOT,
        ]

    def test_alias_and_inner_preserved(self):
        raw = deserialize("{arg1:postag=NN} <nsubj< {rel:lemma=eat} >dobj> {arg2}")
        classified = classify(raw)
        assert len(classified) == len(raw)
        for before, after in zip(raw.node_matchers(), classified.node_matchers()):
            assert after.alias == before.alias
            assert after.inner == before.inner

    def test_edges_untouched(self):
        raw = deserialize("{arg1} <nsubj|nsubjpass< {rel} >!dep> {arg2}")
        assert classify(raw).edge_matchers() == raw.edge_matchers()

    def test_rendering_preserved(self):
        text = "{arg1:postag=NN;>nn>} <nsubj< {rel:postag=VBD} >prep_in> * >pobj> {arg2}"
        raw = deserialize(text)
        assert str(classify(raw)) == str(raw) == text

    def test_idempotent(self, extractor):
        pattern = extractor("{arg1} >nsubj> {rel} <dobj< {arg2}")
        assert classify(pattern) == pattern

    def test_typed_capture_passes_through(self):
        capture = Capture("anything", role=Role.SLOT)
        assert classify_capture(capture) is capture

    def test_unknown_alias(self):
        with pytest.raises(AliasClassificationError) as exc_info:
            classify(deserialize("{arg1} >nsubj> {foo} <dobj< {arg2}"))
        assert exc_info.value.alias == "foo"

    def test_short_alias(self):
        with pytest.raises(AliasClassificationError) as exc_info:
            classify(deserialize("{ar} >nsubj> {rel}"))
        assert exc_info.value.alias == "ar"

    def test_prefix_is_case_sensitive(self):
        with pytest.raises(AliasClassificationError):
            classify(deserialize("{Arg1} >nsubj> {rel}"))


class TestExtractorPattern:
    def test_not_equal_to_raw_pattern(self):
        raw = deserialize("{arg1} >nsubj> {rel}")
        assert classify(raw) != raw

    def test_equal_when_matchers_equal(self, extractor):
        text = "{arg1} >nsubj> {rel} <dobj< {arg2}"
        assert extractor(text) == extractor(text)

    def test_constructor_classifies(self):
        pattern = ExtractorPattern([Capture("arg1"), LabeledEdge("nsubj"), Capture("rel")])
        assert pattern.node_matchers() == [
            Capture("arg1", role=Role.ARGUMENT),
            Capture("rel", role=Role.RELATION),
        ]

    def test_role_accessors(self, extractor):
        pattern = extractor("{arg1} >nsubj> {rel:postag=VB} >prep> {slot0} >pobj> {arg2}")
        assert [c.alias for c in pattern.arguments] == ["arg1", "arg2"]
        assert pattern.relations == [
            Capture("rel", AttributeNode("postag", "VB"), Role.RELATION),
        ]
        assert [c.alias for c in pattern.slots] == ["slot0"]

    def test_scenario_valid_not_symmetric(self, extractor):
        pattern = extractor("{arg1} >nsubj> {rel} <dobj< {arg2}")
        assert pattern.valid is True
        assert pattern.invalid_reason is None
        assert pattern.symmetric is False
