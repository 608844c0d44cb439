"""Tests for symmetry detection."""

import pytest

from relpatterns.classification import ExtractorPattern, is_symmetric


@pytest.mark.parametrize("text", [
    "{arg1} >prep> {rel} <prep< {arg2}",
    "{arg2} >prep> {rel} <prep< {arg1}",
    "{arg1} >a> {rel} >b> * <b< {rel} <a< {arg2}",
    "{arg1} >nsubj|nsubjpass> {rel:postag=VB} <nsubj|nsubjpass< {arg2}",
    "{slot0} >a> {rel} <a< {slot0}",
    "{rel}",
    "{arg1}",
])
def test_symmetric(extractor, text):
    assert is_symmetric(extractor(text))


@pytest.mark.parametrize("text", [
    "{arg1} >nsubj> {rel} <dobj< {arg2}",
    "{arg1} >prep> {rel} >prep> {arg2}",
    "{arg1} >a> {rel1} >b> * <b< {rel2} <a< {arg2}",
    "{arg1} >prep> {rel} <prep< {slot0}",
    "{slot0} >a> {rel} <a< {slot1}",
    "{arg1} >!prep> {rel} <prep< {arg2}",
    "{arg1} >prep> {rel:postag=VB} >a> {rel:postag=NN} <prep< {arg2}",
])
def test_not_symmetric(extractor, text):
    assert not is_symmetric(extractor(text))


def test_empty_pattern_is_symmetric():
    assert is_symmetric(ExtractorPattern(()))


def test_property_matches_function(extractor):
    pattern = extractor("{arg1} >prep> {rel} <prep< {arg2}")
    assert pattern.symmetric is True
