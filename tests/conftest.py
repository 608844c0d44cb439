"""Pytest configuration and fixtures."""

import pytest

from relpatterns.classification import ExtractorPattern, classify
from relpatterns.patterns import deserialize


@pytest.fixture
def extractor():
    """Parse and classify a pattern string."""

    def _extractor(text: str) -> ExtractorPattern:
        return classify(deserialize(text))

    return _extractor
