"""Configuration constants for extraction pattern classification."""

# Capture roles are assigned from the first characters of the alias
ALIAS_PREFIX_LENGTH = 3
ARGUMENT_PREFIX = "arg"
RELATION_PREFIX = "rel"
SLOT_PREFIX = "slo"

# Node attributes accepted inside a node matcher, e.g. postag=NN
NODE_ATTRIBUTES = ("postag", "text", "lemma", "regex")

# Edge labels inspected by the default validity rules
UNSPECIFIED_DEP_LABEL = "dep"
PREPOSITION_MARKER = "prep"
PREPOSITION_EDGE_COUNT = 2
CONJUNCTION_LABELS = ("conj_and", "conj_or")
CONJUNCTION_PREFIX = "conj"
NOUN_COMPOUND_LABEL = "nn"

# spaCy language used for a blank vocabulary when no model is supplied
SPACY_LANG = "en"

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"
