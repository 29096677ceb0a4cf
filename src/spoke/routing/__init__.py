"""Request classification by method and route template.

Provides PathTemplate (route matcher), Rule (class + method + templates) and
RequestClassifier (ordered rule evaluation).
"""

from .classifier import RequestClassifier, classify
from .path_template import (
    LiteralSegment,
    ParameterSegment,
    PathTemplate,
    has_custom_verb,
)
from .rules import DEFAULT_RULES, Rule

__all__ = [
    "DEFAULT_RULES",
    "LiteralSegment",
    "ParameterSegment",
    "PathTemplate",
    "RequestClassifier",
    "Rule",
    "classify",
    "has_custom_verb",
]
