"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .pattern_rules import (
    BUILTIN_EXCLUDE_PATTERNS,
    ExclusionPattern,
    PatternExclusionRules,
    PatternKind,
    build_exclusion_rules,
    is_excluded,
    parse_pattern,
)

__all__ = [
    "BUILTIN_EXCLUDE_PATTERNS",
    "BaseExclusionRules",
    "ExclusionPattern",
    "PatternExclusionRules",
    "PatternKind",
    "build_exclusion_rules",
    "is_excluded",
    "parse_pattern",
]
