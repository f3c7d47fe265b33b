"""Exclusion rules built from a small, fixed grammar of path patterns.

Only two pattern shapes are recognized:

- ``**/<name>/**`` excludes every path that passes through a directory literally
  named ``<name>``, at any depth.
- ``**/*.<ext>`` excludes every path ending in ``.<ext>``.

Matching is case-insensitive. Any other string parses to a no-op pattern that never
matches, so configuring an unsupported glob is harmless rather than an error.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Set

from clipcat.types import PathType

from .base_rules import BaseExclusionRules

# Patterns that always apply, whatever the user configured
BUILTIN_EXCLUDE_PATTERNS: FrozenSet[str] = frozenset({"**/__pycache__/**", "**/node_modules/**"})

_CONTAINS_DIR_RE = re.compile(r"^\*\*/([^/*?\[\]]+)/\*\*$")
_EXTENSION_RE = re.compile(r"^\*\*/\*\.([^/*?\[\]]+)$")


class PatternKind(str, Enum):
    """Kind of a parsed exclusion pattern.

    Values:
        CONTAINS_DIR: ``**/<name>/**``, the path passes through a directory named ``<name>``
        EXTENSION: ``**/*.<ext>``, the path ends with ``.<ext>``
        NOOP: Unrecognized pattern, never matches
    """

    CONTAINS_DIR = "contains_dir"
    EXTENSION = "extension"
    NOOP = "noop"


@dataclass(frozen=True)
class ExclusionPattern:
    """A single parsed exclusion pattern.

    Patterns compare equal on their kind and lower-cased value, so the same rule
    written with different capitalization collapses to one entry in a set.

    Attributes:
        kind: Which of the recognized shapes this pattern has.
        value: Directory name or extension (without the dot), lower-cased.
        source: The pattern string as configured.

    Example:
        >>> pattern = parse_pattern("**/*.LOG")
        >>> pattern.kind is PatternKind.EXTENSION, pattern.value
        (True, 'log')
        >>> pattern.matches("logs/app.log")
        True
        >>> parse_pattern("**/*.log") == pattern
        True
    """

    kind: PatternKind
    value: str
    source: str = field(default="", compare=False)

    def matches(self, path: str) -> bool:
        """Check whether a root-relative path matches this pattern.

        The path is normalized to forward slashes, lower-cased and anchored with a
        leading slash, so a directory name in the first segment is matched like one
        at any other depth. Directory paths are expected to end with a slash.

        Args:
            path: Path relative to the root of the selection entry.

        Returns:
            True if the path matches, False otherwise. NOOP patterns never match.
        """
        normalized = path.replace("\\", "/").lower()
        if not normalized.startswith("/"):
            normalized = "/" + normalized

        if self.kind is PatternKind.CONTAINS_DIR:
            return f"/{self.value}/" in normalized
        if self.kind is PatternKind.EXTENSION:
            return normalized.rstrip("/").endswith(f".{self.value}")
        return False


def parse_pattern(pattern: str) -> ExclusionPattern:
    """Parse a configured pattern string into an ExclusionPattern.

    Args:
        pattern: A pattern string such as ``"**/dist/**"`` or ``"**/*.map"``.

    Returns:
        The parsed pattern. Strings outside the supported grammar give a NOOP pattern.

    Example:
        >>> parse_pattern("**/Build/**")
        ExclusionPattern(kind=<PatternKind.CONTAINS_DIR: 'contains_dir'>, value='build', source='**/Build/**')
        >>> parse_pattern("*.py").kind
        <PatternKind.NOOP: 'noop'>
    """
    text = pattern.strip().lower()

    match = _CONTAINS_DIR_RE.match(text)
    if match:
        return ExclusionPattern(PatternKind.CONTAINS_DIR, match.group(1), pattern)

    match = _EXTENSION_RE.match(text)
    if match:
        return ExclusionPattern(PatternKind.EXTENSION, match.group(1), pattern)

    return ExclusionPattern(PatternKind.NOOP, text, pattern)


class PatternExclusionRules(BaseExclusionRules):
    """Exclusion rules evaluated as a logical OR over a set of parsed patterns.

    Patterns are parsed once when added. Duplicates collapse and order is irrelevant.

    Attributes:
        patterns (List[ExclusionPattern]): The configured patterns, in a stable order.

    Example:
        >>> rules = PatternExclusionRules(["**/node_modules/**", "**/*.map"])
        >>> rules.exclude("node_modules/react/index.js")
        True
        >>> rules.exclude("src/app.js.map")
        True
        >>> rules.exclude("src/app.js")
        False
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None) -> None:
        """Initialize the rules from pattern strings.

        Args:
            patterns: Pattern strings to add. Defaults to None (no rules).
        """
        self._patterns: Set[ExclusionPattern] = set()
        for pattern in patterns or ():
            self.add_rule(pattern)

    @property
    def patterns(self) -> List[ExclusionPattern]:
        return sorted(self._patterns, key=lambda p: (p.kind.value, p.value))

    def add_rule(self, rule: str) -> None:
        """Parse and add a single pattern.

        Args:
            rule: The pattern string, e.g. ``"**/dist/**"``.
        """
        self._patterns.add(parse_pattern(rule))

    def exclude(self, path: str) -> bool:
        """Check if a root-relative path matches any configured pattern.

        Args:
            path: Path relative to the root, using forward slashes. Directory paths end
                with a slash.

        Returns:
            True if any pattern matches.
        """
        return any(p.matches(path) for p in self._patterns)


def build_exclusion_rules(configured_excludes: Optional[Iterable[str]] = None) -> PatternExclusionRules:
    """Merge the built-in patterns with the user-configured ones.

    Args:
        configured_excludes: User-configured pattern strings. None means no user patterns.

    Returns:
        A rule set containing the union of both pattern sets.

    Example:
        >>> rules = build_exclusion_rules(["**/dist/**"])
        >>> sorted(p.value for p in rules.patterns)
        ['__pycache__', 'dist', 'node_modules']
    """
    rules = PatternExclusionRules(BUILTIN_EXCLUDE_PATTERNS)
    for pattern in configured_excludes or ():
        rules.add_rule(pattern)
    return rules


def is_excluded(path: PathType, rules: BaseExclusionRules, root: PathType, is_dir: bool = False) -> bool:
    """Decide whether a path is excluded, matching it relative to a root.

    The path is expressed relative to ``root`` before being handed to the rules. A
    path outside ``root`` is matched on its absolute form. The root itself is never
    excluded.

    Args:
        path: Path of the file or directory to check.
        rules: Rules to evaluate.
        root: Directory the relative path is anchored at.
        is_dir: Whether ``path`` is a directory. Directories are matched with a
            trailing slash so ``**/<name>/**`` applies to the directory itself.

    Returns:
        True if the path should be left out.

    Example:
        >>> rules = build_exclusion_rules()
        >>> is_excluded("/proj/src/node_modules", rules, "/proj/src", is_dir=True)
        True
        >>> is_excluded("/proj/src/node_modules", rules, "/proj/src")
        False
        >>> is_excluded("/proj/src", rules, "/proj/src", is_dir=True)
        False
    """
    path_obj = Path(path)
    try:
        relative = path_obj.relative_to(root).as_posix()
    except ValueError:
        relative = path_obj.as_posix()

    if relative in ("", "."):
        return False

    if is_dir:
        relative += "/"
    return rules.exclude(relative)
