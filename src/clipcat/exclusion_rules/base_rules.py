from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    This class serves as a contract for the rule sets consulted while a selection is
    resolved. Implementations decide, for a path expressed relative to its root,
    whether the path is left out of the document. Evaluation must be pure: no
    filesystem access and no mutation of the rule set.

    Example:
        >>> class TmpRules(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith('.tmp')
        >>> rules = TmpRules()
        >>> rules.exclude("build/temp.tmp")
        True
        >>> rules.exclude("main.py")
        False
        >>> rules.add_rule("**/*.log")
        Traceback (most recent call last):
        ...
        NotImplementedError: TmpRules doesn't support adding individual rules.
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): The file or directory path to check, relative to the root of the
                selection entry being processed and using forward slashes. Directory paths
                end with a slash.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Rule types that don't support individual rule addition use this default
        implementation, which raises NotImplementedError.

        Args:
            rule (str): The exclusion rule to add.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
