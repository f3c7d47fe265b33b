"""Counter for tokens, lines, and characters in a rendered document.

Token counting uses OpenAI's tiktoken library, which is an optional dependency
installed with the ``token_counting`` extra. Without a model (or without tiktoken)
the counter still reports lines and characters.
"""

import importlib.util
from typing import Any, NamedTuple, Optional

from clipcat.exceptions import TokenizationError, TokenizerNotAvailableError


class CountResult(NamedTuple):
    lines: int
    tokens: Optional[int]
    characters: int


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is available.

    Returns:
        True if tiktoken is installed, False otherwise.
    """
    return importlib.util.find_spec("tiktoken") is not None


class TokenCounter:
    """Counts lines, characters and, optionally, tokens of text.

    Attributes:
        model (Optional[str]): Model whose tokenizer is used, or None to skip tokens.
        encoder (Optional[Any]): The tiktoken encoding, if token counting is enabled.

    Example:
        >>> counter = TokenCounter()
        >>> counter.count("// File: a.ts\\nhello")
        CountResult(lines=1, tokens=None, characters=19)

    Raises:
        TokenizerNotAvailableError: If a model is given but tiktoken is not installed.
        ValueError: If tiktoken has no tokenizer for the given model.
    """

    def __init__(self, model: Optional[str] = None) -> None:
        self.model = model
        self.encoder: Optional[Any] = None

        if model is not None:
            if not check_tiktoken_available():
                raise TokenizerNotAvailableError(
                    "Token counting was requested with -t/--tokenizer, but tiktoken is not installed."
                )
            self.encoder = self._get_encoder(model)

    @staticmethod
    def _get_encoder(model: str) -> Any:
        # Imported lazily, tiktoken is optional
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Consider using a well-supported "
                "model like 'gpt-4' (cl100k_base encoding); token counts for other models are "
                "useful approximations."
            )

    @property
    def counts_tokens(self) -> bool:
        return self.encoder is not None

    def count(self, text: str) -> CountResult:
        """Count lines, tokens, and characters in text.

        Args:
            text: The text to analyze.

        Returns:
            CountResult with the number of newlines, tokens (None if token counting
            is disabled) and characters.

        Raises:
            TokenizationError: If token counting is enabled but fails.
        """
        tokens = None
        if self.encoder is not None:
            try:
                tokens = len(self.encoder.encode(text, disallowed_special=()))
            except Exception as e:
                raise TokenizationError(f"Failed to tokenize text: {str(e)}") from e

        return CountResult(lines=text.count("\n"), tokens=tokens, characters=len(text))
