from unittest.mock import MagicMock, patch

import pytest

from clipcat.exceptions import TokenizationError, TokenizerNotAvailableError
from clipcat.token_counter import CountResult, TokenCounter, check_tiktoken_available


@pytest.fixture
def mock_tiktoken_available():
    with patch("importlib.util.find_spec", return_value=True):
        yield


@pytest.fixture
def mock_tiktoken_unavailable():
    with patch("importlib.util.find_spec", return_value=None):
        yield


@pytest.fixture
def mock_encoder():
    encoder = MagicMock()
    encoder.encode.side_effect = lambda text, **kwargs: [0] * len(text.split())
    return encoder


def test_check_tiktoken(mock_tiktoken_unavailable):
    assert check_tiktoken_available() is False


def test_counts_without_model():
    counter = TokenCounter()
    assert not counter.counts_tokens
    assert counter.count("// File: a.ts\nhello\n") == CountResult(lines=2, tokens=None, characters=20)


def test_model_without_tiktoken(mock_tiktoken_unavailable):
    with pytest.raises(TokenizerNotAvailableError, match="-t/--tokenizer"):
        TokenCounter(model="gpt-4")


def test_counts_tokens_with_model(mock_tiktoken_available, mock_encoder):
    with patch.object(TokenCounter, "_get_encoder", return_value=mock_encoder):
        counter = TokenCounter(model="gpt-4")
        result = counter.count("one two three")

    assert counter.counts_tokens
    assert result.tokens == 3
    assert result.lines == 0
    assert result.characters == 13


def test_tokenization_failure(mock_tiktoken_available, mock_encoder):
    mock_encoder.encode.side_effect = RuntimeError("boom")
    with patch.object(TokenCounter, "_get_encoder", return_value=mock_encoder):
        counter = TokenCounter(model="gpt-4")
        with pytest.raises(TokenizationError, match="boom"):
            counter.count("text")


def test_unknown_model(mock_tiktoken_available):
    fake_tiktoken = MagicMock()
    fake_tiktoken.encoding_for_model.side_effect = KeyError("nope")
    with patch.dict("sys.modules", {"tiktoken": fake_tiktoken}):
        with pytest.raises(ValueError, match="Could not load tokenizer for model 'not-a-model'"):
            TokenCounter(model="not-a-model")
