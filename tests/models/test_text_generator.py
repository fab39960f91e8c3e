#!/usr/bin/env python3
"""
Tests for the TextGenerator driving a MarkovChain from raw text.
"""

import pytest
import numpy as np
from unittest.mock import MagicMock, patch

from wordchain.models.markov_chain import MarkovChain
from wordchain.models.text_generator import TextGenerator
from wordchain.models.weighted_sampler import EmptyDistributionError
from wordchain.utils.config import ChainConfig


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.debug = MagicMock()
    return logger


@pytest.fixture
def generator(mock_logger):
    with patch("wordchain.models.text_generator.ResourceMonitor"):
        yield TextGenerator(
            chain=MarkovChain(rng=np.random.default_rng(0)),
            logger=mock_logger,
        )


class TestTokenize:
    def test_tokenize_strips_punctuation_and_digits(self, generator):
        assert generator.tokenize("Hello, world! 123") == ["hello", "world"]

    def test_tokenize_splits_on_punctuation_without_space(self, generator):
        assert generator.tokenize("one.two,three") == ["one", "two", "three"]

    def test_tokenize_keeps_case_when_configured(self, mock_logger):
        generator = TextGenerator(lowercase=False, logger=mock_logger)
        assert generator.tokenize("The Cat") == ["The", "Cat"]

    def test_tokenize_empty_text(self, generator):
        assert generator.tokenize("") == []
        assert generator.tokenize("  123 !!") == []


class TestTrain:
    def test_train_feeds_chain(self, generator):
        assert generator.train("It was the best of times, it was the worst of times.") == 12
        assert generator.chain.successors("the") == {"best": 1, "worst": 1}

    def test_train_many_reports_metrics(self, generator):
        total = generator.train_many(["a b", "c d e"])

        assert total == 5
        generator.resource_monitor.start.assert_called_once_with("markov_training")
        metrics = generator.resource_monitor.stop.call_args.kwargs["extra_metrics"]
        assert metrics == {"documents": 2, "tokens": 5, "states": 5}


class TestGenerate:
    def test_generate_follows_deterministic_transitions(self, generator):
        generator.train("it was the best of times it was the worst of times")
        assert generator.generate("It", length=2) == "It was the"

    def test_generate_default_length(self, generator):
        generator.default_length = 4
        generator.train("a a a")
        assert generator.generate("a") == "a a a a a"

    def test_generate_zero_length_returns_prompt(self, generator):
        generator.train("a b")
        assert generator.generate("  a  ", length=0) == "a"

    def test_generate_empty_prompt_uses_global_distribution(self, generator):
        generator.train("solo")
        assert generator.generate("", length=3) == "solo solo solo"

    def test_generate_logs_summary_metrics(self, generator, mock_logger):
        generator.train("a b a b")
        generator.generate("x a", length=3)

        mock_logger.info.assert_called_once_with(
            "Generated text",
            extra={"metrics": {"prompt_tokens": 2, "generated": 3}})

    def test_generate_untrained_raises(self, generator):
        with pytest.raises(EmptyDistributionError):
            generator.generate("anything", length=1)

    def test_generate_negative_length(self, generator):
        generator.train("a b")
        with pytest.raises(ValueError, match="non-negative"):
            generator.generate("a", length=-1)


def test_from_config_is_reproducible_with_seed():
    config = ChainConfig(seed=42, generate_length=20)
    text = "the cat sat on the mat the cat jumped over the mat the dog sat"

    outputs = []
    for _ in range(2):
        with patch("wordchain.models.text_generator.get_logger") as get_logger:
            get_logger.return_value = MagicMock()
            generator = TextGenerator.from_config(config)
        generator.train(text)
        outputs.append(generator.generate("the"))

    assert outputs[0] == outputs[1]
    assert len(outputs[0].split()) == 21
    get_logger.assert_called_with("wordchain", log_file=None, level="INFO")
