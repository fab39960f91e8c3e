"""
MarkovChain Text Generator

Drives a MarkovChain from raw text: tokenizes text into words, feeds them to
the chain one at a time, and generates new sequences by repeatedly predicting
the next word and feeding it back in.

Example:
    >>> generator = TextGenerator()
    >>> generator.train("it was the best of times it was the worst of times")
    12
    >>> generator.generate("it", length=2)
    'it was the'
"""

import logging

from wordchain.models.markov_chain import MarkovChain
from wordchain.utils.loggers.json_logger import get_logger, log_json
from wordchain.utils.system_monitoring import ResourceMonitor


class TextGenerator:
    def __init__(self, chain=None, lowercase=True, default_length=10, logger=None):
        """
        Args:
            chain (MarkovChain, optional): Chain to train and sample; a new one if None
            lowercase (bool): Lowercase tokens so "The" and "the" share a state
            default_length (int): Words generated when ``generate`` gets no length
            logger (logging.Logger, optional): Logger for training/generation metrics
        """
        self.chain = chain if chain is not None else MarkovChain()
        self.lowercase = lowercase
        self.default_length = default_length
        self.logger = logger or logging.getLogger(__name__)
        self.resource_monitor = ResourceMonitor(logger=self.logger)

    @classmethod
    def from_config(cls, config):
        """
        Build a generator from a ChainConfig.

        Args:
            config (ChainConfig): Loaded configuration

        Returns:
            TextGenerator: Generator with a seeded chain and a JSON logger
        """
        logger = get_logger("wordchain", log_file=config.log_file,
                            level=config.log_level)
        return cls(
            chain=MarkovChain(rng=config.make_rng()),
            lowercase=config.lowercase,
            default_length=config.generate_length,
            logger=logger,
        )

    def tokenize(self, text):
        """
        Split text into word tokens, dropping punctuation and digits.

        Args:
            text (str): Raw text

        Returns:
            list: Word tokens

        Example:
            >>> TextGenerator().tokenize("Hello, world! 123")
            ['hello', 'world']
        """
        # Keep words glued by punctuation apart once it is removed
        text = text.replace(".", ". ").replace(",", ", ")
        text = "".join(char for char in text if char.isalpha() or char.isspace())
        tokens = text.split()
        if self.lowercase:
            tokens = [token.lower() for token in tokens]
        return tokens

    def train(self, text):
        """
        Feed every token of ``text`` to the chain.

        Successive calls continue the same sequence: the last word of one
        text precedes the first word of the next.

        Returns:
            int: Number of tokens trained
        """
        return self.chain.train_many(self.tokenize(text))

    def train_many(self, texts):
        """
        Train on a corpus of texts, logging token counts and resource usage.

        Args:
            texts (iterable of str): Corpus

        Returns:
            int: Total number of tokens trained
        """
        self.resource_monitor.start("markov_training")
        total_tokens = 0
        documents = 0
        for text in texts:
            total_tokens += self.train(text)
            documents += 1

        self.resource_monitor.stop(extra_metrics={
            "documents": documents,
            "tokens": total_tokens,
            "states": len(self.chain)
        })
        return total_tokens

    def generate(self, prompt, length=None):
        """
        Continue ``prompt`` with words sampled from the chain.

        Generation starts from the last word of the prompt. A prompt without
        any word starts from the global word distribution.

        Args:
            prompt (str): Text to continue
            length (int, optional): Words to generate; ``default_length`` if None

        Returns:
            str: The prompt followed by the generated words

        Raises:
            ValueError: If ``length`` is negative
            EmptyDistributionError: If the chain has not been trained
        """
        length = self.default_length if length is None else length
        if length < 0:
            raise ValueError("length must be non-negative")

        tokens = self.tokenize(prompt)
        # "" is never produced by tokenize, so it resolves to the global sampler
        current = tokens[-1] if tokens else ""

        words = []
        for _ in range(length):
            current = self.chain.predict(current)
            words.append(current)

        log_json(self.logger, "Generated text",
                 {"prompt_tokens": len(tokens), "generated": len(words)})
        return " ".join([prompt.strip()] + words).strip()
