"""
First-order Markov chain over word tokens.

Tokens are fed one at a time with ``train``. Every token is counted in a
global sampler, and as a successor of the token trained just before it.
``predict`` draws a successor for a token, falling back to the global
distribution for tokens that never had one.

Example:
    >>> chain = MarkovChain()
    >>> chain.train_many("it was the best of times it was the worst of times".split())
    >>> chain.predict("it")
    'was'
"""

from typing import Any, Dict, Iterable, Optional
import logging

import numpy as np

from wordchain.models.weighted_sampler import Token, WeightedSampler

logger = logging.getLogger(__name__)


class MarkovChain:
    """
    Token to successor-distribution model with a global fallback.

    Args:
        rng (np.random.Generator, optional): Random source shared by every
            sampler the chain creates.

    Attributes:
        samplers (dict): Token to the WeightedSampler of its successors.
        source (WeightedSampler): Global sampler counting every trained token.
    """

    def __init__(self, rng: Optional[Any] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.samplers: Dict[Token, WeightedSampler] = {}
        self.source = WeightedSampler(rng=self.rng)
        self._current: Optional[WeightedSampler] = None

    def train(self, token: Token) -> None:
        """
        Add ``token`` to the training sequence.

        Args:
            token: The next token of the corpus.
        """
        self.source.record(token)
        if self._current is not None:
            self._current.record(token)

        sampler = self.samplers.get(token)
        if sampler is None:
            sampler = WeightedSampler(rng=self.rng)
            self.samplers[token] = sampler
            logger.debug("New state %r (%d states)", token, len(self.samplers))
        self._current = sampler

    def train_many(self, tokens: Iterable[Token]) -> int:
        """
        Train on every token of ``tokens`` in order.

        Returns:
            int: Number of tokens trained.
        """
        trained = 0
        for token in tokens:
            self.train(token)
            trained += 1
        return trained

    def predict(self, token: Token) -> Token:
        """
        Draw the token that follows ``token``.

        Tokens without any observed successor (never trained, or trained only
        as the very last token) are answered from the global distribution.

        Raises:
            EmptyDistributionError: If the chain has not been trained. A token
                whose only occurrence ended the training sequence does not
                raise; it is answered from the global distribution.
        """
        sampler = self.samplers.get(token)
        if sampler is None or sampler.total == 0:
            return self.source.draw()
        return sampler.draw()

    def successors(self, token: Token) -> Dict[Token, int]:
        """Successor counts observed after ``token``; empty when unknown."""
        sampler = self.samplers.get(token)
        return sampler.counts() if sampler is not None else {}

    @property
    def is_trained(self) -> bool:
        return self.source.total > 0

    def __len__(self) -> int:
        return len(self.samplers)

    def __contains__(self, token: Token) -> bool:
        return token in self.samplers
