"""
Weighted Sampler

Incrementally updated frequency table that draws one token with probability
proportional to the number of times it was recorded.

Recording is O(1). Drawing resolves a uniform integer in [0, total) to a token
by binary search over a cumulative-frequency array. The array is built lazily,
the first time a draw happens after a mutation, and then reused until the next
``record`` call.

Example:
    >>> sampler = WeightedSampler()
    >>> for word in ["best", "worst", "best"]:
    ...     sampler.record(word)
    >>> sampler.draw() in {"best", "worst"}
    True
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)

Token = Hashable


class EmptyDistributionError(LookupError):
    """Raised when a draw is requested from a sampler that has recorded nothing."""


@dataclass(frozen=True)
class CumulativeFrequencies:
    """
    Frozen snapshot of a sampler's counts, ready for sampling.

    Attributes:
        tokens (tuple): Tokens in enumeration order.
        cumulative (np.ndarray): int64 offsets; ``cumulative[i]`` is the sum of
            the counts of ``tokens[:i]``, so ``cumulative[0] == 0``.
    """
    tokens: Tuple[Token, ...]
    cumulative: np.ndarray

    @classmethod
    def from_counts(cls, counts: Dict[Token, int]) -> "CumulativeFrequencies":
        tokens = tuple(counts)
        weights = np.fromiter((counts[t] for t in tokens),
                              dtype=np.int64, count=len(tokens))
        cumulative = np.zeros(len(tokens), dtype=np.int64)
        # Offsets are the running sum of every count before each token
        np.cumsum(weights[:-1], out=cumulative[1:])
        return cls(tokens=tokens, cumulative=cumulative)

    def resolve(self, p: int) -> Token:
        """
        Map a draw value in [0, total) to the token whose interval contains it.

        The interval of ``tokens[i]`` is ``[cumulative[i], cumulative[i + 1])``,
        so the owner of ``p`` is the rightmost index with ``cumulative[i] <= p``.
        """
        index = int(np.searchsorted(self.cumulative, p, side="right")) - 1
        return self.tokens[index]


class WeightedSampler:
    """
    Multiset of tokens with integer counts supporting weighted random draws.

    Args:
        rng (np.random.Generator, optional): Source of uniform integers. Any
            object with an ``integers(high)`` method returning a value in
            ``[0, high)`` works. Defaults to a fresh ``np.random.default_rng()``.

    Attributes:
        total (int): Sum of all recorded counts.
    """

    def __init__(self, rng: Optional[Any] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self._counts: Dict[Token, int] = defaultdict(int)
        self.total = 0
        # None means stale; rebuilt on the next draw
        self._resolved: Optional[CumulativeFrequencies] = None

    def record(self, token: Token) -> None:
        """Count one more occurrence of ``token``."""
        self._counts[token] += 1
        self.total += 1
        self._resolved = None

    def draw(self) -> Token:
        """
        Draw one token with probability ``count(token) / total``.

        Returns:
            The drawn token.

        Raises:
            EmptyDistributionError: If nothing has been recorded yet.
        """
        if self.total == 0:
            raise EmptyDistributionError("Cannot draw from an empty sampler")

        if len(self._counts) == 1:
            return next(iter(self._counts))

        if self._resolved is None:
            self._rebuild()

        p = int(self.rng.integers(self.total))
        return self._resolved.resolve(p)

    def _rebuild(self) -> None:
        self._resolved = CumulativeFrequencies.from_counts(self._counts)
        logger.debug("Rebuilt cumulative frequencies for %d tokens (total=%d)",
                     len(self._resolved.tokens), self.total)

    @property
    def is_stale(self) -> bool:
        return self._resolved is None

    def count(self, token: Token) -> int:
        return self._counts.get(token, 0)

    def probability(self, token: Token) -> float:
        """Empirical probability of drawing ``token``; 0.0 when empty."""
        if self.total == 0:
            return 0.0
        return self.count(token) / self.total

    def counts(self) -> Dict[Token, int]:
        """Copy of the token to count mapping."""
        return dict(self._counts)

    def most_common(self, n: Optional[int] = None) -> List[Tuple[Token, int]]:
        ranked = sorted(self._counts.items(), key=lambda item: item[1], reverse=True)
        return ranked if n is None else ranked[:n]

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, token: Token) -> bool:
        return token in self._counts

    def __repr__(self) -> str:
        return f"WeightedSampler(distinct={len(self._counts)}, total={self.total})"
