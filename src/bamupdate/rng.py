"""
Random Sources

Draws in bamupdate go through a RandomSource: an object with

    uniform()  -> float in [0, 1)
    next_key() -> fresh JAX PRNG key for model-specific draws

JaxRandomSource keeps one jax.random key and splits it on every request, so
a source seeded with the same integer replays the same sequence.

If an update call is given no source, it uses the process-wide default from
get_default_source(). The default is created on first use, exactly once,
under a lock, and seeded from the BAMUPDATE_RNG_SEED environment variable
(default 42). Callers that need determinism or isolation should pass their
own source instead.
"""

import os
import threading
from typing import Optional, Protocol

from . import jax_config  # noqa: F401

import jax
import jax.random as random

# Log-likelihood ratios and parameter buffers are float64
jax.config.update("jax_enable_x64", True)

DEFAULT_SEED_ENV = "BAMUPDATE_RNG_SEED"


class RandomSource(Protocol):
    """Anything the sampler and the model draw methods can pull randomness from."""

    def uniform(self) -> float:
        ...

    def next_key(self):
        ...


def gen_rng_key(rng_seed: int):
    """Generate a JAX PRNGKey from an integer seed."""
    return jax.random.PRNGKey(rng_seed)


class JaxRandomSource:
    """
    RandomSource backed by a splitting jax.random key.

    Args:
        seed: Integer seed. Ignored if ``key`` is given.
        key: An existing JAX PRNG key to start from.
    """

    def __init__(self, seed: int = 42, key=None):
        self.seed = seed
        self._key = gen_rng_key(seed) if key is None else key

    def next_key(self):
        self._key, subkey = random.split(self._key)
        return subkey

    def uniform(self) -> float:
        return float(random.uniform(self.next_key()))

    def spawn(self) -> 'JaxRandomSource':
        """Independent child source, e.g. for a second chain."""
        return JaxRandomSource(seed=self.seed, key=self.next_key())


_DEFAULT_SOURCE: Optional[JaxRandomSource] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_source() -> JaxRandomSource:
    """
    Return the process-wide default source, creating it on first call.

    The seed is read from BAMUPDATE_RNG_SEED once, at creation.
    """
    global _DEFAULT_SOURCE
    if _DEFAULT_SOURCE is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_SOURCE is None:
                seed = int(os.environ.get(DEFAULT_SEED_ENV, "42"))
                _DEFAULT_SOURCE = JaxRandomSource(seed)
    return _DEFAULT_SOURCE


def reset_default_source() -> None:
    """Drop the process-wide default so the next call recreates it. Primarily for testing."""
    global _DEFAULT_SOURCE
    with _DEFAULT_LOCK:
        _DEFAULT_SOURCE = None
