"""Random byte sources for the CXNN instruction."""

from typing import Callable

import jax
import jax.numpy as jnp

RandomByteSource = Callable[[], int]


class JaxRandomBytes:
    """Draws bytes from ``jax.random``, splitting the key on every call."""

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._key = jax.random.PRNGKey(seed)

    def __call__(self) -> int:
        self._key, subkey = jax.random.split(self._key)
        return int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"
