# seeding.py
"""
Per-cell seed derivation.

Every (bucket, step) cell of the experiment grid gets its own random streams,
derived from the global seed alone, so cells can run in any order (or in
parallel) and still reproduce bit-for-bit.
"""

import numpy as np

SAMPLE_STREAM = 0
SPLIT_STREAM = 1


def cell_seed(global_seed: int, bucket: int, step: int, stream: int = SAMPLE_STREAM) -> int:
    """Deterministic 32-bit seed for one stream of one grid cell."""
    ss = np.random.SeedSequence(entropy=int(global_seed), spawn_key=(bucket, step, stream))
    return int(ss.generate_state(1, dtype=np.uint32)[0])


def cell_rng(global_seed: int, bucket: int, step: int, stream: int = SAMPLE_STREAM) -> np.random.Generator:
    return np.random.default_rng(cell_seed(global_seed, bucket, step, stream))
