# errors.py
"""Exceptions raised by the review-length experiments."""


class ExperimentError(ValueError):
    """Base class for every error raised by the evaluator."""


class InvalidConfig(ExperimentError):
    """Bad run configuration (K, mode, model) or an unusable dataset."""


class InsufficientData(ExperimentError):
    """A cell sample cannot be split into a usable train/test pair."""


class SamplingExhausted(ExperimentError):
    """A requested sample is larger than the pool it is drawn from."""

    def __init__(self, bucket: int, requested: int, available: int, label=None):
        self.bucket = bucket
        self.requested = requested
        self.available = available
        self.label = label
        pool = f"bucket {bucket}" if label is None else f"bucket {bucket} ({label})"
        super().__init__(
            f"cannot draw {requested} records from {pool}: only {available} available"
        )
