# Core components for the review-length experiments

from .errors import ExperimentError, InvalidConfig, InsufficientData, SamplingExhausted
from .records import Label, Record, Dataset, label_codes, label_balance
from .metrics import accuracy_score, confusion_matrix, decide
from .seeding import cell_seed, cell_rng, SAMPLE_STREAM, SPLIT_STREAM

__all__ = [
    "ExperimentError",
    "InvalidConfig",
    "InsufficientData",
    "SamplingExhausted",
    "Label",
    "Record",
    "Dataset",
    "label_codes",
    "label_balance",
    "accuracy_score",
    "confusion_matrix",
    "decide",
    "cell_seed",
    "cell_rng",
    "SAMPLE_STREAM",
    "SPLIT_STREAM",
]
