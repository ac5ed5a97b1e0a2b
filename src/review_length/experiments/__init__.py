# Experimental components for the review-length study

from .partition import QuantilePartitioner, QuantileBucket, quantile_boundaries, assign_buckets
from .sampling import SampleScheduler, SampleSpec, UNIFORM, MICRO_BALANCED, MODES
from .trainer import CellTrainer, CellEvaluation
from .stratified_experiment import (
    StratifiedResamplingExperiment,
    ResultRow,
    RESULT_COLUMNS,
    run_stratified_experiment,
)
from .results import results_to_frame, summarize, save_results, load_results, accuracy_grid

__all__ = [
    "QuantilePartitioner",
    "QuantileBucket",
    "quantile_boundaries",
    "assign_buckets",
    "SampleScheduler",
    "SampleSpec",
    "UNIFORM",
    "MICRO_BALANCED",
    "MODES",
    "CellTrainer",
    "CellEvaluation",
    "StratifiedResamplingExperiment",
    "ResultRow",
    "RESULT_COLUMNS",
    "run_stratified_experiment",
    "results_to_frame",
    "summarize",
    "save_results",
    "load_results",
    "accuracy_grid",
]
