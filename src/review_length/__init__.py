"""
Review-length experiments: how well does a sentiment-based classifier predict
review star ratings as reviews get longer and samples get larger?

Key modules:
- core: records, metrics, per-cell seeding, errors
- models: sentiment-score logistic regression plus text classifiers (NB, LASSO, SVM)
- experiments: quantile partitioner, sample-size scheduler, cell trainer,
  the K x K stratified resampling experiment, results export and plots
- prepare_dataset: raw reviews -> labelled, word-counted, sentiment-scored Dataset
- config: experiment configuration and presets
"""

from .config import ExperimentConfig, EXPERIMENT_PRESETS
from .core import Dataset, Label, Record
from .experiments import StratifiedResamplingExperiment, ResultRow, run_stratified_experiment

__version__ = "0.1.0"

__all__ = [
    "ExperimentConfig",
    "EXPERIMENT_PRESETS",
    "Dataset",
    "Label",
    "Record",
    "StratifiedResamplingExperiment",
    "ResultRow",
    "run_stratified_experiment",
]
