# config.py
from dataclasses import dataclass, field, replace
from typing import Any, Dict

from .core.errors import InvalidConfig
from .models.models_registry import resolve_model_name

UNIFORM = "uniform"
MICRO_BALANCED = "micro_balanced"
MODES = (UNIFORM, MICRO_BALANCED)

ON_CELL_ERROR = ("raise", "nan")

# ---------------- Experiment presets ----------------
# exp1: sample sizes bounded by the smallest bucket, labels left as drawn
# exp2: micro-balanced, every sample half POS / half NEG

EXPERIMENT_PRESETS: Dict[str, Dict[str, Any]] = {
    "exp1": {"k": 5, "mode": UNIFORM, "model": "logreg"},
    "exp2": {"k": 5, "mode": MICRO_BALANCED, "model": "logreg"},
}


@dataclass
class ExperimentConfig:
    k: int = 5
    mode: str = UNIFORM
    seed: int = 42
    model: str = "logreg"
    model_params: Dict[str, Any] = field(default_factory=dict)
    test_size: float = 0.25
    threshold: float = 0.5
    stratify_split: bool = False
    n_jobs: int = 1
    on_cell_error: str = "raise"

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "ExperimentConfig":
        if name not in EXPERIMENT_PRESETS:
            raise InvalidConfig(
                f"Unknown preset: {name} (choose from {sorted(EXPERIMENT_PRESETS)})"
            )
        return cls(**{**EXPERIMENT_PRESETS[name], **overrides}).validate()

    def with_overrides(self, **overrides) -> "ExperimentConfig":
        return replace(self, **overrides).validate()

    def validate(self) -> "ExperimentConfig":
        if not isinstance(self.k, int) or self.k < 2:
            raise InvalidConfig(f"k must be an integer >= 2, got {self.k!r}")
        if self.mode not in MODES:
            raise InvalidConfig(f"mode must be one of {MODES}, got {self.mode!r}")
        if self.seed < 0:
            raise InvalidConfig(f"seed must be non-negative, got {self.seed}")
        if not 0.0 < self.test_size < 1.0:
            raise InvalidConfig(f"test_size must be in (0, 1), got {self.test_size}")
        if not 0.0 < self.threshold < 1.0:
            raise InvalidConfig(f"threshold must be in (0, 1), got {self.threshold}")
        if self.n_jobs < 1:
            raise InvalidConfig(f"n_jobs must be >= 1, got {self.n_jobs}")
        if self.on_cell_error not in ON_CELL_ERROR:
            raise InvalidConfig(
                f"on_cell_error must be one of {ON_CELL_ERROR}, got {self.on_cell_error!r}"
            )
        self.model = resolve_model_name(self.model)
        return self

    def trainer_params(self) -> Dict[str, Any]:
        params = dict(self.model_params)
        if self.model == "logreg":
            params.setdefault("threshold", self.threshold)
        return params

    def to_dict(self) -> Dict[str, Any]:
        return {
            "k": self.k,
            "mode": self.mode,
            "seed": self.seed,
            "model": self.model,
            "model_params": dict(self.model_params),
            "test_size": self.test_size,
            "threshold": self.threshold,
            "stratify_split": self.stratify_split,
            "n_jobs": self.n_jobs,
            "on_cell_error": self.on_cell_error,
        }
