"""Configuration classes for the solver."""

from enum import Enum

from pydantic import BaseModel, Field


class AlgorithmType(str, Enum):
    """Available search algorithms."""

    BACKTRACKING = "backtracking"


class PreProcessorType(str, Enum):
    """Available pre-processors."""

    CONSISTENCY = "consistency"  # Node consistency then one arc-consistency pass
    NONE = "none"


class AlgorithmConfig(BaseModel):
    """Configuration for algorithm selection."""

    type: AlgorithmType = AlgorithmType.BACKTRACKING


class PreProcessorConfig(BaseModel):
    """Configuration for pre-processor selection."""

    type: PreProcessorType = PreProcessorType.CONSISTENCY


class SolverConfig(BaseModel):
    """Configuration for a solve."""

    algorithm: AlgorithmConfig = AlgorithmConfig()
    preprocessor: PreProcessorConfig = PreProcessorConfig()

    # None = run until the search space is exhausted
    time_limit_seconds: float | None = Field(default=None, gt=0)

    # Re-check the final assignment against every constraint
    verify_solution: bool = True
