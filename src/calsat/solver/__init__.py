"""Solver package - calendar date constraint satisfaction.

This package provides:
- Unary and binary date constraints over six relational operators
- Node and arc consistency pre-processing of per-meeting date domains
- Chronological backtracking search

Main entry points:
- solve: Function returning one date per meeting, or None
- SolverService: Solve a Problem and report statistics
- ProblemValidator: Validate caller input and build a Problem

Configuration:
- SolverConfig: Pre-processor, algorithm and time limit selection
"""

# Algorithms
from .algorithms import BacktrackingSearch, create_algorithm

# Configuration
from .config import (
    AlgorithmConfig,
    AlgorithmType,
    PreProcessorConfig,
    PreProcessorType,
    SolverConfig,
)

# Consistency checks
from .consistency import assignment_consistent, find_violations, pair_consistent

# Constraint model
from .constraints import (
    BinaryDateConstraint,
    DateConstraint,
    Operator,
    UnaryDateConstraint,
    evaluate,
)

# Core dataclasses
from .core import (
    UNASSIGNED,
    Assigned,
    Assignment,
    PreProcessResult,
    Problem,
    SearchResult,
    SolveResult,
    Unassigned,
)
from .domains import DomainStore, date_range

# Pre-processors
from .preprocessors import ConsistencyPreProcessor, create_preprocessor

# Protocols
from .protocols import PreProcessor, SearchAlgorithm

# High-level service
from .service import SolverService, solve

# Input validation
from .validator import ProblemValidator

__all__ = [
    # Constraint model
    "Operator",
    "evaluate",
    "UnaryDateConstraint",
    "BinaryDateConstraint",
    "DateConstraint",
    # Core dataclasses
    "Assigned",
    "Unassigned",
    "UNASSIGNED",
    "Assignment",
    "Problem",
    "PreProcessResult",
    "SearchResult",
    "SolveResult",
    # Domains
    "DomainStore",
    "date_range",
    # Consistency
    "pair_consistent",
    "assignment_consistent",
    "find_violations",
    # Configuration
    "SolverConfig",
    "AlgorithmConfig",
    "AlgorithmType",
    "PreProcessorConfig",
    "PreProcessorType",
    # Protocols
    "PreProcessor",
    "SearchAlgorithm",
    # Service
    "SolverService",
    "solve",
    "ProblemValidator",
    # Algorithms
    "BacktrackingSearch",
    "create_algorithm",
    # Pre-processors
    "ConsistencyPreProcessor",
    "create_preprocessor",
]
