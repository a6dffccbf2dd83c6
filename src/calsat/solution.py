"""Solution files: write a solve result to YAML and read it back for checking."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .parser import load_yaml
from .schemas import SolutionSchema
from .solver import Problem, SolveResult


def write_solution_file(path: Path, result: SolveResult) -> None:
    """Write the solution of ``result`` as ``{solution: {meeting: date}}``.

    Raises:
        ValueError: If the result has no solution
    """
    named = result.named_solution()
    if named is None:
        raise ValueError("Cannot write a solution file for an unsatisfiable problem")

    output: dict[str, Any] = {
        "solution": {name: day.isoformat() for name, day in named.items()},
    }
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(output, f, default_flow_style=False, sort_keys=False)


def read_solution_file(path: Path | str, problem: Problem) -> list[date]:
    """Read a solution file and order its dates by meeting index.

    Raises:
        ParseError: If the file is missing or is not valid YAML
        ValidationError: If meetings are missing, unknown, or dates are invalid
    """
    data = load_yaml(path)
    if not isinstance(data, dict):
        raise ParseError("Solution file must contain a dictionary at the root level")

    try:
        schema = SolutionSchema(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid solution structure: {e}") from e

    expected = [problem.name_of(i) for i in range(problem.n_meetings)]
    unknown = sorted(set(schema.solution) - set(expected))
    if unknown:
        raise ValidationError(f"Solution names unknown meetings: {', '.join(unknown)}")

    missing = [name for name in expected if name not in schema.solution]
    if missing:
        raise ValidationError(f"Solution is missing meetings: {', '.join(missing)}")

    return [schema.solution[name] for name in expected]
