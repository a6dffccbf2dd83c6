"""YAML parser for calsat problem files."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .schemas import ProblemSchema
from .solver import (
    BinaryDateConstraint,
    DateConstraint,
    Operator,
    Problem,
    ProblemValidator,
    UnaryDateConstraint,
)

# Longer operators first so "<=" is not read as "<" followed by "="
_CONSTRAINT_RE = re.compile(
    r"^\s*(?P<left>[^\s=!<>]+)\s*(?P<op>==|!=|>=|<=|>|<)\s*(?P<right>\S+)\s*$"
)


def load_yaml(path: Path | str) -> Any:
    """Read a YAML file, raising ParseError on missing files or bad YAML."""
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e


class ProblemParser:
    """Parser for problem YAML files.

    Constraints are written as ``<meeting> <op> <meeting-or-date>``, where a
    meeting is referenced by name or index and a right-hand ISO date makes the
    constraint unary.
    """

    def __init__(self, validator: ProblemValidator | None = None):
        self.validator = validator or ProblemValidator()

    def parse_file(self, file_path: Path | str) -> Problem:
        """Parse a YAML file into a Problem."""
        data = load_yaml(file_path)
        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")
        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> Problem:
        """Parse loaded YAML data into a Problem."""
        try:
            schema = ProblemSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid problem structure: {e}") from e

        if isinstance(schema.meetings, int):
            n_meetings = schema.meetings
            names: list[str] = []
        else:
            n_meetings = len(schema.meetings)
            names = list(schema.meetings)

        constraints = [self.parse_constraint(text, names) for text in schema.constraints]
        return self.validator.build_problem(
            n_meetings,
            schema.range.start,
            schema.range.end,
            constraints,
            meeting_names=names,
        )

    def parse_constraint(self, text: str, names: Sequence[str] = ()) -> DateConstraint:
        """Parse a single constraint such as ``kickoff < review`` or ``0 >= 2025-03-10``."""
        match = _CONSTRAINT_RE.match(text)
        if not match:
            raise ParseError(
                f"Invalid constraint '{text}'. Expected '<meeting> <op> <meeting or date>' "
                f"with op one of {', '.join(op.value for op in Operator)}"
            )

        left_text, op_text, right_text = match.group("left", "op", "right")
        left = self._resolve_meeting(left_text, names, text)
        op = Operator.parse(op_text)

        if right_text not in names:
            literal = self._parse_iso_date(right_text)
            if literal is not None:
                return UnaryDateConstraint(left, op, literal)

        right = self._resolve_meeting(right_text, names, text)
        return BinaryDateConstraint(left, op, right)

    def _resolve_meeting(self, token: str, names: Sequence[str], text: str) -> int:
        if token in names:
            return list(names).index(token)
        if token.isdigit():
            return int(token)
        raise ParseError(f"Unknown meeting '{token}' in constraint '{text}'")

    def _parse_iso_date(self, token: str) -> date | None:
        if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", token):
            return None
        try:
            return date.fromisoformat(token)
        except ValueError as e:
            raise ParseError(f"Invalid date '{token}': {e}") from e


def load_problem(path: Path | str) -> Problem:
    """Load and validate a problem file."""
    return ProblemParser().parse_file(path)
