"""Command-line interface for calsat."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .exceptions import CalsatError
from .logger import setup_logger
from .parser import load_problem
from .solution import read_solution_file, write_solution_file
from .solver import (
    BinaryDateConstraint,
    DateConstraint,
    PreProcessorConfig,
    PreProcessorType,
    Problem,
    SolveResult,
    SolverService,
    UnaryDateConstraint,
    find_violations,
)
from .unified_config import UnifiedConfig, discover_config

EXIT_NO_SOLUTION = 2

app = typer.Typer(
    name="calsat",
    help="Calendar satisfaction solver - schedule meetings under date constraints",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=pruning and outcome, "
            "2=every candidate date, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: calsat_config.yaml beside the problem)",
        ),
    ] = None,
) -> None:
    """Global options for calsat commands."""
    setup_logger(verbose)
    ctx.obj = {"config_path": config}


def _load(ctx: typer.Context, problem_file: Path) -> tuple[Problem, UnifiedConfig]:
    """Load the problem and its configuration, exiting with status 1 on error."""
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        problem = load_problem(problem_file)
        unified = discover_config(problem_file, config_path) or UnifiedConfig()
    except (CalsatError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    return problem, unified


def _display_solution(result: SolveResult, unified: UnifiedConfig) -> None:
    """Print one ``name  date`` line per meeting, names padded to a common width."""
    named = result.named_solution() or {}
    width = max((len(name) for name in named), default=0)
    for name, day in named.items():
        typer.echo(f"{name.ljust(width)}  {day.strftime(unified.output.date_format)}")


def _display_statistics(result: SolveResult) -> None:
    """Print preprocessing and search statistics to stderr."""
    typer.echo("\nStatistics:", err=True)
    if result.preprocess_result:
        typer.echo(
            f"  Dates removed by preprocessing: {result.preprocess_result.total_removed}",
            err=True,
        )
    typer.echo(f"  Domain sizes: {result.domain_sizes}", err=True)
    metadata = result.search_metadata
    typer.echo(f"  Candidate dates tried: {metadata.get('nodes', 0)}", err=True)
    typer.echo(f"  Backtracks: {metadata.get('backtracks', 0)}", err=True)


@app.command()
def solve(
    ctx: typer.Context,
    problem_file: Annotated[Path, typer.Argument(help="Path to the problem YAML file")],
    *,
    time_limit: Annotated[
        float | None,
        typer.Option("--time-limit", "-t", help="Give up after this many seconds", min=0.001),
    ] = None,
    no_preprocess: Annotated[
        bool,
        typer.Option("--no-preprocess", help="Skip node and arc consistency"),
    ] = False,
    stats: Annotated[
        bool,
        typer.Option("--stats", help="Print preprocessing and search statistics"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the solution as YAML to this file"),
    ] = None,
) -> None:
    """Find a date for every meeting that satisfies all constraints."""
    problem, unified = _load(ctx, problem_file)

    solver_config = unified.solver
    if time_limit is not None:
        solver_config = solver_config.model_copy(update={"time_limit_seconds": time_limit})
    if no_preprocess:
        solver_config = solver_config.model_copy(
            update={"preprocessor": PreProcessorConfig(type=PreProcessorType.NONE)}
        )

    try:
        result = SolverService(problem, solver_config).solve()
    except CalsatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if stats or unified.output.show_statistics:
        _display_statistics(result)

    if not result.satisfiable:
        typer.echo("No solution")
        raise typer.Exit(EXIT_NO_SOLUTION)

    if output:
        write_solution_file(output, result)
        typer.echo(f"Solution written to {output}")
    else:
        _display_solution(result, unified)


@app.command()
def check(
    ctx: typer.Context,
    problem_file: Annotated[Path, typer.Argument(help="Path to the problem YAML file")],
    solution_file: Annotated[Path, typer.Argument(help="Path to a solution YAML file")],
) -> None:
    """Verify that a solution file satisfies every constraint of a problem."""
    problem, _ = _load(ctx, problem_file)
    try:
        values = read_solution_file(solution_file, problem)
    except CalsatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    problems: list[str] = []
    for index, day in enumerate(values):
        if not problem.range_start <= day <= problem.range_end:
            problems.append(
                f"{problem.name_of(index)} on {day} is outside "
                f"{problem.range_start}..{problem.range_end}"
            )
    for constraint in find_violations(values, problem.constraints):
        problems.append(f"Violated: {_describe(problem, constraint)}")

    if problems:
        for line in problems:
            typer.echo(f"  - {line}")
        raise typer.Exit(1)

    typer.echo(f"OK: all {len(problem.constraints)} constraints satisfied")


def _describe(problem: Problem, constraint: DateConstraint) -> str:
    """Render a constraint with meeting names instead of indices."""
    match constraint:
        case UnaryDateConstraint(variable=variable, op=op, value=value):
            return f"{problem.name_of(variable)} {op} {value.isoformat()}"
        case BinaryDateConstraint(left=left, op=op, right=right):
            return f"{problem.name_of(left)} {op} {problem.name_of(right)}"


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    main()
