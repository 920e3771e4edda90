import json
import logging
import os
import random
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, TextIO

import srsly
import typer
from pydantic import ValidationError

from rangekit.ranges import ops
from rangekit.ranges.errors import RangeArgumentError
from rangekit.ranges.models import (
    IntRange,
    RangeAxes,
    RangeQuery,
    RangeQueryResult,
    SortOrder,
)
from rangekit.ranges.queries import evaluate_query, generate_range_queries

app = typer.Typer(help="Closed integer range arithmetic.")
_LOGGER = logging.getLogger(__name__)

RangeArg = Annotated[
    str,
    typer.Argument(
        metavar="FIRST,LAST",
        help="Inclusive bounds, either order (use -- before negatives)",
    ),
]


class _QueryRowError(Exception):
    def __init__(self, *, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(reason)


def _parse_bounds(value: str) -> IntRange:
    """Parse 'first,last' into an IntRange. Either order is allowed."""
    try:
        parts = value.split(",")
        if len(parts) != 2:
            raise typer.BadParameter(
                f"Invalid range '{value}': expected 'FIRST,LAST' (e.g., '5,1')"
            )
        first_s, last_s = parts[0].strip(), parts[1].strip()
        if not first_s or not last_s:
            raise typer.BadParameter(
                f"Invalid range '{value}': expected 'FIRST,LAST' (e.g., '5,1')"
            )
        return IntRange(int(first_s), int(last_s))
    except ValueError as err:
        raise typer.BadParameter(
            f"Invalid range '{value}': expected 'FIRST,LAST' (e.g., '5,1')"
        ) from err


def _parse_range(value: str | None) -> tuple[int, int] | None:
    """Parse 'lo,hi' into tuple. Raises typer.BadParameter on invalid input."""
    if value is None:
        return None
    lo, hi = _parse_bounds(value)
    if lo > hi:
        raise typer.BadParameter(
            f"Invalid range '{value}': low must be <= high"
        )
    return (lo, hi)


def _to_json(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


def _run(fn: Callable[..., Any], *args: Any) -> None:
    try:
        result = fn(*args)
    except RangeArgumentError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err
    typer.echo(srsly.json_dumps(_to_json(result)))


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@app.command("congruent")
def congruent_cmd(range1: RangeArg, range2: RangeArg) -> None:
    """Check whether two ranges have the same bounds in any order."""
    _run(ops.congruent, _parse_bounds(range1), _parse_bounds(range2))


@app.command("contiguous")
def contiguous_cmd(range1: RangeArg, range2: RangeArg) -> None:
    """Check whether two ranges touch without overlapping."""
    _run(ops.contiguous, _parse_bounds(range1), _parse_bounds(range2))


@app.command("overlaps")
def overlaps_cmd(range1: RangeArg, range2: RangeArg) -> None:
    """Check whether two ranges share at least one integer."""
    _run(ops.overlaps, _parse_bounds(range1), _parse_bounds(range2))


@app.command("intersection")
def intersection_cmd(range1: RangeArg, range2: RangeArg) -> None:
    """Print the shared span of two ranges, or null."""
    _run(ops.intersection, _parse_bounds(range1), _parse_bounds(range2))


@app.command("union")
def union_cmd(range1: RangeArg, range2: RangeArg) -> None:
    """Print the combined span of two touching ranges, or null."""
    _run(ops.union, _parse_bounds(range1), _parse_bounds(range2))


@app.command("reverse")
def reverse_cmd(range1: RangeArg) -> None:
    """Swap the bounds of a range."""
    _run(ops.reverse, _parse_bounds(range1))


@app.command("sort")
def sort_cmd(
    range1: RangeArg,
    order: Annotated[
        SortOrder,
        typer.Option("--order", help="ascending or descending"),
    ] = SortOrder.ASCENDING,
) -> None:
    """Order the bounds of a range."""
    _run(ops.sort, _parse_bounds(range1), order)


@app.command("contains")
def contains_cmd(
    range1: RangeArg,
    value: Annotated[int, typer.Argument(help="Integer to look up")],
) -> None:
    """Check whether an integer lies within a range."""
    _run(ops.contains, _parse_bounds(range1), value)


def _safe_unlink(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


@contextmanager
def _atomic_output(output: Path) -> Iterator[TextIO]:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output.name}.",
        suffix=".tmp",
        dir=output.parent,
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            yield handle
        os.replace(tmp, output)
    except Exception:
        _safe_unlink(tmp)
        raise


def _write_result_line(handle: TextIO, result: RangeQueryResult) -> None:
    handle.write(srsly.json_dumps(result.model_dump(mode="json")))
    handle.write("\n")


def _iter_validated_queries(input_file: Path) -> Iterator[RangeQuery]:
    with input_file.open("rb") as input_handle:
        for line_number, raw_line in enumerate(input_handle, start=1):
            try:
                stripped = raw_line.decode("utf-8").strip()
            except UnicodeDecodeError as err:
                raise _QueryRowError(
                    line_number=line_number,
                    reason=f"invalid UTF-8 ({err.reason})",
                ) from err
            if not stripped:
                continue
            try:
                raw = json.loads(stripped)
            except json.JSONDecodeError as err:
                raise _QueryRowError(
                    line_number=line_number,
                    reason=f"malformed JSON ({err.msg})",
                ) from err
            if not isinstance(raw, dict):
                raise _QueryRowError(
                    line_number=line_number,
                    reason="expected a JSON object",
                )
            # Earlier results are recomputed, not trusted.
            raw.pop("output", None)
            try:
                yield RangeQuery.model_validate(raw)
            except ValidationError as err:
                raise _QueryRowError(
                    line_number=line_number,
                    reason=f"invalid query ({err.error_count()} errors)",
                ) from err


@app.command()
def generate(
    output: Annotated[
        Path, typer.Option("--output", "-o", help="Output JSONL file")
    ],
    seed: Annotated[
        int | None, typer.Option("--seed", "-s", help="Random seed")
    ] = None,
    endpoint_range: Annotated[
        str | None,
        typer.Option("--endpoint-range", help="Endpoint range (lo,hi)"),
    ] = None,
    max_span_range: Annotated[
        str | None,
        typer.Option("--max-span-range", help="Span range (lo,hi)"),
    ] = None,
    n_typical: Annotated[
        int | None,
        typer.Option("--n-typical", help="Sampled pairs per operation"),
    ] = None,
) -> None:
    """Generate labelled range queries to JSONL file."""
    kwargs: dict[str, Any] = {}
    if endpoint_range is not None:
        kwargs["endpoint_range"] = _parse_range(endpoint_range)
    if max_span_range is not None:
        kwargs["max_span_range"] = _parse_range(max_span_range)
    if n_typical is not None:
        kwargs["n_typical"] = n_typical
    try:
        axes = RangeAxes(**kwargs)
    except ValidationError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err

    queries = generate_range_queries(axes, random.Random(seed))
    try:
        with _atomic_output(output) as handle:
            for query in queries:
                _write_result_line(handle, query)
    except OSError as err:
        typer.echo(f"Error: cannot write {output}: {err.strerror}", err=True)
        raise typer.Exit(1) from err
    _LOGGER.debug("wrote %d queries to %s", len(queries), output)
    typer.echo(f"Generated {len(queries)} queries to {output}")


@app.command()
def evaluate(
    input_file: Annotated[
        Path, typer.Argument(help="Input JSONL file of range queries")
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output JSONL file"),
    ] = None,
) -> None:
    """Evaluate JSONL range queries and write results."""
    if not input_file.is_file():
        typer.echo(f"Error: input file not found: {input_file}", err=True)
        raise typer.Exit(1)

    try:
        results = [
            evaluate_query(query)
            for query in _iter_validated_queries(input_file)
        ]
    except _QueryRowError as err:
        typer.echo(f"Error: line {err.line_number}: {err.reason}", err=True)
        raise typer.Exit(1) from err
    _LOGGER.debug("evaluated %d queries from %s", len(results), input_file)

    if output is None:
        for result in results:
            typer.echo(srsly.json_dumps(result.model_dump(mode="json")))
        return

    try:
        with _atomic_output(output) as handle:
            for result in results:
                _write_result_line(handle, result)
    except OSError as err:
        typer.echo(f"Error: cannot write {output}: {err.strerror}", err=True)
        raise typer.Exit(1) from err
    typer.echo(f"Evaluated {len(results)} queries to {output}")


if __name__ == "__main__":
    app()
