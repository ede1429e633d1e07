"""Numerus CLI - deterministic command-line interface to the numeric backends.

Usage:
    python -m numerus calc <operation> <operand>... [--backend B] [--scale N]
                           [--precision P] [--mode M]
    python -m numerus backends [--scale N]

Operations:
    binary: add, subtract, multiply, divide, mod, compare, min, max, power
    unary:  abs, ceil, floor, round, sqrt, integer_part, fractional_part, negate

Backend and scale default to NUMERUS_BACKEND / NUMERUS_SCALE.

Exit codes:
    0: Success
    1: Internal error (unexpected)
    2: Numeric or usage error (division by zero, unsupported operation, ...)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Final

from pydantic import ValidationError

from numerus.backends import Backend, BackendKind, available_backends, create_backend
from numerus.config import EngineConfigError, load_engine_config
from numerus.errors import (
    CapabilityUnavailableError,
    DivisionByZeroError,
    EmptyInputError,
    InvalidRangeError,
    NumberParseError,
    NumerusError,
    UnsupportedOperationError,
)
from numerus.models import BackendInfo, ErrorResult, OperationResult
from numerus.rounding import RoundingMode

logger = logging.getLogger(__name__)

BINARY_OPERATIONS: Final[frozenset[str]] = frozenset(
    {"add", "subtract", "multiply", "divide", "mod", "compare", "min", "max", "power"}
)
UNARY_OPERATIONS: Final[frozenset[str]] = frozenset(
    {"abs", "ceil", "floor", "round", "sqrt", "integer_part", "fractional_part", "negate"}
)

# Most specific first; the first isinstance match wins.
ERROR_CODES: Final[tuple[tuple[type[NumerusError], str], ...]] = (
    (DivisionByZeroError, "DIVISION_BY_ZERO"),
    (CapabilityUnavailableError, "CAPABILITY_UNAVAILABLE"),
    (InvalidRangeError, "INVALID_RANGE"),
    (EmptyInputError, "EMPTY_INPUT"),
    (NumberParseError, "PARSE_ERROR"),
    (EngineConfigError, "INVALID_CONFIG"),
    (UnsupportedOperationError, "UNSUPPORTED_OPERATION"),
)

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


def _output_json(data: dict[str, Any]) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _error_code(error: NumerusError) -> str:
    for error_type, code in ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return "NUMERUS_ERROR"


def _output_error(code: str, message: str, operation: str | None = None) -> None:
    result = ErrorResult(code=code, message=message, operation=operation)
    _output_json({"error": result.model_dump(mode="json")})


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got '{text}'") from e
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return value


def _rounding_mode(text: str) -> RoundingMode:
    try:
        return RoundingMode.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _parse_exponent(text: str) -> int | float:
    """Parse an exponent, keeping integral values as int."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError as e:
        raise NumberParseError(text) from e


def _run_operation(backend: Backend, args: argparse.Namespace) -> int | float | str:
    operation: str = args.operation
    operands: list[str] = args.operands

    match operation:
        case "round":
            return backend.round(operands[0], args.precision, args.mode)
        case "power":
            return backend.power(operands[0], _parse_exponent(operands[1]))
        case _:
            result: int | float | str = getattr(backend, operation)(*operands)
            return result


def _resolve_backend(args: argparse.Namespace) -> Backend:
    config = load_engine_config()
    kind = BackendKind.parse(args.backend) if args.backend is not None else config.backend
    scale = args.scale if args.scale is not None else config.scale
    return create_backend(kind, scale)


def cmd_calc(args: argparse.Namespace) -> int:
    """Execute calc command with deterministic JSON output.

    Exit codes:
        0: Operation succeeded
        2: Wrong operand count or a typed numeric error
    """
    expected = 2 if args.operation in BINARY_OPERATIONS else 1
    if len(args.operands) != expected:
        _output_error(
            "INVALID_ARITY",
            f"'{args.operation}' takes {expected} operand(s), got {len(args.operands)}",
            args.operation,
        )
        return 2

    backend = _resolve_backend(args)
    value = _run_operation(backend, args)

    try:
        result = OperationResult(
            operation=args.operation,
            backend=backend.kind,
            scale=backend.scale,
            operands=args.operands,
            result=value,
            native_type=type(value).__name__,
        )
    except ValidationError as e:
        _output_error(
            "INVALID_RESULT",
            f"Result {value!r} has no decimal representation: {e}",
            args.operation,
        )
        return 2

    _output_json(result.model_dump(mode="json"))
    return 0


def cmd_backends(args: argparse.Namespace) -> int:
    """Report which backends construct on this runtime."""
    scale = args.scale if args.scale is not None else load_engine_config().scale
    report = available_backends(scale)

    backends = [
        BackendInfo(
            kind=kind,
            available=reason is None,
            scale=None if kind is BackendKind.NATIVE else scale,
            reason=reason,
        ).model_dump(mode="json")
        for kind, reason in report.items()
    ]
    selected = next((kind for kind, reason in report.items() if reason is None), None)

    _output_json(
        {
            "backends": backends,
            "selected": selected.value if selected is not None else None,
        }
    )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="numerus",
        description="Numerus - pluggable arbitrary-precision decimal engine CLI",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    calc_parser = subparsers.add_parser(
        "calc",
        help="Run one backend operation",
    )
    calc_parser.add_argument(
        "operation",
        choices=sorted(BINARY_OPERATIONS | UNARY_OPERATIONS),
        help="Operation to run",
    )
    calc_parser.add_argument(
        "operands",
        nargs="+",
        help="Operands as decimal strings",
    )
    calc_parser.add_argument(
        "--backend",
        default=None,
        help="Backend selector: auto, native, fixed-point, string-decimal",
    )
    calc_parser.add_argument(
        "--scale",
        type=_non_negative_int,
        default=None,
        help="Fractional digits for fixed-scale backends",
    )
    calc_parser.add_argument(
        "--precision",
        type=int,
        default=0,
        help="Fractional digits for round (default: 0)",
    )
    calc_parser.add_argument(
        "--mode",
        type=_rounding_mode,
        default=None,
        help="Rounding mode for round (default: half-away-from-zero)",
    )

    backends_parser = subparsers.add_parser(
        "backends",
        help="Report backend availability",
    )
    backends_parser.add_argument(
        "--scale",
        type=_non_negative_int,
        default=None,
        help="Scale to probe (default: NUMERUS_SCALE or 10)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Exit codes:
        0: Success
        1: Internal error (unexpected)
        2: Numeric or usage error
    """
    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

        if args.command is None:
            parser.print_help()
            return 0

        if args.command == "calc":
            return cmd_calc(args)

        if args.command == "backends":
            return cmd_backends(args)

        return 0

    except NumerusError as e:
        _output_error(_error_code(e), e.message, e.operation)
        return 2

    except Exception as e:
        logger.exception("Unexpected error")
        _output_error("INTERNAL_ERROR", str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
