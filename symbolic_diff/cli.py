"""
Command line driver: differentiate one of the preset expressions and print it.
"""

import argparse
import sys
from typing import List, Optional

from .config import configure
from .exceptions import SymbolicDiffException
from .expression_tree import SymPyVerifier
from .logging_system import LogLevel, get_logger, log_milestone, log_warning
from .presets import PRESETS


def _log_level(verbosity: int) -> LogLevel:
    level = min(LogLevel.MINIMAL.value + verbosity, LogLevel.VERBOSE.value)
    return LogLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symbolic-diff",
        description="Differentiate a polynomial expression tree and print the simplified result"
    )
    parser.add_argument("--example", choices=sorted(PRESETS), default="product",
                        help="Preset expression to differentiate (default: product, x^3 * x^2)")
    parser.add_argument("--verify", action="store_true",
                        help="Cross-check the derivative against SymPy")
    parser.add_argument("--latex", action="store_true",
                        help="Also print the derivative as LaTeX")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (repeatable)")
    parser.add_argument("--log-file", default=None,
                        help="Also write log records to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure(log_level=_log_level(args.verbose),
              log_to_file=args.log_file is not None,
              log_file_path=args.log_file)

    expression = PRESETS[args.example]()
    log_milestone(f"Differentiating {args.example}: {expression.to_string()}")

    try:
        derivative = expression.differentiate()
        print(f"\nOutput: {derivative.to_string()}\n")

        verifier = SymPyVerifier()
        if args.latex:
            print(f"LaTeX: {verifier.latex_representation(derivative)}")
        if args.verify:
            verified = verifier.verify_derivative(expression, derivative)
            print(f"SymPy agrees: {verified}")
            if not verified:
                log_warning(f"SymPy disagrees with the derivative of {expression.to_string()}")
                return 1

        get_logger().result_summary({
            'expression': expression.to_string(),
            'derivative': derivative.to_string(),
            'derivative_size': derivative.size(),
            'derivative_depth': derivative.depth(),
        })
    except SymbolicDiffException as e:
        get_logger().critical(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
