"""Entry point: python -m codebreaker_codegen

Reads codegen.yaml and the OpenAPI document it names, then writes the model
and API packages (and test scaffolding, when enabled).
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from .codegen import check, generate
from .config import load_config
from .context_builder import build_context
from .errors import CodegenError
from .loader import load_spec


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="codebreaker_codegen",
        description="Generate the Codebreaker client from its OpenAPI document.",
    )
    parser.add_argument("--config", type=Path, help="Path to codegen.yaml")
    parser.add_argument("--spec", type=Path, help="Override the input OpenAPI document")
    parser.add_argument("--output-dir", type=Path, help="Override the output directory")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Report out-of-date generated files instead of writing them",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        overrides = {}
        if args.spec:
            overrides["input_spec"] = args.spec.resolve()
        if args.output_dir:
            overrides["output_dir"] = args.output_dir.resolve()
        config = config.model_copy(update=overrides)

        spec = load_spec(config.input_spec)
        context = build_context(spec, config)

        if args.check:
            stale = check(context, config)
            for path in stale:
                print(f"out of date: {path}", file=sys.stderr)
            return 1 if stale else 0

        generate(context, config)
    except CodegenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
