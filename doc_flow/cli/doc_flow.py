"""
Command line entry point: extracts documentation models from JavaScript files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from tqdm import tqdm

from doc_flow.core.config import load_config
from doc_flow.core.errors import AutodocError
from doc_flow.core.library import Autodoc


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("files", nargs='+', help="JavaScript source files to document.")
    parser.add_argument("--config", help="Path to configuration YAML file (default: docflow.config.yaml)")
    parser.add_argument("--namespaces", help="Comma-separated namespaces to include (default: all).")
    parser.add_argument("--tags", help="Comma-separated tags; only docs carrying one of them are included.")
    parser.add_argument("--grep", help="Only include members whose name matches this regular expression.")
    parser.add_argument("--markdown", action="store_true", default=None,
                        help="Render descriptions as Markdown (HTML output).")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 1 if any comment failed to parse.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")


def _resolve_config(args: argparse.Namespace):
    cli_overrides = {
        'namespaces': args.namespaces,
        'tags': args.tags,
        'grep': args.grep,
        'render_markdown': args.markdown,
    }
    return load_config(config_path=args.config, cli_args=cli_overrides)


def _parse_files(args: argparse.Namespace) -> Dict[str, Any]:
    config = _resolve_config(args)
    results = {}
    for file_path in tqdm(args.files, desc="Parsing files", disable=len(args.files) < 2):
        source = Path(file_path).read_text(encoding='utf-8')
        results[file_path] = Autodoc(config).parse(source)
    return results


def _error_count(results: Dict[str, Any]) -> int:
    count = 0
    for file_path, library in results.items():
        for error in library.errors:
            print(f"⚠️  {file_path}:{error.line}: {error.stage}: {error.message}", file=sys.stderr)
            count += 1
    return count


def _run_parse(args: argparse.Namespace) -> int:
    results = _parse_files(args)
    output = {file_path: library.to_dict() for file_path, library in results.items()}
    text = json.dumps(output, indent=2, ensure_ascii=False, default=str)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"📄 Documentation model exported to {args.output}", file=sys.stderr)
    else:
        print(text)

    errors = _error_count(results)
    return 1 if args.strict and errors else 0


def _run_examples(args: argparse.Namespace) -> int:
    results = _parse_files(args)
    broken: List[str] = []
    for file_path, library in results.items():
        for doc in library.docs:
            for example in doc.examples.items:
                status = "BROKEN" if example.broken else "ok"
                print(f"{file_path}:{example.line_number}\t{doc.name}\t{example.actual} => {example.expected}\t{status}")
                if example.broken:
                    broken.append(f"{file_path}:{example.line_number}")

    if broken:
        print(f"⚠️  {len(broken)} example(s) could not be parsed: {', '.join(broken)}", file=sys.stderr)
    errors = _error_count(results)
    return 1 if args.strict and (errors or broken) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="DocFlow CLI: extract functions, namespaces, types, examples and benchmarks from doc comments."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Extract the documentation model as JSON")
    _add_common_flags(parse)
    parse.add_argument("--output", help="Write the JSON model to a file instead of stdout.")
    parse.set_defaults(func=_run_parse)

    examples = subparsers.add_parser("examples", help="List every example with its source line")
    _add_common_flags(examples)
    examples.set_defaults(func=_run_examples)

    return parser


def main(argv=None):
    """Main entry point for the documentation extractor."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)

    try:
        exit_code = args.func(args)
    except (AutodocError, OSError) as e:
        print(f"\n❌ {e}", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
