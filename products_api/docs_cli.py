#!/usr/bin/env python3
"""
Command-line interface for exporting the products API OpenAPI document.

The document is generated from the same route table the server mounts, so
the exported file always matches what the running service validates.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Export the products API OpenAPI document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  products-api-docs
  products-api-docs --output openapi.json
  products-api-docs --indent 2
        """
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file path (default: stdout)"
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print with the given indentation"
    )

    return parser.parse_args(argv)


def build_openapi() -> dict:
    from products_api.main import create_app

    return create_app().openapi()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    document = json.dumps(build_openapi(), indent=args.indent)

    if args.output:
        try:
            args.output.write_text(document + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing '{args.output}': {e}", file=sys.stderr)
            return 1
    else:
        print(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
