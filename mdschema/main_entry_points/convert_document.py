"""Convert markdown or JSON record documents to another format.

Loads one or more ``.md`` / ``.json`` documents, joins them in order and
writes the result in the format implied by the output file's extension.
Without ``--output`` the result is printed to stdout in ``--format``.

Usage:
    mdschema INPUT [INPUT ...] [options]
    python -m mdschema.main_entry_points.convert_document INPUT [INPUT ...] [options]

Options:
    --output: Destination file (format from extension: md, json, sql, ts, py)
    --format: Format printed to stdout when no --output is given
    --unique-depth: Records at or above this depth never merge (default: 0)
    --log-level: Logging level (debug, info, warning, error - default: LOG_LEVEL or info)

Examples:
    # Build an SQL script from a markdown document
    mdschema crew.md --output crew.sql

    # Print TypeScript declarations, keeping top-level records distinct
    mdschema episodes.md --format ts --unique-depth 1

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import argparse
import sys
from pathlib import Path

from mdschema.config import BuildOptions
from mdschema.exceptions import MDSchemaException
from mdschema.logging_config import LoggerManager
from mdschema.modules.document_module.markdown_database import MarkdownDatabase
from mdschema.utils.logging_decorators import configure_logging
from mdschema.utils.logging_utils import get_module_logger

# Get logger for this module
logger = get_module_logger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="mdschema",
        description="Convert markdown record documents to SQL, TypeScript, Python, JSON or markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s crew.md --output crew.sql
  %(prog)s crew.md extra.json --output crew.json
  %(prog)s episodes.md --format ts --unique-depth 1
        """
    )

    parser.add_argument(
        "inputs",
        nargs="+",
        help="Markdown (.md) or JSON (.json) documents, joined in order"
    )

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Destination file; the format follows its extension"
    )

    parser.add_argument(
        "--format",
        choices=BuildOptions.FORMAT_CHOICES,
        default=None,
        help="Format printed to stdout when --output is not given"
    )

    parser.add_argument(
        "--unique-depth",
        type=int,
        default=None,
        help="Records with depth <= this value are never merged (default: MDSCHEMA_UNIQUE_DEPTH or 0)"
    )

    parser.add_argument(
        "--log-level",
        choices=BuildOptions.LOG_LEVEL_CHOICES,
        default=None,
        help="Logging level (default: LOG_LEVEL or info)"
    )

    return parser.parse_args(argv)


def validate_arguments(args):
    """Validate command line arguments."""
    if args.output is None and args.format is None:
        raise ValueError("Either --output or --format is required")

    if args.unique_depth is not None and args.unique_depth < 0:
        raise ValueError("--unique-depth must not be negative")

    for location in args.inputs:
        if not Path(location).is_file():
            raise ValueError(f"Input file does not exist: {location}")


def convert(args) -> str:
    """Load the inputs and write or return the converted document."""
    database = MarkdownDatabase.from_file(args.inputs)

    if args.output:
        return database.to_file(args.output, args.unique_depth)
    return database.render(args.format, args.unique_depth)


@configure_logging()
def main(argv=None):
    """Main entry point."""
    try:
        args = parse_arguments(argv)
        if args.log_level:
            LoggerManager.set_level(args.log_level)

        logger.debug(f"Script arguments: {args}")
        validate_arguments(args)

        content = convert(args)

        if args.output:
            logger.info(f"Converted {len(args.inputs)} document(s) to {args.output}")
        else:
            sys.stdout.write(content)

    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)
    except MDSchemaException as e:
        logger.error(f"Conversion failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Conversion interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
