"""Command-line interface for the revealdeck slide assembler."""

import argparse
import logging
import sys
from typing import Optional

from .config import (
    DEFAULT_OUTPUT_FILENAME,
    ConfigFile,
    config_from_arguments,
    setup_logging,
)
from .errors import DeckError
from .generator import DeckGenerator

VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog='revealdeck',
        description='Assemble markdown slide files into a single reveal.js presentation.'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase logging verbosity (-v info, -vv debug)'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        default=None,
        help='Fail instead of warning when the slide directory has no markdown files'
    )

    parser.add_argument(
        '--workers',
        type=_positive_int,
        default=None,
        help='Number of threads used to read slide files (default: 1)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    from_config = subparsers.add_parser(
        'from-config',
        help='Create the presentation from a YAML config file'
    )
    from_config.add_argument('config_path', help='Path to the config file')

    from_cli = subparsers.add_parser(
        'from-cli',
        help='Create the presentation from a slide directory'
    )
    from_cli.add_argument(
        '-t', '--title',
        help='Title of the presentation (default: Untitled Presentation)'
    )
    from_cli.add_argument('slide_dir', help='Directory to search for slides in')
    from_cli.add_argument('template_file', help='Path to the template file to use')
    from_cli.add_argument('output_dir', help='Directory to place the generated deck in')
    from_cli.add_argument(
        'output_file',
        nargs='?',
        default=DEFAULT_OUTPUT_FILENAME,
        help=f'Output file name (default: {DEFAULT_OUTPUT_FILENAME})'
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)
    level = VERBOSITY_LEVELS[min(args.verbose, len(VERBOSITY_LEVELS) - 1)]

    try:
        if args.command == 'from-config':
            config_file = ConfigFile(args.config_path)
            if args.verbose == 0 and config_file.log_level:
                level = config_file.log_level
            setup_logging(level)
            config = config_file.to_assembly_config(
                strict=args.strict,
                read_workers=args.workers,
            )
        else:
            setup_logging(level)
            config = config_from_arguments(
                args.slide_dir,
                args.template_file,
                args.output_dir,
                args.output_file,
                args.title,
                strict=bool(args.strict),
                read_workers=args.workers or 1,
            )
    except (DeckError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.info(f"Title:     {config.title}")
    logging.info(f"Template:  {config.template_path}")
    logging.info(f"Output:    {config.output_path}")

    try:
        output_path = DeckGenerator(config).generate()
    except DeckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Error generating presentation")
        print(f"Error generating presentation: {e}", file=sys.stderr)
        return 1

    print(f"Slides written to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
