"""
Command Line Interface for the album pipeline.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AlbumConfig
from .errors import RootUnreadableError
from .pipeline import Pipeline
from .progress import PipelineProgress
from .reporter import Reporter
from .status import create_app, serve


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    logging.getLogger('PIL').setLevel(logging.WARNING)
    
    return logging.getLogger('albumgen')


def get_config(args: argparse.Namespace) -> AlbumConfig:
    """Get configuration from environment and CLI overrides."""
    config = AlbumConfig.from_env()
    
    if args.root:
        config.root = args.root
    if args.dry_run:
        config.dry_run = True
    if args.http:
        config.http_address = args.http
    if args.workers is not None:
        config.workers = args.workers
    if args.no_serve:
        config.serve = False
    
    return config


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='albumgen',
        description='Fingerprint the photos under an album root and build their thumbnails',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Hash records and thumbnails are kept in <root>/.album:
  hash/<path>.sha1      fingerprint of each photo
  thumbs/<sha1>.jpg     800px thumbnail, shared by identical photos

Examples:
  python -m albumgen --root ~/Pictures
  python -m albumgen --root ~/Pictures --test --no-serve
"""
    )
    
    parser.add_argument('--root', metavar='PATH', help='Album root')
    parser.add_argument('-n', '--test', '--dry-run', dest='dry_run', action='store_true',
                        help='Test mode: compute everything, write nothing')
    parser.add_argument('--http', metavar='ADDR',
                        help='Listening address for the status page (default: :8080)')
    parser.add_argument('-w', '--workers', type=int, metavar='N',
                        help='Worker threads per stage (default: CPU count)')
    parser.add_argument('--no-serve', action='store_true',
                        help='Exit after the run instead of serving the status page')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    parser.add_argument('--show-files', action='store_true',
                        help='Print each file as processed with result')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    
    config = get_config(parsed_args)
    if not config.root:
        parser.print_usage(sys.stderr)
        return 0
    
    logger = setup_logging(parsed_args.verbose)
    
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1
    
    progress = None
    if not parsed_args.quiet:
        progress = PipelineProgress(show_files=parsed_args.show_files, logger=logger)
    
    pipeline = Pipeline(config, progress=progress, logger=logger)
    
    try:
        stats = pipeline.run()
    except RootUnreadableError as e:
        logger.critical(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    
    if not parsed_args.quiet:
        print()
        Reporter().report_summary(stats)
    
    if config.serve:
        try:
            serve(create_app(lambda: pipeline.photo_count), config.http_address)
        except ValueError as e:
            logger.error(str(e))
            return 1
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
    
    return 0
