"""
fix-images - Main Application Entry Point

Scans a directory, detects the real image format of every file from its
header bytes, and renames misnamed PNG/GIF/JPEG/WebP/BMP files so their
extension matches their content.

Usage: python app.py [DIRECTORY]    (default: ./Ori)
"""

import sys
import time
import logging
from typing import Optional

from fix_images.config import AppConfig
from fix_images.processor import DirectoryError, ProcessingStats, process_directory
from fix_images.utils import setup_logging, format_duration


logger: Optional[logging.Logger] = None


class FixImagesApp:
    """Main application coordinator."""

    def __init__(self, config: AppConfig):
        """
        Initialize the application.

        Args:
            config: Application configuration
        """
        global logger
        logger = setup_logging()
        self.config = config

    def run(self) -> Optional[ProcessingStats]:
        """
        Run a single scan of the configured directory.

        Returns:
            Statistics, or None if the directory could not be listed
        """
        target = self.config.target_directory

        logger.info(f'Scanning directory: {target}')
        logger.info('Strict mode: telling PNG/GIF/JPEG/WebP/BMP apart by content...\n')

        start_time = time.perf_counter()
        try:
            stats = process_directory(target, batch_size=self.config.batch_size)
        except DirectoryError as e:
            logger.error(str(e))
            return None
        elapsed = time.perf_counter() - start_time

        self._print_summary(stats, elapsed)
        return stats

    def _print_summary(self, stats: ProcessingStats, elapsed: float):
        """Print the final counts."""
        logger.info('\n=== Done ===')
        logger.info(f'Valid images: {stats.processed}')
        logger.info(f'Fixed extensions: {stats.renamed}')
        logger.info(f'Skipped files: {stats.skipped} (not an image or unknown format)')
        logger.info(f'Errors: {stats.errors}')
        logger.info(f'Elapsed: {format_duration(elapsed)}')


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    config = AppConfig.from_args(args)

    is_valid, error = config.validate()
    if not is_valid:
        print(f'Invalid configuration: {error}', file=sys.stderr)
        return 2

    app = FixImagesApp(config)
    app.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
