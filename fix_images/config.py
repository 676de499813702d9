"""Run configuration."""

from dataclasses import dataclass
from typing import Optional

from .processor import DEFAULT_BATCH_SIZE


DEFAULT_TARGET_DIRECTORY = './Ori'
MAX_BATCH_SIZE = 1000


@dataclass
class AppConfig:
    """Application configuration settings."""
    target_directory: str = DEFAULT_TARGET_DIRECTORY
    batch_size: int = DEFAULT_BATCH_SIZE

    @classmethod
    def from_args(cls, args: list[str]) -> 'AppConfig':
        """Build config from positional arguments; an empty or missing directory means the default."""
        return cls(target_directory=(args[0] if args else '') or DEFAULT_TARGET_DIRECTORY)

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not self.target_directory:
            return False, 'Target directory must not be empty'

        if self.batch_size < 1 or self.batch_size > MAX_BATCH_SIZE:
            return False, f'Batch size must be between 1 and {MAX_BATCH_SIZE}'

        return True, None
