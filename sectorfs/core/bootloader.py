"""
SectorFS Bootloader

The bootloader is responsible for:
- Loading configuration
- Initializing logging
- Checking that the storage medium is present
- Creating the index file when it is absent
- Handing out the ready virtual file system

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional, TYPE_CHECKING
import time

if TYPE_CHECKING:
    from sectorfs.filesystem.vfs import VfsService

from sectorfs.logger import Logger, get_logger, parse_level
from sectorfs.exceptions import BootFailureError, MediumUnavailableError
from sectorfs.core.config_loader import ConfigLoader, get_config


class BootStage(Enum):
    """Boot process stages."""
    PRE_INIT = auto()
    CONFIG_LOAD = auto()
    LOGGING_INIT = auto()
    MEDIUM_CHECK = auto()
    VFS_INIT = auto()
    COMPLETE = auto()
    FAILED = auto()


@dataclass
class BootResult:
    """Result of the boot process."""
    success: bool
    stage: BootStage
    message: str
    elapsed_time: float
    error: Optional[Exception] = None


class Bootloader:
    """
    Brings the file system up.

    Boot Sequence:
        1. Pre-initialization
        2. Load configuration (defaults when the file is missing)
        3. Initialize logging
        4. Check the storage medium
        5. Create the index file if absent
        6. Complete

    Example:
        >>> bootloader = Bootloader('sectorfs.json')
        >>> result = bootloader.boot()
        >>> if result.success:
        ...     vfs = bootloader.get_vfs()
    """

    def __init__(self, config_path: Optional[str] = None):
        self._config_path = config_path
        self._stage = BootStage.PRE_INIT
        self._logger: Optional[Logger] = None
        self._start_time: float = 0
        self._vfs: Optional['VfsService'] = None

    @property
    def stage(self) -> BootStage:
        """Get the current boot stage."""
        return self._stage

    def boot(self) -> BootResult:
        """
        Execute the boot sequence.

        Returns:
            BootResult indicating success or failure; the stage of a
            failed result is the stage that failed
        """
        self._start_time = time.time()

        try:
            self._stage = BootStage.PRE_INIT
            self._vfs = None

            self._stage = BootStage.CONFIG_LOAD
            self._load_config()

            self._stage = BootStage.LOGGING_INIT
            self._init_logging()

            self._logger = get_logger('bootloader')
            self._logger.debug("Bootloader starting")

            self._stage = BootStage.MEDIUM_CHECK
            self._check_medium()

            self._stage = BootStage.VFS_INIT
            self._init_vfs()

            self._stage = BootStage.COMPLETE
            elapsed = time.time() - self._start_time

            config = get_config()
            self._logger.info(
                config.system.boot_message,
                context={'elapsed_ms': f"{elapsed * 1000:.2f}"}
            )

            return BootResult(
                success=True,
                stage=self._stage,
                message=config.system.boot_message,
                elapsed_time=elapsed
            )

        except Exception as e:
            failed_stage = self._stage
            self._stage = BootStage.FAILED
            elapsed = time.time() - self._start_time

            if self._logger:
                self._logger.critical(f"Boot failed at stage {failed_stage.name}: {e}")

            return BootResult(
                success=False,
                stage=failed_stage,
                message=f"Boot failed: {e}",
                elapsed_time=elapsed,
                error=e
            )

    def _load_config(self) -> None:
        """Load configuration, keeping defaults if there is no file."""
        loader = ConfigLoader()
        if self._config_path is None:
            return

        try:
            loader.load(self._config_path)
        except BootFailureError:
            if Path(self._config_path).exists():
                raise
            # Missing file: run with defaults

    def _init_logging(self) -> None:
        """Initialize the logging system."""
        config = get_config()

        Logger.initialize(
            level=parse_level(config.logging.level),
            log_file=config.logging.log_file,
            use_colors=True,
            console_output=config.logging.console_output
        )

    def _check_medium(self) -> None:
        """Make sure the sector directory is there and writable."""
        storage = get_config().storage
        if not storage.check_medium:
            return

        # Import here to avoid circular dependency
        from sectorfs.filesystem.medium import SectorMedium

        medium = SectorMedium(Path(storage.root_path), index_file=storage.index_file)
        if not medium.is_available():
            raise MediumUnavailableError(storage.root_path)

    def _init_vfs(self) -> None:
        """Create the index if needed and build the service."""
        from sectorfs.filesystem.vfs import VfsService

        vfs = VfsService.from_config(get_config())
        vfs.store.initialize()
        self._vfs = vfs

    def get_vfs(self) -> Optional['VfsService']:
        """Get the initialized file system, or None before a successful boot."""
        return self._vfs

    def shutdown(self) -> None:
        """Release logging resources."""
        if self._logger:
            self._logger.info("Shutdown complete")
        self._vfs = None
        Logger.shutdown()


def boot_system(config_path: Optional[str] = None) -> tuple[BootResult, Optional['VfsService']]:
    """
    Convenience function to boot the system.

    Args:
        config_path: Path to configuration file

    Returns:
        Tuple of (BootResult, VfsService or None)
    """
    bootloader = Bootloader(config_path)
    result = bootloader.boot()
    return result, bootloader.get_vfs()
