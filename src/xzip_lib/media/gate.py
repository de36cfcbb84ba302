# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from time import monotonic, sleep

from xzip_lib.core.config import CFG
from xzip_lib.core.error import XZError
from xzip_lib.core.logger import get_logger

logger = get_logger(__name__)


class MediaGate:
    """
    Waits until removable media are mounted.

    Media are considered present when the mount directory exists
    and contains at least one entry.
    """

    def __init__(self, mount_path: Path | None = None, interval: float | None = None):
        """
        Initialize the MediaGate.

        Args:
            mount_path (Path | None): Directory under which media are mounted.
                Defaults to `media.mount_path` from the configuration.
            interval (float | None): Time (in seconds) between successive checks.
                Defaults to `media.interval` from the configuration.
        """
        self._mount_path = mount_path or Path(CFG.media.mount_path)
        self._interval = interval if interval is not None else CFG.media.interval

    @property
    def mount_path(self) -> Path:
        return self._mount_path

    def isPresent(self) -> bool:
        """
        Check whether any media are mounted.

        Returns:
            bool: True if the mount directory lists at least one entry, False otherwise
                (including when the directory does not exist or cannot be read).
        """
        try:
            return any(self._mount_path.iterdir())
        except OSError as e:
            logger.debug(f"Could not list '{self._mount_path}': {e}.")
            return False

    def wait(self, timeout: float | None = None) -> None:
        """
        Block until media are mounted.

        Args:
            timeout (float | None): Maximal time (in seconds) to wait. If None, wait indefinitely.

        Raises:
            XZError: If no media were mounted before the timeout expired.
        """
        start = monotonic()
        while not self.isPresent():
            if timeout is not None and monotonic() - start >= timeout:
                raise XZError(
                    f"No media mounted in '{self._mount_path}' within {timeout} seconds."
                )
            logger.debug(
                f"No media in '{self._mount_path}'. Checking again in {self._interval} seconds."
            )
            sleep(self._interval)
