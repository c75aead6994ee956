"""
Path Resolver Module

Canonicalizes virtual paths into the absolute form used as index keys.

Only a leading slash is enforced. Repeated slashes and ``.``/``..``
components are kept verbatim, so two spellings of the same location
are two different index keys.

Author: YSNRFD
Version: 1.0.0
"""


class PathResolver:
    """Static helpers for virtual path strings."""

    SEPARATOR = '/'

    @staticmethod
    def normalize(path: str) -> str:
        """
        Produce the canonical absolute form of a virtual path.

        Args:
            path: Caller-supplied path

        Returns:
            ``path`` with a leading ``/`` added when missing
        """
        if not path.startswith(PathResolver.SEPARATOR):
            return PathResolver.SEPARATOR + path
        return path

    @staticmethod
    def is_directory(path: str) -> bool:
        """
        Check whether a path names a directory.

        Directories are not stored; a path denotes one when it
        ends with a slash.
        """
        return PathResolver.normalize(path).endswith(PathResolver.SEPARATOR)
