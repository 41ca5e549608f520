"""Selection of the files a scan reads."""

from collections import deque
import fnmatch
import logging
import os
from typing import Deque, Iterator, List, Sequence

from gred.gred_exceptions import ConfigError
from gred.gred_settings import GredSettings, extension_globs


class FileSelector:
    """
    Walk a directory tree for files whose base names match any glob.

    Directories are visited breadth first in sorted order and hidden
    directories (names starting with '.') are skipped.
    """

    def __init__(self, root: str, globs: Sequence[str]):
        """
        Initialize the selector.

        Args:
            root: Directory to walk
            globs: Base name globs, e.g. "*.py"
        """
        self._root = root
        self._globs = list(globs)
        self._logger = logging.getLogger("FileSelector")

    def matches(self, name: str) -> bool:
        """Check a base name against the globs."""
        return any(fnmatch.fnmatchcase(name, glob) for glob in self._globs)

    def walk(self) -> Iterator[str]:
        """
        Yield matching file paths.

        Yields:
            Paths, relative to the root as given
        """
        pending: Deque[str] = deque([self._root])
        while pending:
            directory = pending.popleft()
            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda entry: entry.name)

            except OSError as e:
                self._logger.warning("Cannot read directory %s: %s", directory, e)
                continue

            for entry in entries:
                path = entry.path if directory != '.' else entry.name
                if entry.is_dir(follow_symlinks=False):
                    if not entry.name.startswith('.'):
                        pending.append(path)

                    continue

                if entry.is_file() and self.matches(entry.name):
                    yield path


def select_paths(settings: GredSettings, root: str = '.') -> List[str]:
    """
    Resolve the files to scan from the environment settings.

    GRED takes precedence: an existing file is scanned alone, an existing
    directory is walked for every file, and anything else is treated as a
    base name glob.  Otherwise GREDX supplies extension globs.

    Args:
        settings: Environment settings
        root: Directory walked for glob selections

    Returns:
        Paths to scan, in walk order

    Raises:
        ConfigError: If no selection is configured or GREDX is invalid
    """
    if settings.target:
        if os.path.isfile(settings.target):
            return [settings.target]

        if os.path.isdir(settings.target):
            return list(FileSelector(settings.target, ['*']).walk())

        return list(FileSelector(root, [settings.target]).walk())

    if settings.extensions:
        globs = extension_globs(settings.extensions)
        if globs is None:
            raise ConfigError(f"invalid GREDX: {settings.extensions!r}", {'GREDX': settings.extensions})

        return list(FileSelector(root, globs).walk())

    raise ConfigError("GRED or GREDX must select the files to search")
