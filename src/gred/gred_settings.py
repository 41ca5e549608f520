"""Environment driven settings for gred."""

from dataclasses import dataclass
import logging
from typing import List, Mapping

from gred.gred_exceptions import ConfigError


def extension_globs(dotted: str) -> List[str] | None:
    """
    Convert a dotted extension list into base name globs.

    ".py.txt" selects "*.py" and "*.txt"; "." selects every file.

    Args:
        dotted: Extension list as given in GREDX

    Returns:
        List of globs, or None if the value is not a dotted list
    """
    text = dotted.strip()
    if text == '.':
        return ['*']

    if not text.startswith('.'):
        return None

    globs = [f'*.{ext.strip()}' for ext in text[1:].split('.') if ext.strip()]
    return globs or None


@dataclass
class GredSettings:
    """
    Settings read from the environment.
    """
    target: str = ""  # GRED: explicit path or base name glob
    extensions: str = ""  # GREDX: dotted extension list
    log_file: str = ""  # GRED_LOG: optional log file
    log_level: int = logging.DEBUG  # GRED_LOG_LEVEL

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "GredSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Environment mapping, usually os.environ

        Returns:
            GredSettings with values from the environment

        Raises:
            ConfigError: If GREDX or GRED_LOG_LEVEL is invalid
        """
        settings = cls(
            target=environ.get("GRED", ""),
            extensions=environ.get("GREDX", ""),
            log_file=environ.get("GRED_LOG", "")
        )

        if not settings.target and settings.extensions and extension_globs(settings.extensions) is None:
            raise ConfigError(f"invalid GREDX: {settings.extensions!r}", {'GREDX': settings.extensions})

        level_name = environ.get("GRED_LOG_LEVEL", "")
        if level_name:
            level = logging.getLevelName(level_name.upper())
            if not isinstance(level, int):
                raise ConfigError(f"invalid GRED_LOG_LEVEL: {level_name!r}", {'GRED_LOG_LEVEL': level_name})

            settings.log_level = level

        return settings

    def has_selection(self) -> bool:
        """True if the environment selects any files to scan."""
        return bool(self.target or self.extensions)
