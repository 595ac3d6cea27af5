"""Configuration management for the revealdeck slide assembler.

A run is described by a single immutable AssemblyConfig, built either from a
YAML config file (ConfigFile) or from directory-mode CLI arguments
(config_from_arguments). Paths in a config file are resolved relative to the
directory that contains the file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .errors import ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Untitled Presentation'
DEFAULT_OUTPUT_FILENAME = 'index.html'

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """Load a YAML file and return its top-level mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigParseError: If the file is not valid YAML or is not a mapping.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(file_path, f"YAML syntax error: {e}") from e
    except OSError as e:
        raise ConfigParseError(file_path, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            file_path, f"expected a mapping at top level, got {type(data).__name__}"
        )
    return data


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure root logging for a CLI run."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


# =============================================================================
# Slide list specification
# =============================================================================

@dataclass(frozen=True)
class Discover:
    """Scan a directory for markdown slides and order them by name."""
    directory: Path


@dataclass(frozen=True)
class Explicit:
    """Use exactly these file names, in this order, from base_directory."""
    names: Tuple[str, ...]
    base_directory: Path


SlideListSpec = Union[Discover, Explicit]


@dataclass(frozen=True)
class AssemblyConfig:
    """Everything a single deck build needs.

    Attributes:
        title: Presentation title substituted into the template.
        slide_source_dir: Directory the slides come from.
        output_path: Final output document.
        template_path: Template document holding the placeholder tokens.
        slide_list_spec: Discover or Explicit selection of slide files.
        strict: Treat an empty slide directory as fatal.
        read_workers: Number of threads used to read slide files.
    """
    title: str
    slide_source_dir: Path
    output_path: Path
    template_path: Path
    slide_list_spec: SlideListSpec
    strict: bool = False
    read_workers: int = 1

    @property
    def output_dir(self) -> Path:
        return self.output_path.parent


# =============================================================================
# Config file
# =============================================================================

class ConfigFile:
    """A parsed YAML presentation config file.

    Expected layout::

        title: "My Talk"
        slide_dir: slides
        output_file: build/index.html
        template_file: template.html
        include_files:          # optional, explicit order
          - 2_intro.md
          - 1_agenda.md
        settings:               # optional
          strict: false
          read_workers: 4
          logging:
            level: INFO
    """

    REQUIRED_KEYS = ('output_file', 'template_file')

    def __init__(self, config_path: Union[str, Path]):
        """Load and validate a config file.

        Args:
            config_path: Path to the YAML config file.
        """
        self.config_path = Path(config_path)
        self.config_dir = self.config_path.resolve().parent
        self._config = load_yaml_file(self.config_path)
        self._validate()
        logger.debug(f"Loaded config from: {self.config_path}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_dir: Path) -> "ConfigFile":
        """Create a ConfigFile from an already-parsed mapping.

        Args:
            data: Configuration mapping.
            config_dir: Directory that relative paths resolve against.
        """
        config = cls.__new__(cls)
        config.config_path = Path(config_dir) / 'config.yaml'  # Virtual path
        config.config_dir = Path(config_dir).resolve()
        config._config = dict(data)
        config._validate()
        return config

    def _fail(self, reason: str) -> ConfigParseError:
        return ConfigParseError(self.config_path, reason)

    def _validate(self) -> None:
        for key in self.REQUIRED_KEYS:
            value = self._config.get(key)
            if value is None or value == '':
                raise self._fail(f"missing required key '{key}'")

        for key in ('title', 'slide_dir', 'output_file', 'template_file'):
            value = self._config.get(key)
            if value is not None and not isinstance(value, str):
                raise self._fail(f"'{key}' must be a string, got {type(value).__name__}")

        include_files = self._config.get('include_files')
        if include_files is not None:
            if not isinstance(include_files, list):
                raise self._fail("'include_files' must be a list of file names")
            for entry in include_files:
                if not isinstance(entry, str) or not entry:
                    raise self._fail(f"'include_files' entry {entry!r} is not a file name")

        if not include_files and not self._config.get('slide_dir'):
            raise self._fail("'slide_dir' is required when 'include_files' is not given")

        settings = self._config.get('settings', {})
        if settings is not None and not isinstance(settings, dict):
            raise self._fail("'settings' must be a mapping")

        workers = self.get('settings.read_workers', 1)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise self._fail("'settings.read_workers' must be a positive integer")

        strict = self.get('settings.strict', False)
        if not isinstance(strict, bool):
            raise self._fail("'settings.strict' must be true or false")

        level = self.get('settings.logging.level')
        if level is not None and not isinstance(level, str):
            raise self._fail("'settings.logging.level' must be a string")

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'settings.logging.level')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def _resolve_path_value(self, value: str) -> Path:
        p = Path(value).expanduser()
        if not p.is_absolute():
            p = self.config_dir / p
        return Path(_normalize(p))

    def get_path(self, key: str) -> Path:
        """Get a path from configuration, resolved relative to the config file.

        Raises:
            ConfigParseError: If the key is not set.
        """
        value = self._config.get(key)
        if not value:
            raise self._fail(f"path '{key}' not found in configuration")
        return self._resolve_path_value(value)

    @property
    def title(self) -> str:
        return self._config.get('title') or DEFAULT_TITLE

    @property
    def include_files(self) -> list[str]:
        return list(self._config.get('include_files') or [])

    @property
    def log_level(self) -> Optional[str]:
        return self.get('settings.logging.level')

    @property
    def slide_dir(self) -> Path:
        """Slide directory, falling back to the config directory."""
        if self._config.get('slide_dir'):
            return self.get_path('slide_dir')
        return self.config_dir

    def slide_list_spec(self) -> SlideListSpec:
        """Explicit when include_files is non-empty, otherwise Discover."""
        if self.include_files:
            return Explicit(names=tuple(self.include_files), base_directory=self.slide_dir)
        return Discover(directory=self.slide_dir)

    def to_assembly_config(self, strict: Optional[bool] = None,
                           read_workers: Optional[int] = None) -> AssemblyConfig:
        """Build the run configuration, letting CLI values override settings."""
        return AssemblyConfig(
            title=self.title,
            slide_source_dir=self.slide_dir,
            output_path=self.get_path('output_file'),
            template_path=self.get_path('template_file'),
            slide_list_spec=self.slide_list_spec(),
            strict=self.get('settings.strict', False) if strict is None else strict,
            read_workers=self.get('settings.read_workers', 1) if read_workers is None else read_workers,
        )


def _normalize(path: Path) -> str:
    # Lexical normalization only; symlinks are not resolved
    return os.path.normpath(os.path.abspath(path))


def config_from_arguments(
    slide_dir: Union[str, Path],
    template_file: Union[str, Path],
    output_dir: Union[str, Path],
    output_file: Union[str, Path] = DEFAULT_OUTPUT_FILENAME,
    title: Optional[str] = None,
    *,
    strict: bool = False,
    read_workers: int = 1,
    cwd: Optional[Path] = None,
) -> AssemblyConfig:
    """Build an AssemblyConfig for directory mode.

    Relative paths are resolved against ``cwd`` (the process working
    directory by default).
    """
    base = Path(cwd) if cwd is not None else Path.cwd()

    def resolve(value: Union[str, Path]) -> Path:
        p = Path(value).expanduser()
        if not p.is_absolute():
            p = base / p
        return Path(_normalize(p))

    slide_path = resolve(slide_dir)
    return AssemblyConfig(
        title=title or DEFAULT_TITLE,
        slide_source_dir=slide_path,
        output_path=Path(_normalize(resolve(output_dir) / output_file)),
        template_path=resolve(template_file),
        slide_list_spec=Discover(directory=slide_path),
        strict=strict,
        read_workers=read_workers,
    )
