"""Locates the GlossaryGate project directory and the files kept inside it."""

from functools import lru_cache
from pathlib import Path
from typing import Final

APP_SUBDIR: Final[Path] = Path(".glossarygate")
CONFIG_FILE_NAMES: Final[list[str]] = ["main.yaml", "main.yml"]
GLOSSARY_FILE_NAME: Final[str] = "glossary.yaml"


def get_config_dir(root_path: Path) -> Path:
    """Return the configuration directory below ``root_path``."""
    return root_path / APP_SUBDIR / "configs"


def _config_file_in(root_path: Path) -> Path | None:
    """Return the first existing configuration file of ``root_path``, if any."""
    config_dir = get_config_dir(root_path)
    return next((config_dir / name for name in CONFIG_FILE_NAMES if (config_dir / name).is_file()), None)


@lru_cache(maxsize=1)
def find_project_root(start_path: Path | None = None) -> Path:
    """
    Return the nearest directory, from ``start_path`` (or the CWD) upwards, holding a configuration file.

    Raises:
        FileNotFoundError: If no directory up to the filesystem root has one.

    """
    start = (start_path or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if _config_file_in(candidate) is not None:
            return candidate

    names = " or ".join(CONFIG_FILE_NAMES)
    msg = f"Could not find a configuration file ({names}) in '{APP_SUBDIR / 'configs'}' above {start}. Run 'glossarygate init' first."
    raise FileNotFoundError(msg)


def get_config_file_path(root_path: Path | None = None) -> Path:
    """Return the configuration file of the project containing ``root_path``."""
    project_root = find_project_root(root_path)
    config_file = _config_file_in(project_root)
    if config_file is None:
        msg = f"Configuration file was removed from {get_config_dir(project_root)}."
        raise FileNotFoundError(msg)
    return config_file


def get_log_dir(root_path: Path | None = None) -> Path:
    return find_project_root(root_path) / APP_SUBDIR / "logs"


def get_glossary_file_path(root_path: Path | None = None) -> Path:
    """Return the local glossary entries file, next to the configuration directory."""
    return find_project_root(root_path) / APP_SUBDIR / GLOSSARY_FILE_NAME


def ensure_dir_exists(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)
