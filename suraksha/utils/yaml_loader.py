"""
YAML loader utility for Suraksha.

Loads authored content files (catalogs) from the data/ directory.
"""

from pathlib import Path
from typing import Any
import yaml


# Default data directory (relative to project root)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML mapping from disk.

    Args:
        path: Path to the .yaml file

    Returns:
        Parsed top-level mapping (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the document is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at top level of {path}, got {type(data).__name__}")
    return data


def get_available_catalogs(data_dir: Path | None = None) -> list[str]:
    """
    List all catalog files in the data directory.

    Args:
        data_dir: Optional custom data directory

    Returns:
        List of catalog names (without .yaml extension)
    """
    dir_path = data_dir or DATA_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
