from pathlib import Path

from core.config import PROJECT_ROOT  # type: ignore


def resolve_path(value: str | Path | None, key: str = "path") -> Path:
    """Resolve a configured path; relative paths are taken from the project root."""
    if not value:
        raise ValueError(f"Missing '{key}' in config.yaml")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path.resolve()
