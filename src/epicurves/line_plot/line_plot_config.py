"""Per-user persistence of the line plot's LinePlotState.

The file lives under platformdirs' user config directory and holds only UI
state (which metrics are visible, axis scale, humanized numbers); trajectory
and observation data are never written. Any problem reading it (missing file,
bad JSON, wrong schema_version, malformed plot_state) degrades to defaults
with a log message instead of raising.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from epicurves.line_plot.plot_state import LinePlotState
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)

# bump on any incompatible change to the JSON layout
SCHEMA_VERSION: int = 1

DEFAULT_APP_NAME = "epicurves"
DEFAULT_FILENAME = "line_plot_config.json"


@dataclass
class LinePlotConfigData:
    """On-disk payload: {"schema_version": int, "plot_state": LinePlotState.to_dict()}."""
    schema_version: int = SCHEMA_VERSION
    plot_state: Dict[str, Any] = field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "plot_state": self.plot_state,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "LinePlotConfigData":
        """Read a payload, warning about (and skipping) anything unexpected."""
        for key in d.keys() - {"schema_version", "plot_state"}:
            logger.warning(f"Unknown key '{key}' in line plot config, ignoring")

        raw = d.get("plot_state", {})
        if not isinstance(raw, dict):
            logger.warning("plot_state is not a dict, using defaults")
            raw = {}

        return cls(schema_version=int(d.get("schema_version", -1)), plot_state=raw)


def _read_json(path: Path) -> Optional[Dict[str, Any]]:
    """Parsed object at `path`, or None when it exists but cannot be used.

    Raises:
        FileNotFoundError: If there is no file at `path`.
    """
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring {path}: invalid JSON ({e})")
        return None
    if not isinstance(parsed, dict):
        logger.warning(f"Ignoring {path}: top level is {type(parsed).__name__}, expected an object")
        return None
    return parsed


class LinePlotConfig:
    """A LinePlotConfigData bound to the file it is saved to."""

    def __init__(self, *, path: Path, data: Optional[LinePlotConfigData] = None):
        self.path = path
        self.data = data if data is not None else LinePlotConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = DEFAULT_APP_NAME,
        filename: str = DEFAULT_FILENAME,
        app_author: str | None = None,
    ) -> Path:
        """`filename` inside the platform's per-user config dir for `app_name`.

        For example ~/.config/epicurves/line_plot_config.json on Linux.
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = DEFAULT_APP_NAME,
        filename: str = DEFAULT_FILENAME,
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "LinePlotConfig":
        """Read the config file, falling back to defaults on any problem.

        Args:
            config_path: Explicit file; default_config_path() otherwise.
            app_name: Passed to default_config_path().
            filename: Passed to default_config_path().
            app_author: Passed to default_config_path().
            schema_version: Version this caller understands.
            reset_on_version_mismatch: On a different stored version, discard the
                stored state (True) or keep it and restamp the version (False).
            create_if_missing: Write a default file when none exists yet.

        Returns:
            LinePlotConfig bound to the resolved path.
        """
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename, app_author=app_author)
        defaults = cls(path=path, data=LinePlotConfigData(schema_version=schema_version))

        try:
            parsed = _read_json(path)
        except FileNotFoundError:
            logger.debug(f"No line plot config at {path}, using defaults")
            if create_if_missing:
                defaults.save()
            return defaults
        except OSError as e:
            logger.warning(f"Cannot read line plot config {path}: {e}")
            return defaults
        if parsed is None:
            return defaults

        try:
            loaded = LinePlotConfigData.from_json_dict(parsed)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring {path}: bad schema_version ({e})")
            return defaults

        if loaded.schema_version != schema_version:
            if reset_on_version_mismatch:
                logger.warning(f"{path} has schema_version {loaded.schema_version}, expected {schema_version}; resetting")
                return defaults
            loaded.schema_version = schema_version

        return cls(path=path, data=loaded)

    def save(self) -> None:
        """Write the config as indented JSON, creating parent directories.

        Raises:
            OSError: If the file cannot be written.
        """
        payload = json.dumps(self.data.to_json_dict(), indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not save line plot config to {self.path}: {e}")
            raise
        logger.info(f"Saved line plot config to {self.path}")

    def get_plot_state(self) -> LinePlotState:
        """LinePlotState from config; defaults when absent or invalid."""
        if not self.data.plot_state:
            return LinePlotState()
        try:
            return LinePlotState.from_dict(self.data.plot_state)
        except (TypeError, ValueError) as e:
            logger.warning(f"Error deserializing LinePlotState from config: {e}")
            return LinePlotState()

    def set_plot_state(self, state: LinePlotState) -> None:
        self.data.plot_state = state.to_dict()
