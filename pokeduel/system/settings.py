from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional, Union
from pokeduel.core.logging import logger, LEVELS

SETTINGS_FILENAME = ".pokeduel_settings.json"
AI_STRATEGIES = ("first", "random", "strategic")

@dataclass
class SettingsData:
    text_speed: int = 2            # 1 fast, 2 normal, 3 slow
    log_level: str = "WARN"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Print engine diagnostics while battling
    ai_strategy: str = "strategic" # Opponent move policy
    type_chart_path: Optional[str] = None
    seed: Optional[Union[int, str]] = None

    def normalize(self):
        if self.text_speed not in {1,2,3}:
            self.text_speed = 2
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LEVELS:
            self.log_level = "WARN"
        self.ai_strategy = str(self.ai_strategy).lower()
        if self.ai_strategy not in AI_STRATEGIES:
            self.ai_strategy = "strategic"
        if self.type_chart_path is not None and not str(self.type_chart_path).strip():
            self.type_chart_path = None
        if self.seed is not None and not isinstance(self.seed, (int, str)):
            self.seed = None
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data_kwargs = {name: raw[name] for name in field_names if name in raw}
                data = SettingsData(**data_kwargs)
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_log_level(self):
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)  # type: ignore[arg-type]

    def update(self, **changes):
        for k, v in changes.items():
            if not hasattr(self.data, k):
                raise AttributeError(f"Unknown setting: {k}")
            setattr(self.data, k, v)
        self.data.normalize()
        self.apply_log_level()
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)

__all__ = ["Settings", "SettingsData", "SETTINGS_FILENAME", "AI_STRATEGIES"]
