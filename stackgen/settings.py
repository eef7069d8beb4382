"""Locally persisted user preferences.

The store is a small JSON file holding a flat key/value map in which every
value is itself a JSON-serialised string, the same shape a browser
``localStorage`` would hold.  It is read once at construction and written
back in full on every change.  Anything missing or unreadable falls back to
the default for that key only.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from stackgen.config import FREE_CREDITS

logger = logging.getLogger(__name__)


class Preferences(BaseModel):
    """The six persisted preference fields."""

    app_name: str = Field(default="Proyek Baru")
    app_desc: str = Field(default="Generator kode AI multi-bahasa")
    stack: str = Field(default="React")
    custom_lang: str = Field(default="")
    credits: int = Field(default=FREE_CREDITS)
    gh_token: str | None = Field(default=None)


PREFERENCE_KEYS: tuple[str, ...] = tuple(Preferences.model_fields)


class SettingsStore:
    """File-backed preference store.

    Attributes:
        path: The JSON file backing the store.
        prefs: Current preference values (always fully populated).
    """

    def __init__(self, path: str | Path, defaults: Preferences | None = None) -> None:
        self.path = Path(path)
        self._defaults = defaults or Preferences()
        self.prefs = self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        """Return the current value of *key*."""
        if key not in PREFERENCE_KEYS:
            raise KeyError(key)
        return getattr(self.prefs, key)

    def set(self, key: str, value: Any) -> None:
        """Validate and store a single preference, then persist."""
        self.update(**{key: value})

    def update(self, **changes: Any) -> None:
        """Validate and store several preferences at once, then persist.

        Raises:
            KeyError: For an unknown preference key.
            pydantic.ValidationError: If a value has the wrong type.
        """
        unknown = set(changes) - set(PREFERENCE_KEYS)
        if unknown:
            raise KeyError(", ".join(sorted(unknown)))
        merged = {**self.prefs.model_dump(), **changes}
        self.prefs = Preferences.model_validate(merged)
        self._save()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> Preferences:
        raw_map = self._read_map()
        values: dict[str, Any] = {}
        for key in PREFERENCE_KEYS:
            raw = raw_map.get(key)
            if not isinstance(raw, str) or not raw:
                continue
            try:
                parsed = Preferences.model_validate({key: json.loads(raw)})
            except (json.JSONDecodeError, ValidationError):
                logger.warning("Ignoring malformed stored value for %r", key)
                continue
            values[key] = getattr(parsed, key)
        return self._defaults.model_copy(update=values)

    def _read_map(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read settings from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold an object; using defaults", self.path)
            return {}
        return data

    def _save(self) -> None:
        # A failed write leaves the in-memory value changed.
        payload = {
            key: json.dumps(value, ensure_ascii=False)
            for key, value in self.prefs.model_dump().items()
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write settings to %s: %s", self.path, exc)
