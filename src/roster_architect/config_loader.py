"""Load application settings from the environment or a JSON profile."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Mapping, Optional


ENV_PREFIX = "ROSTER_ARCHITECT_"


@dataclass
class AppSettings:
    app_id: str = "wnba-roster-architect"
    db_path: Optional[str] = None
    origin: str = "http://localhost:8000"
    share_path: str = "/"
    deep_link: Optional[str] = None
    user_token: Optional[str] = None
    store_url: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppSettings":
        environ = os.environ if environ is None else environ
        values = {}
        for field in fields(cls):
            raw = environ.get(f"{ENV_PREFIX}{field.name.upper()}")
            if raw:
                values[field.name] = raw
        return cls(**values)

    @classmethod
    def load(cls, path: Path) -> "AppSettings":
        data = json.loads(path.read_text(encoding="utf-8"))
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
