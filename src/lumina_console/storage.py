"""
Persisted key-value storage for the console: ~/.lumina/config.json.

Holds the base URL and the session credential/principal pair. Each write
replaces the file atomically, so concurrent writers resolve to whichever
finished last.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "credential"
PRINCIPAL_KEY = "principal"
BASE_URL_KEY = "base_url"


def default_config_file() -> Path:
    home = os.environ.get("LUMINA_HOME")
    root = Path(home) if home else Path.home() / ".lumina"
    return root / "config.json"


class ConfigStorage:
    def __init__(self, path: Optional[Path] = None):
        self._path = path or default_config_file()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            data = json.loads(self._path.read_text())
        except (FileNotFoundError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, cfg: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".config-", suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(cfg, f, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def read_credentials(self) -> tuple[Optional[str], Optional[str]]:
        cfg = self.load()
        return _non_empty_str(cfg.get(CREDENTIAL_KEY)), _non_empty_str(cfg.get(PRINCIPAL_KEY))

    def write_credentials(self, credential: str, principal: str) -> None:
        self.save({**self.load(), CREDENTIAL_KEY: credential, PRINCIPAL_KEY: principal})

    def clear_credentials(self) -> None:
        cfg = self.load()
        cfg.pop(CREDENTIAL_KEY, None)
        cfg.pop(PRINCIPAL_KEY, None)
        self.save(cfg)
        logger.debug("Cleared stored credentials in %s", self._path)


def _non_empty_str(value: Any) -> Optional[str]:
    # a hand-edited file may hold numbers or nulls here; treat them as absent
    return value if isinstance(value, str) and value else None
