from __future__ import annotations
import json, os
from typing import Dict, Optional
from hrdesk.domain.ports import StoragePort

SETTINGS_FILENAME = "user_settings.json"


class StorageLocal(StoragePort):
    """Local filesystem storage for user settings (JSON)."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILENAME)

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: Dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)

    def load_user_settings(self) -> Optional[Dict]:
        path = self.settings_path
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: settings file must contain a JSON object")
        return data
