# hrdesk/storage/json_file.py

from pathlib import Path
from typing import Optional

from hrdesk.errors import StorageError
from hrdesk.storage.base import PersistentStore


class JsonFileStorage(PersistentStore):
    """One `<key>.json` file per collection inside `data_dir`."""

    name = "json"

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        safe_key = key.replace("/", "-").replace("\\", "-")
        return self.data_dir / f"{safe_key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(key, f"could not read {path}: {e}") from e

    def _write(self, key: str, text: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise StorageError(key, f"could not write {path}: {e}") from e
