import json
import os


class ClipStackStateStore:
    """Key-value preferences backed by a single JSON file."""

    def __init__(self, path, logger=None):
        self.path = path
        self.logger = logger
        self._values = self.load()

    def _log(self, msg):
        if self.logger:
            try:
                self.logger.warning(msg)
            except Exception:
                pass

    def load(self):
        try:
            if not os.path.exists(self.path):
                return {}
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except Exception as e:
            self._log(f"Failed to load state: {e}")
            return {}

        if not isinstance(data, dict):
            self._log(f"Ignoring state file with unexpected layout: {type(data).__name__}")
            return {}
        return data

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value
        return self.save()

    def save(self):
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, ensure_ascii=True)
        except Exception as e:
            self._log(f"Failed to save state: {e}")
            return False
        return True
