import os
from typing import List


class HistoryManager:
    """Shell command history, kept in memory and appended to a log file."""

    def __init__(self, history_path: str, max_items: int = 100):
        self.history_path = history_path
        self.max_items = max_items
        self.history: List[str] = []

    def load(self) -> List[str]:
        if not os.path.exists(self.history_path):
            self.history = []
            return self.history
        try:
            with open(self.history_path, "r", encoding="utf-8") as f:
                data = [line.rstrip("\n") for line in f if line.strip()]
        except (OSError, UnicodeDecodeError):
            data = []
        self.history = data[-self.max_items:]
        return self.history

    def append(self, entry: str) -> None:
        if not entry:
            return
        self.history.append(entry)
        if len(self.history) > self.max_items:
            self.history = self.history[-self.max_items:]

    def persist(self, entry: str) -> None:
        if not entry:
            return
        # best-effort
        try:
            with open(self.history_path, "a", encoding="utf-8") as f:
                f.write(entry + "\n")
        except OSError:
            pass

    @property
    def items(self) -> List[str]:
        return list(self.history)
