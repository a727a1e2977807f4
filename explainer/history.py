"""
History Module
Keeps the most recently explained transactions in a JSON file and exports
single explanations for sharing.
"""

import json
import logging
from pathlib import Path

from explainer.known_contracts import get_network

logger = logging.getLogger('TxLens')

DEFAULT_LIMIT = 10

class HistoryStore:
    """Newest-first list of explanation dicts, capped at `limit` entries"""

    def __init__(self, path, limit=DEFAULT_LIMIT):
        self.path = Path(path)
        self.limit = limit

    def load(self):
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load history: {e}")
            return []

        if not isinstance(entries, list):
            logger.error(f"Failed to load history: {self.path} does not hold a list")
            return []

        return [entry for entry in entries if isinstance(entry, dict) and entry.get('hash')]

    def save(self, entries):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(entries[:self.limit], f, indent=2)

    def add(self, explanation):
        """Record an explanation; a repeated hash moves to the front"""

        entry = explanation.to_dict()
        entries = [e for e in self.load() if e['hash'] != entry['hash']]
        entries = [entry] + entries[:self.limit - 1]
        self.save(entries)
        return entries

    def get(self, index):
        """1-based lookup as shown in the history listing"""
        entries = self.load()
        if index < 1 or index > len(entries):
            return None
        return entries[index - 1]

    def clear(self):
        if self.path.exists():
            self.path.unlink()

def export_explanation(explanation, directory='.'):
    """Write the explanation as pretty JSON and return the file path"""

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"ethereum-transaction-{explanation.hash}.json"

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(explanation.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info(f"Exported explanation to {path}")
    return path

def explorer_url(network_name, txhash):
    return f"{get_network(network_name).block_explorer}/tx/{txhash}"
