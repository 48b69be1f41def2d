"""Persistent review-status ledger keyed by basename."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .errors import StorageError, ValidationError
from .io import atomic_write_text, validate_identifier

LOGGER = logging.getLogger(__name__)

VALID_STATUSES = ("accept", "reject")


@dataclass
class WorkItem:
    filename: str
    status: Optional[str] = None

    def as_payload(self) -> Dict[str, Optional[str]]:
        return {"base": self.filename, "status": self.status}


def validate_status(status) -> Optional[str]:
    if status is not None and status not in VALID_STATUSES:
        raise ValidationError("Invalid status.")
    return status


class StatusLedger:
    """JSON ledger stored as ``[{"filename": ..., "status": ...}, ...]``.

    Merging is additive: identifiers are inserted with a ``None`` status and
    entries are never removed, even when their source files disappear. There
    is no locking; the last write wins.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._entries: Dict[str, Optional[str]] = {}
        self._on_disk = False

    def load(self) -> "StatusLedger":
        self._entries = {}
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            self._on_disk = False
            return self
        except OSError as exc:
            raise StorageError(f"Cannot read ledger {self.path}: {exc}") from exc

        self._on_disk = True
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            LOGGER.warning("Invalid ledger file, starting empty: %s", self.path)
            return self
        if not isinstance(data, list):
            LOGGER.warning("Ledger %s is not a list, starting empty", self.path)
            return self

        for entry in data:
            if not isinstance(entry, dict):
                continue
            name = entry.get("filename")
            if not isinstance(name, str) or not name:
                continue
            status = entry.get("status")
            self._entries[name] = status if status in VALID_STATUSES else None
        return self

    def save(self) -> None:
        payload = [asdict(item) for item in self.items()]
        atomic_write_text(self.path, json.dumps(payload, indent=2))
        self._on_disk = True
        LOGGER.debug("Wrote %d ledger entries to %s", len(payload), self.path)

    def reconcile(self, working_set: Iterable[str]) -> bool:
        """Add unseen identifiers with no status; return True if the ledger was written."""
        added = [base for base in working_set if base not in self._entries]
        for base in added:
            self._entries[base] = None
        if added or not self._on_disk:
            if added:
                LOGGER.info("Adding %d new items to ledger", len(added))
            self.save()
            return True
        return False

    def set_status(self, identifier: str, status: Optional[str]) -> None:
        validate_identifier(identifier)
        validate_status(status)
        self._entries[identifier] = status
        self.save()
        LOGGER.info("Status for %s set to %s", identifier, status)

    def get_status(self, identifier: str) -> Optional[str]:
        return self._entries.get(identifier)

    def statuses(self) -> Dict[str, Optional[str]]:
        return dict(self._entries)

    def items(self) -> List[WorkItem]:
        return [WorkItem(name, self._entries[name]) for name in sorted(self._entries)]

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def open_ledger(path: Path) -> StatusLedger:
    return StatusLedger(path).load()
