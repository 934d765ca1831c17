"""JSON-file-backed implementation of RecordStore.

The whole document is read once when the store is created and kept in
memory. Every write replaces the file with a full snapshot. Storage
problems are logged and never propagate: a broken file reads as empty,
a failed write leaves the in-memory value in place.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from vendas.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)


class JsonRecordStore(RecordStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._records: dict[str, Any] = self._read_all()
        self._depth = 0

    # --- RecordStore interface ------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._records:
            return default
        return copy.deepcopy(self._records[key])

    def set(self, key: str, value: Any) -> None:
        self._records[key] = copy.deepcopy(value)
        if self._depth == 0:
            self._write_all()

    @contextmanager
    def transaction(self) -> Iterator[JsonRecordStore]:
        """Apply every ``set`` inside the block with a single file write.

        If the block raises, the in-memory records are restored to what
        they were on entry and nothing is written.
        """
        snapshot = copy.deepcopy(self._records)
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._records = snapshot
            self._depth -= 1
            raise
        self._depth -= 1
        if self._depth == 0:
            self._write_all()

    # --- File helpers ---------------------------------------------------------

    def _read_all(self) -> dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.exception("Could not read store %s, starting empty", self._file_path)
            return {}
        if not isinstance(data, dict):
            logger.error(
                "Store %s holds %s instead of an object, starting empty",
                self._file_path,
                type(data).__name__,
            )
            return {}
        return data

    def _write_all(self) -> None:
        tmp_name = None
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(self._records, indent=2, ensure_ascii=False) + "\n")
            os.replace(tmp_name, self._file_path)
        except (OSError, TypeError, ValueError):
            logger.exception("Could not write store %s, keeping changes in memory", self._file_path)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return
        logger.debug("Wrote %d keys to %s", len(self._records), self._file_path)
