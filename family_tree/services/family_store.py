from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def loads_strict(raw: bytes | str) -> Any:
    """Parse strict JSON: NaN, Infinity and -Infinity are rejected."""
    return json.loads(raw, parse_constant=_reject_constant)


def dumps_members(members: Any) -> str:
    return json.dumps(members, indent=2, ensure_ascii=False, allow_nan=False)


@dataclass(frozen=True)
class BulkReplaceResult:
    count: int
    backup_name: str


@dataclass(frozen=True)
class BackupInfo:
    filename: str
    size: int
    created_at: datetime


class FamilyStore:
    """
    Flat-file store for family members.

    The store is a single JSON array on disk. Every bulk replace first copies the
    current file, byte for byte, into `<backup_prefix><epoch-millis>.json` next to it.
    There is no locking: concurrent writers race and the last write wins.
    """

    def __init__(
        self,
        data_dir: str | Path,
        store_filename: str = "family-members.json",
        backup_prefix: str = "family-members-backup-",
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.store_filename = store_filename
        self.backup_prefix = backup_prefix
        self._clock = clock

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_filename

    def backup_path(self, stamp: int) -> Path:
        return self.data_dir / f"{self.backup_prefix}{stamp}.json"

    def exists(self) -> bool:
        return self.store_path.is_file()

    def read_raw(self) -> bytes:
        return self.store_path.read_bytes()

    def load_members(self) -> list[dict[str, Any]]:
        members = loads_strict(self.read_raw())
        if not isinstance(members, list):
            raise ValueError(f"{self.store_path} does not contain a JSON array")
        return members

    def write_members(self, members: Any) -> None:
        self._write_text(dumps_members(members))

    def _write_text(self, payload: str) -> None:
        self.store_path.write_text(payload, encoding="utf-8")
        logger.info("Wrote %s", self.store_path)

    def create_backup(self, raw: bytes) -> Path:
        stamp = self._clock()
        while True:
            path = self.backup_path(stamp)
            try:
                # "x" refuses to clobber a backup taken in the same millisecond.
                with path.open("xb") as handle:
                    handle.write(raw)
            except FileExistsError:
                stamp += 1
                continue
            logger.info("Backed up %s to %s", self.store_path, path.name)
            return path

    def bulk_replace(self, members: Any) -> BulkReplaceResult:
        count = len(members)
        # Serialize first so an unwritable payload leaves no backup behind.
        payload = dumps_members(members)
        raw = self.read_raw()
        backup = self.create_backup(raw)
        self._write_text(payload)
        return BulkReplaceResult(count=count, backup_name=backup.name)

    def list_backups(self) -> list[BackupInfo]:
        if not self.data_dir.is_dir():
            return []

        backups: list[BackupInfo] = []
        for path in self.data_dir.glob(f"{self.backup_prefix}*.json"):
            stamp = path.stem[len(self.backup_prefix):]
            if not stamp.isdigit():
                continue
            backups.append(
                BackupInfo(
                    filename=path.name,
                    size=path.stat().st_size,
                    created_at=datetime.fromtimestamp(int(stamp) / 1000, tz=timezone.utc),
                )
            )
        backups.sort(key=lambda item: item.created_at, reverse=True)
        return backups


def next_member_id(members: list[dict[str, Any]]) -> int:
    ids = [member["id"] for member in members if isinstance(member.get("id"), int)]
    return max(ids) + 1 if ids else 1


def find_member_index(members: list[dict[str, Any]], member_id: int) -> int | None:
    for index, member in enumerate(members):
        if str(member.get("id")) == str(member_id):
            return index
    return None


def search_members(members: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    needle = query.lower()
    return [
        member
        for member in members
        if needle in str(member.get("name") or "").lower() or needle in str(member.get("notes") or "").lower()
    ]
