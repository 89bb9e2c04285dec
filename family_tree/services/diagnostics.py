from __future__ import annotations

import os
import platform
from datetime import datetime, timezone
from typing import Any

from family_tree.core.config import settings
from family_tree.services.family_store import FamilyStore, loads_strict

PREVIEW_CHARS = 200


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def collect_deployment_diagnostics(store: FamilyStore, logs: list[str]) -> dict[str, Any]:
    """
    Describe where the store is expected to live and what is actually there.

    Problems reading or parsing the store are appended to `logs` and reflected in
    `status`; only unexpected failures escape to the caller.
    """
    logs.append("Deployment debug endpoint called")
    data_dir = store.data_dir.resolve()
    json_file = store.store_path.resolve()
    logs.append(f"Resolved data path: {json_file}")

    file_system: dict[str, Any] = {
        "dataDirExists": data_dir.is_dir(),
        "jsonFileExists": store.exists(),
    }
    if file_system["dataDirExists"]:
        try:
            file_system["dataContents"] = sorted(entry.name for entry in data_dir.iterdir())
        except OSError as exc:
            file_system["dataContentsError"] = str(exc)
            logs.append(f"Error listing data dir: {exc}")

    status = "data_file_not_found"
    logs.append(f"File exists: {file_system['jsonFileExists']}")
    if file_system["jsonFileExists"]:
        status = "ok"
        try:
            stats = json_file.stat()
            file_system["jsonFileSize"] = stats.st_size
            file_system["jsonFileModified"] = datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc).isoformat()
            content = store.read_raw().decode("utf-8")
            logs.append(f"Read file, size: {len(content)}")
            file_system["jsonFilePreview"] = content[:PREVIEW_CHARS]

            records = loads_strict(content)
            file_system["jsonRecordCount"] = len(records)
            logs.append(f"Parsed JSON, records: {len(records)}")
        except (OSError, ValueError, TypeError) as exc:
            status = "data_file_unreadable"
            logs.append(f"Error reading/parsing file: {exc}")

    return {
        "status": status,
        "timestamp": _now_iso(),
        "logs": logs,
        "environment": {
            "cwd": os.getcwd(),
            "pythonVersion": platform.python_version(),
            "appEnv": settings.app_env,
        },
        "paths": {
            "dataDir": str(data_dir),
            "jsonFile": str(json_file),
        },
        "fileSystem": file_system,
    }
