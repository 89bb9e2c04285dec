"""Seed monarch records into the remote monarch API.

Reads a JSON array of monarchs and POSTs it as {"monarchs": [...]} to
<base-url>/api/cosmos/monarchs/import. Run by hand; nothing in the API calls it.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx

from family_tree.core.config import settings
from family_tree.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

IMPORT_PATH = "/api/cosmos/monarchs/import"


class MonarchImportError(RuntimeError):
    pass


def load_monarchs(path: str | Path) -> list[dict[str, Any]]:
    monarchs = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(monarchs, list):
        raise MonarchImportError(f"{path} does not contain a JSON array of monarchs")
    return monarchs


def import_monarchs(
    monarchs: list[dict[str, Any]],
    base_url: str,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    url = f"{base_url.rstrip('/')}{IMPORT_PATH}"
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.http_timeout_seconds)

    try:
        resp = client.post(url, json={"monarchs": monarchs})
    finally:
        if owns_client:
            client.close()

    if resp.is_error:
        try:
            body = resp.json()
        except ValueError:
            body = None
        message = body.get("message") if isinstance(body, dict) else None
        raise MonarchImportError(f"Failed to import monarchs: {message or resp.reason_phrase}")

    return resp.json()


def _log_summary(result: dict[str, Any]) -> None:
    logger.info("Monarchs imported: %s", result.get("message"))
    summary = (result.get("data") or {}).get("summary") or {}
    logger.info("Summary: %s successful, %s failed", summary.get("successful", 0), summary.get("failed", 0))
    if summary.get("errors"):
        logger.warning("Errors: %s", summary["errors"])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import monarch records into the monarch API.")
    parser.add_argument("--file", default=settings.monarch_import_file, help="JSON file with an array of monarchs")
    parser.add_argument("--base-url", default=settings.monarch_api_base_url, help="API base URL")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        monarchs = load_monarchs(args.file)
        logger.info("Importing %d monarchs to %s", len(monarchs), args.base_url)
        result = import_monarchs(monarchs, args.base_url)
    except (OSError, ValueError, httpx.HTTPError, MonarchImportError):
        logger.exception("Monarch import failed")
        return 1

    _log_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
