"""Environment helpers for Docker-style secret files (``KEY_FILE`` -> ``KEY``)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> Optional[str]:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        event = "env.secret_file.missing"
        error = exc
    except UnicodeDecodeError as exc:
        event = "env.secret_file.decode_failed"
        error = exc
    except OSError as exc:
        event = "env.secret_file.load_failed"
        error = exc
    logger.warning(event, extra={"key": key, "path": file_path, "error": str(error)})
    return None


def load_secret_file_variables(suffix: str = SECRET_FILE_SUFFIX) -> List[str]:
    """
    Expose the content of secret files through plain environment variables.

    ``DB_MONGO_URI_FILE=/run/secrets/mongo`` makes ``DB_MONGO_URI`` available
    unless it is already set. Unreadable files are logged and skipped.

    Returns:
        Names of the variables that were resolved.
    """
    resolved: List[str] = []
    for key, file_path in list(os.environ.items()):
        if not key.endswith(suffix) or not file_path:
            continue
        target_key = key[: -len(suffix)]
        if os.environ.get(target_key):
            continue
        value = _read_secret(key, file_path)
        if value is None:
            continue
        os.environ[target_key] = value
        resolved.append(target_key)
    return resolved
