"""Disk storage for uploaded application documents"""

import random
import re
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Iterable

from loanyfy.config import settings

PUBLIC_PREFIX = "/uploads"


def stored_name(original_name: str) -> str:
    """Unique on-disk name: <epoch ms>-<random>-<original name, whitespace as _>"""
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    safe_original = re.sub(r"\s+", "_", Path(original_name or "document").name)
    return f"{unique}-{safe_original}"


class LocalDocumentStorage:
    """Stores documents under upload_dir and returns their public path"""

    def __init__(self, upload_dir: str | Path | None = None):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, filename: str, stream: BinaryIO) -> str:
        name = stored_name(filename)
        with open(self.upload_dir / name, "wb") as fh:
            shutil.copyfileobj(stream, fh)
        return f"{PUBLIC_PREFIX}/{name}"

    def discard(self, public_paths: Iterable[str]) -> None:
        """Remove stored files by public path; missing files are ignored"""
        for public_path in public_paths:
            (self.upload_dir / public_path.rsplit("/", 1)[-1]).unlink(missing_ok=True)
