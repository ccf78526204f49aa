# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Filesystem helpers for gorelease.

Manifests and package.json files are written atomically: content goes to a
temporary file in the target's directory, which is then renamed over the
target. A crash leaves a stray temp file, never a half-written manifest that
a later workflow step would upload.
"""

import os
import stat
import tempfile
from pathlib import Path


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write content to a file atomically.

    Args:
        target_path: Where the final file should end up.
        content: The string content to write.
        encoding: Text encoding to use.

    Raises:
        OSError: If the write or rename fails.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    # dir= same directory as target so the rename stays on one filesystem.
    temp_fd = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(target_path.parent),
        prefix=".gorelease_tmp_",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        temp_fd.write(content)
        temp_fd.flush()
        temp_fd.close()
        os.replace(temp_path, target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise


def list_regular_files(directory: Path) -> list[Path]:
    """Regular files directly inside `directory`, sorted by name."""
    return sorted(
        (entry for entry in directory.iterdir() if entry.is_file()),
        key=lambda entry: entry.name,
    )


def make_executable(file_path: Path) -> None:
    """
    Add execute permission for user, group and others.

    Raises:
        OSError: If the mode can't be read or changed.
    """
    mode = file_path.stat().st_mode
    file_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
