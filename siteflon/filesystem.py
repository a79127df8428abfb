"""Reading siteflon sources and writing compiled documents."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, SOURCE_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "SITEFLON_MAX_FILE_SIZE"
DEFAULT_OUTPUT_PERMISSIONS = 0o644


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the source size limit, honouring ``SITEFLON_MAX_FILE_SIZE``.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    raw_limit = os.environ.get(MAX_FILE_SIZE_ENV_VAR, "").strip()
    if not raw_limit:
        return default
    if not raw_limit.isdigit() or int(raw_limit) == 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw_limit!r}")
    return int(raw_limit)


def resolve_source(raw_path: str) -> Path:
    """Turn a user-supplied source path into an absolute path.

    Sources are only read, so any readable location is accepted; the suffix
    must be one of `SOURCE_EXTENSIONS`.

    Raises:
        ValueError: If the suffix is not a siteflon one.

    Examples:
        resolve_source("../site/index.sf")
    """
    source = Path(raw_path).expanduser().resolve()
    if source.suffix.lower() not in SOURCE_EXTENSIONS:
        raise ValueError(
            f"{source} is not a siteflon file (expected one of: {', '.join(SOURCE_EXTENSIONS)})"
        )
    return source


def read_source(filepath: Path, max_size: int) -> str:
    """Read a UTF-8 source file no larger than `max_size` bytes.

    Raises:
        IOError: If the file cannot be read or is too large.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    try:
        size = filepath.stat().st_size
        if size > max_size:
            raise IOError(f"{filepath} is {size} bytes, over the {max_size} byte limit.")
        return filepath.read_text(encoding="UTF-8")
    except (FileNotFoundError, PermissionError, IsADirectoryError) as error:
        raise IOError(f"Cannot read {filepath}: {error.strerror}") from error


def write_document(filepath: Path, content: str):
    """Atomically write a compiled document.

    The content goes to a temporary file in the destination directory, which
    then replaces `filepath`. Permissions of an existing destination are kept;
    new files are created with mode 0644.

    Args:
        filepath: Destination path.
        content: Text to write.

    Returns:
        None.

    Raises:
        IOError: If the destination is a symlink or cannot be written.

    Examples:
        write_document(Path("index.html"), html)
    """
    if filepath.is_symlink():
        raise IOError(f"Refusing to write through a symlink: {filepath}.")

    permissions = DEFAULT_OUTPUT_PERMISSIONS
    if filepath.exists():
        permissions = stat.S_IMODE(filepath.stat().st_mode)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        raise IOError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
