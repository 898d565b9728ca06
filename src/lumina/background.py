"""Background resolution: media path → :class:`~lumina.models.Background`.

+------------------------------------+-----------------+
| Extension (case-insensitive)       | Kind            |
+====================================+=================+
| ``jpg``, ``jpeg``, ``png``,        | IMAGE           |
| ``webp``, ``html``                 |                 |
+------------------------------------+-----------------+
| ``mp4``, ``mkv``, ``webm``         | VIDEO           |
+------------------------------------+-----------------+
| anything else                      | error           |
+------------------------------------+-----------------+

Text paths (as written in presentation files and library rows) must exist on
disk.  :class:`~pathlib.Path` values are only classified; callers holding a
Path are trusted to have checked it already.
"""

import logging
from pathlib import Path

from .exceptions import DoesNotExistError, NonBackgroundFileError
from .fs import FileSystem, LocalFileSystem
from .models import Background, BackgroundKind

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp", "html"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mkv", "webm"})

FILE_URI_PREFIX = "file://"


def classify(path: Path) -> BackgroundKind:
    """Return the background kind for *path* based on its extension.

    Raises:
        NonBackgroundFileError: for any extension outside the table above.
    """
    extension = path.suffix.lstrip(".").lower()
    if extension in IMAGE_EXTENSIONS:
        return BackgroundKind.IMAGE
    if extension in VIDEO_EXTENSIONS:
        return BackgroundKind.VIDEO
    raise NonBackgroundFileError(path)


def expand_home(text: str, home_dir: Path | None = None) -> str:
    """Replace a leading ``~`` with *home_dir* (the user's home by default)."""
    if text == "~" or text.startswith("~/"):
        home = home_dir if home_dir is not None else Path.home()
        return str(home) + text[1:]
    return text


def resolve_background(
    raw: str | Path,
    *,
    base_dir: Path | None = None,
    home_dir: Path | None = None,
    fs: FileSystem | None = None,
) -> Background:
    """Turn a media reference into a validated :class:`Background`.

    For text input a ``file://`` prefix is stripped, ``~`` is expanded,
    relative paths are taken relative to *base_dir*, and the file must exist.
    For :class:`~pathlib.Path` input only ``~`` expansion and extension
    classification happen.

    Raises:
        DoesNotExistError: text input naming a missing file.
        NonBackgroundFileError: the extension is not a known image or video.
    """
    if isinstance(raw, Path):
        path = Path(expand_home(str(raw), home_dir))
        return Background(path=path, kind=classify(path))

    text = raw.strip()
    if text.startswith(FILE_URI_PREFIX):
        text = text[len(FILE_URI_PREFIX) :]
    path = Path(expand_home(text, home_dir))
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path

    fs = fs or LocalFileSystem()
    if not fs.exists(path):
        logger.debug("Background %s does not exist", path)
        raise DoesNotExistError(path)

    path = path.resolve()
    return Background(path=path, kind=classify(path))
