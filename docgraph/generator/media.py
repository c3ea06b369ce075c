"""Copy media files referenced by rendered pages into the output tree."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from urllib.parse import unquote

from docgraph.config.helpers import _is_within

logger = logging.getLogger(__name__)

MEDIA_TAGS = ("img", "audio", "video")
_REMOTE_PREFIXES = ("http://", "https://", "//", "data:")


class MediaAssetError(RuntimeError):
    """Raised when a media asset cannot be copied into the output tree."""


def is_local_media(src: str | None) -> bool:
    """Return ``True`` when ``src`` points at a file next to the Markdown source."""
    return bool(src) and not src.lower().startswith(_REMOTE_PREFIXES)


def media_path(src: str) -> str:
    """Return the file path named by ``src``, relative to the page directory.

    Query strings and fragments are dropped, percent escapes are decoded and a
    leading ``/`` stays relative to the page directory.

    >>> media_path("/img/my%20image.png?v=2#top")
    'img/my image.png'
    """
    path = src.split("#", 1)[0].split("?", 1)[0]
    return unquote(path).lstrip("/")


def copy_media_asset(
    src: str, *, input_dir: Path, output_dir: Path, output_root: Path
) -> Path | None:
    """Mirror the media file ``src`` from ``input_dir`` into ``output_dir``.

    Parameters
    ----------
    src : str
        ``src`` attribute exactly as written in the page.
    input_dir : Path
        Directory of the Markdown page referencing the asset.
    output_dir : Path
        Directory of the generated HTML page.
    output_root : Path
        Root of the output tree; assets may never be written outside it.

    Returns
    -------
    Path | None
        Destination path when the file was copied, ``None`` when it already
        existed.

    Raises
    ------
    MediaAssetError
        If the destination escapes ``output_root`` or the copy fails.
    """
    relative = media_path(src)
    source = Path(os.path.normpath(input_dir / relative))
    destination = Path(os.path.normpath(output_dir / relative))
    if not _is_within(destination.parent, output_root):
        msg = (
            "You're trying to copy a media asset outside of your root directory "
            f"({src}). This is forbidden."
        )
        raise MediaAssetError(msg)
    if destination.exists():
        return None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except (OSError, ValueError) as exc:
        msg = f'Could not copy media asset "{source}" to "{destination}": {exc}'
        raise MediaAssetError(msg) from exc
    logger.debug("copied media asset %s", destination)
    return destination


__all__ = [
    "MEDIA_TAGS",
    "MediaAssetError",
    "copy_media_asset",
    "is_local_media",
    "media_path",
]
