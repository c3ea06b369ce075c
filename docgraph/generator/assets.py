"""Copy site-wide static files (styles, scripts, logo, favicon)."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from docgraph._constants import CODE_STYLESHEET_FILENAME, SCRIPTS_DIRNAME, STYLES_DIRNAME
from docgraph.config.helpers import _is_within, _normalize

logger = logging.getLogger(__name__)

DEFAULT_STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


class AssetError(RuntimeError):
    """Raised when a site-wide asset cannot be copied to the output tree."""


def copy_static_assets(
    output_dir: Path, *, code_stylesheet: str, static_dir: Path | None = None
) -> tuple[list[Path], list[Path]]:
    """Copy bundled styles and scripts and write the code highlighting CSS.

    Parameters
    ----------
    output_dir : Path
        Root of the generated site.
    code_stylesheet : str
        Pygments CSS written to ``styles/code.css``.
    static_dir : Path, optional
        Directory holding ``styles/`` and ``scripts/``; defaults to the
        files bundled with docgraph.

    Returns
    -------
    tuple[list[Path], list[Path]]
        Output paths of the stylesheets and of the scripts, in the order they
        should be linked from pages.

    Raises
    ------
    AssetError
        If a bundled file cannot be copied.
    """
    source_root = static_dir or DEFAULT_STATIC_DIR
    styles = _copy_dir(source_root / STYLES_DIRNAME, output_dir / STYLES_DIRNAME, "*.css")
    code_css = output_dir / STYLES_DIRNAME / CODE_STYLESHEET_FILENAME
    try:
        code_css.write_text(code_stylesheet, encoding="utf-8")
    except OSError as exc:
        msg = f'Could not write "{code_css}": {exc}'
        raise AssetError(msg) from exc
    styles.append(code_css)
    scripts = _copy_dir(source_root / SCRIPTS_DIRNAME, output_dir / SCRIPTS_DIRNAME, "*.js")
    return styles, scripts


def _copy_dir(source: Path, destination: Path, pattern: str) -> list[Path]:
    copied: list[Path] = []
    try:
        destination.mkdir(parents=True, exist_ok=True)
        for path in sorted(source.glob(pattern)):
            target = destination / path.name
            shutil.copyfile(path, target)
            copied.append(target)
    except OSError as exc:
        msg = f'Could not copy static files from "{source}" to "{destination}": {exc}'
        raise AssetError(msg) from exc
    return copied


def copy_root_file(relative: str, input_dir: Path, output_dir: Path) -> Path:
    """Copy ``relative`` (e.g. the logo) from the input root to the output root.

    Existing destinations are kept as is.

    Raises
    ------
    AssetError
        If ``relative`` points outside ``input_dir`` or the copy fails.
    """
    source = _normalize(input_dir / relative)
    if not _is_within(source, input_dir):
        msg = (
            "You're trying to copy a media asset outside of your root directory "
            f"({relative}). This is forbidden."
        )
        raise AssetError(msg)
    destination = _normalize(output_dir / source.relative_to(input_dir))
    if destination.exists():
        return destination
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as exc:
        msg = f'Could not copy "{source}" to "{destination}": {exc}'
        raise AssetError(msg) from exc
    logger.debug("copied %s", destination)
    return destination


__all__ = ["AssetError", "copy_root_file", "copy_static_assets"]
