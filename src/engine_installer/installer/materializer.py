"""Render engine files into the host project.

Only files ending in ``.j2`` or ``.jinja`` are Jinja2 templates; the suffix
is dropped on install (``create_pages.py.j2`` -> ``003_create_pages.py``).
Every other file is copied byte for byte, so braces in Python or SQL,
CRLF line endings and non-UTF-8 encodings come through untouched.

The template context always carries ``engine_name``; migrations
additionally get ``migration_number`` and ``migration_name``.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from loguru import logger

from ..core.exceptions import MaterializeError
from ..core.types import is_template


def _detect_newline(raw: bytes) -> str:
    """Line ending used by a template source; LF when there is none."""
    if b"\r\n" in raw:
        return "\r\n"
    if b"\r" in raw:
        return "\r"
    return "\n"


class FileMaterializer:
    """Render templates from an engine root and write them to disk.

    Example:
        materializer = FileMaterializer(engine_root, {"engine_name": "blog"})
        materializer.write(
            engine_root / "db/migrate/create_posts.py.j2",
            app_root / "db/migrate/004_create_posts.py",
            migration_number="004",
        )
    """

    def __init__(self, engine_root: Path, context: dict[str, Any] | None = None):
        """Initialize the materializer.

        Args:
            engine_root: Directory templates (and their includes) are loaded from.
            context: Values available to every template.
        """
        self.engine_root = engine_root
        self.context = dict(context or {})
        self.env = Environment(
            loader=FileSystemLoader(str(engine_root)),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            autoescape=False,
        )

    def render(self, source: Path, **extra: Any) -> str:
        """Render a template file with the shared context plus extra values.

        The rendered text keeps the source's line endings.

        Raises:
            MaterializeError: If the template cannot be read, decoded or rendered.
        """
        try:
            raw = source.read_bytes()
            text = raw.decode("utf-8")
        except OSError as e:
            raise MaterializeError(f"Cannot read {source}: {e}") from e
        except UnicodeDecodeError as e:
            raise MaterializeError(f"Template {source} is not valid UTF-8: {e}") from e

        env = self.env.overlay(newline_sequence=_detect_newline(raw))
        try:
            return env.from_string(text).render(**self.context, **extra)
        except TemplateError as e:
            raise MaterializeError(f"Cannot render {source}: {e}") from e

    def write(self, source: Path, destination: Path, **extra: Any) -> Path:
        """Install a source file at destination.

        Templates are rendered; all other files are copied unchanged. Parent
        directories are created as needed.

        Returns:
            The destination path.

        Raises:
            MaterializeError: If rendering, reading or writing fails.
        """
        if is_template(source):
            content = self.render(source, **extra)
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                with destination.open("w", encoding="utf-8", newline="") as fh:
                    fh.write(content)
            except OSError as e:
                raise MaterializeError(f"Cannot write {destination}: {e}") from e
            logger.debug(f"Rendered {source.name} -> {destination}")
            return destination

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise MaterializeError(f"Cannot copy {source} to {destination}: {e}") from e
        logger.debug(f"Copied {source.name} -> {destination}")
        return destination
