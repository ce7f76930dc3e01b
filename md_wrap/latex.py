"""Render LaTeX equations in Markdown to SVG images.

Block equations live in ```` ```render-latex ```` fences and inline equations
in `` `$...$` `` code spans. Each is rendered by an external ``tex2svg``
process and replaced with an image link.
"""

from __future__ import annotations

import io
import os
import shlex
import shutil
import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .constants import FENCE_MARKER, INLINE_LATEX_PATTERN, LATEX_BLOCK_FENCE, TEX2SVG_EXECUTABLE
from .exceptions import RenderError
from .log import get_logger

logger = get_logger(__name__)


class EquationRenderer:
    """Turn LaTeX sources into SVG files and Markdown image references.

    Block equations are numbered ``eqn1.svg``, ``eqn2.svg``, ... and inline
    equations ``inl1.svg``, ``inl2.svg``, ... Repeated inline sources reuse the
    image rendered the first time.

    Args:
        img_dir: Directory receiving the SVG files.
        output_dir: Directory of the document that will reference the images.
            Defaults to `img_dir`.
        tex2svg: Renderer executable. Defaults to ``tex2svg`` on the PATH.
    """

    def __init__(
        self, img_dir: Path, output_dir: Path | None = None, tex2svg: str | None = None
    ):
        self.img_dir = Path(img_dir)
        self.output_dir = Path(output_dir) if output_dir is not None else self.img_dir
        self.tex2svg = tex2svg or shutil.which(TEX2SVG_EXECUTABLE) or TEX2SVG_EXECUTABLE
        self._inline_cache: dict[str, str] = {}
        self._inline_count = 1
        self._block_count = 1

    def render(self, equation: str, inline: bool = False) -> tuple[str, str]:
        """Render one equation.

        Args:
            equation: LaTeX source.
            inline: Whether the equation sits inside a line of text.

        Returns:
            tuple[str, str]: Display name for the image and its path relative
                to the output document's directory.

        Raises:
            RenderError: If the renderer cannot be run or exits with an error.
            OSError: If the image file cannot be created.

        Examples:
            renderer.render("E = mc^2", inline=True)  # ("`E = mc^2`", "inl1.svg")
        """
        if inline:
            name = f"`{equation}`"
            cached = self._inline_cache.get(equation)
            if cached is not None:
                return name, cached
            filename = f"inl{self._inline_count}.svg"
            self._inline_count += 1
        else:
            name = f"Equation {self._block_count}"
            filename = f"eqn{self._block_count}.svg"
            self._block_count += 1

        image_path = self.img_dir / filename
        self._run_tex2svg(equation, image_path, inline)
        reference = Path(os.path.relpath(image_path, self.output_dir)).as_posix()
        if inline:
            self._inline_cache[equation] = reference
        logger.info("Rendered %s to %s", name, image_path)
        return name, reference

    def _run_tex2svg(self, equation: str, image_path: Path, inline: bool) -> None:
        command = [self.tex2svg, f"--inline={'true' if inline else 'false'}", equation]
        logger.debug("Running %s", shlex.join(command))
        # An unwritable image path raises OSError, not RenderError
        image = open(image_path, "wb")
        try:
            with image:
                subprocess.run(command, stdout=image, stderr=subprocess.PIPE, check=True)
        except subprocess.CalledProcessError as error:
            image_path.unlink(missing_ok=True)
            stderr = (error.stderr or b"").decode("utf-8", "replace")
            raise RenderError(equation, error.returncode, stderr) from error
        except OSError as error:
            image_path.unlink(missing_ok=True)
            raise RenderError(equation, stderr=str(error)) from error


def _image_link(name: str, reference: str) -> str:
    return f"![{name}]({reference})"


def render_equations(source: Iterable[str], out: TextIO, renderer: EquationRenderer) -> None:
    """Replace equations in Markdown lines with rendered image links.

    Lines outside equations are written unchanged. An unterminated
    ``render-latex`` block is written back as it was found.

    Args:
        source: Iterable of input lines, with or without terminators.
        out: Stream receiving the rewritten document.
        renderer: Renderer producing the images.

    Raises:
        RenderError: If any equation fails to render.
        OSError: If an image file cannot be created.
    """
    opening_line = ""
    block_lines: list[str] | None = None

    for raw_line in source:
        line = raw_line.rstrip("\r\n")
        stripped = line.strip()

        if block_lines is not None:
            if stripped == FENCE_MARKER:
                name, reference = renderer.render("".join(block_lines))
                out.write(_image_link(name, reference) + "\n")
                block_lines = None
            else:
                block_lines.append(line + "\n")
            continue

        if stripped == LATEX_BLOCK_FENCE:
            opening_line = line
            block_lines = []
            continue

        line = INLINE_LATEX_PATTERN.sub(
            lambda match: _image_link(*renderer.render(match.group(1), inline=True)), line
        )
        out.write(line + "\n")

    if block_lines is not None:
        logger.warning("Unterminated %s block; leaving it unrendered", LATEX_BLOCK_FENCE)
        out.write(opening_line + "\n")
        out.writelines(block_lines)


def render_document(content: str, renderer: EquationRenderer) -> str:
    buffer = io.StringIO()
    render_equations(io.StringIO(content), buffer, renderer)
    return buffer.getvalue()
