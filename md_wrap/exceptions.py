"""Package-specific exception types."""

from __future__ import annotations


class MdWrapError(Exception):
    """Base class for md-wrap errors."""


class RenderError(MdWrapError):
    """Raised when the external equation renderer fails.

    Args:
        equation: LaTeX source that was being rendered.
        returncode: Exit status of the renderer, or None when it never ran.
        stderr: Diagnostic output captured from the renderer.
    """

    def __init__(self, equation: str, returncode: int | None = None, stderr: str = ""):
        self.equation = equation
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.returncode is None:
            message = f"Could not run equation renderer for {self.equation!r}"
        else:
            message = (
                f"Equation renderer exited with status {self.returncode} "
                f"for {self.equation!r}"
            )
        if self.stderr:
            message += f": {self.stderr.strip()}"
        return message
