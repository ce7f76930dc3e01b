from __future__ import annotations

import io
import subprocess
from pathlib import Path

import pytest

from md_wrap.exceptions import RenderError
from md_wrap.latex import EquationRenderer, render_document, render_equations


def test_block_equations_are_numbered(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")

    assert renderer.render("a") == ("Equation 1", "eqn1.svg")
    assert renderer.render("b") == ("Equation 2", "eqn2.svg")
    assert (tmp_path / "eqn2.svg").read_text(encoding="utf-8") == "<svg>b</svg>"
    assert [call[1] for call in tex2svg_calls] == ["--inline=false", "--inline=false"]


def test_inline_equations_are_cached(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")

    first = renderer.render("x", inline=True)
    second = renderer.render("x", inline=True)
    other = renderer.render("y", inline=True)

    assert first == second == ("`x`", "inl1.svg")
    assert other == ("`y`", "inl2.svg")
    assert len(tex2svg_calls) == 2


def test_block_equations_are_not_cached(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")

    renderer.render("a")
    renderer.render("a")

    assert len(tex2svg_calls) == 2


def test_references_are_relative_to_output_dir(tmp_path: Path, tex2svg_calls):
    image_dir = tmp_path / "assets" / "img"
    image_dir.mkdir(parents=True)
    output_dir = tmp_path / "docs"
    output_dir.mkdir()
    renderer = EquationRenderer(image_dir, output_dir, tex2svg="tex2svg")

    assert renderer.render("a") == ("Equation 1", "../assets/img/eqn1.svg")


def test_render_failure_raises_and_cleans_up(tmp_path: Path, monkeypatch):
    def run(command, stdout=None, stderr=None, check=False):
        stdout.write(b"partial")
        raise subprocess.CalledProcessError(2, command, stderr=b"undefined control sequence")

    monkeypatch.setattr("md_wrap.latex.subprocess.run", run)
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")

    with pytest.raises(RenderError) as excinfo:
        renderer.render("\\bad")

    assert excinfo.value.returncode == 2
    assert excinfo.value.equation == "\\bad"
    assert "undefined control sequence" in str(excinfo.value)
    assert not (tmp_path / "eqn1.svg").exists()


def test_missing_renderer_raises(tmp_path: Path, monkeypatch):
    def run(command, stdout=None, stderr=None, check=False):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr("md_wrap.latex.subprocess.run", run)
    renderer = EquationRenderer(tmp_path, tex2svg="missing-tex2svg")

    with pytest.raises(RenderError) as excinfo:
        renderer.render("x", inline=True)

    assert excinfo.value.returncode is None
    assert "Could not run" in str(excinfo.value)


def test_unwritable_image_dir_is_not_a_render_failure(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path / "missing", tex2svg="tex2svg")

    with pytest.raises(FileNotFoundError):
        renderer.render("x")

    assert tex2svg_calls == []


def test_render_equations_rewrites_document(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")
    source = [
        "Energy `$E = mc^2$` and `$p$`, again `$E = mc^2$`.\n",
        "  ```render-latex  \n",
        "\\int_0^1 x\\,dx\n",
        "= \\frac{1}{2}\n",
        "```\n",
        "Plain `code` stays.   \n",
    ]
    out = io.StringIO()

    render_equations(source, out, renderer)

    assert out.getvalue() == (
        "Energy ![`E = mc^2`](inl1.svg) and ![`p`](inl2.svg), again ![`E = mc^2`](inl1.svg).\n"
        "![Equation 1](eqn1.svg)\n"
        "Plain `code` stays.   \n"
    )
    assert tex2svg_calls[-1] == ["tex2svg", "--inline=false", "\\int_0^1 x\\,dx\n= \\frac{1}{2}\n"]


def test_plain_code_fences_are_untouched(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")
    content = "```python\nprint(1)\n```\n"

    assert render_document(content, renderer) == content
    assert tex2svg_calls == []


def test_unterminated_block_is_written_back(tmp_path: Path, tex2svg_calls):
    renderer = EquationRenderer(tmp_path, tex2svg="tex2svg")
    content = "before\n```render-latex\nx + y\n"

    assert render_document(content, renderer) == content
    assert tex2svg_calls == []
