"""Tests for the headless render CLI."""

from __future__ import annotations

import json
from pathlib import Path

from chartviz.cli import render


def _write_csv(tmp_path: Path, text: str = "Label,S1,S2\nA,1,2\nB,2,x\nC,3,1") -> Path:
    path = tmp_path / "data.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_render_png_json_summary(tmp_path, capsys):
    src = _write_csv(tmp_path)
    out = tmp_path / "chart.png"
    code = render.main([str(src), "-o", str(out), "--title", "CLI", "--json"])
    summary = json.loads(capsys.readouterr().out)
    assert code == 0
    assert summary["ok"] is True
    assert summary["points"] == 5
    assert summary["series"] == 2
    assert summary["skipped_fields"] == 1
    assert summary["format"] == "png"
    assert out.read_bytes().startswith(b"\x89PNG")


def test_format_inferred_from_extension(tmp_path):
    src = _write_csv(tmp_path)
    out = tmp_path / "chart.pdf"
    assert render.main([str(src), "-o", str(out), "--kind", "pie"]) == 0
    assert out.read_bytes().startswith(b"%PDF")


def test_explicit_format_appends_extension(tmp_path, capsys):
    src = _write_csv(tmp_path, "L,V\nA,1\nB,2")
    code = render.main(
        [str(src), "-o", str(tmp_path / "chart"), "--format", "jpeg", "--mode", "single"]
    )
    assert code == 0
    assert (tmp_path / "chart.jpg").exists()
    assert "Wrote 2 points (1 series)" in capsys.readouterr().out


def test_style_options_are_clamped_not_rejected(tmp_path):
    src = _write_csv(tmp_path)
    code = render.main(
        [
            str(src),
            "-o",
            str(tmp_path / "styled.png"),
            "--corner-radius",
            "25",
            "--bar-width",
            "1",
            "--opacity",
            "3",
            "--horizontal",
            "--no-legend",
        ]
    )
    assert code == 0


def test_invalid_color_exit_code(tmp_path, capsys):
    src = _write_csv(tmp_path)
    code = render.main([str(src), "-o", str(tmp_path / "c.png"), "--color", "blue"])
    assert code == 2
    assert "Invalid option" in capsys.readouterr().err


def test_unreadable_input_exit_code(tmp_path, capsys):
    code = render.main([str(tmp_path / "missing.csv"), "-o", str(tmp_path / "c.png")])
    assert code == 2
    assert "Could not read" in capsys.readouterr().err


def test_unwritable_output_exit_code(tmp_path, capsys):
    src = _write_csv(tmp_path)
    code = render.main([str(src), "-o", str(tmp_path / "no" / "c.png"), "--json"])
    summary = json.loads(capsys.readouterr().out)
    assert code == 1
    assert summary["error"] == "unwritable"


def test_overflowing_category_totals_still_render(tmp_path, capsys):
    src = _write_csv(tmp_path, "L,V\nA,1e308\nA,1e308\nB,2")
    for kind in ("pie", "bar"):
        out = tmp_path / f"{kind}.png"
        code = render.main([str(src), "-o", str(out), "--mode", "single", "--kind", kind, "--json"])
        summary = json.loads(capsys.readouterr().out)
        assert code == 0
        assert summary["ok"] is True
        assert summary["points"] == 3
        assert out.read_bytes().startswith(b"\x89PNG")
