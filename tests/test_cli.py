import io
import subprocess
import sys
from pathlib import Path

import pytest

from jhtml.cli import main

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_source(tmp_path: Path, text: str, name: str = "page.jhtml") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_writes_output_file(tmp_path: Path):
    src = _write_source(tmp_path, '{ $: "h1", body: "Hello World" }')
    out = tmp_path / "out" / "index.html"

    main([str(src), "-o", str(out)])

    assert out.read_text(encoding="utf-8") == "<h1>Hello World</h1>"


def test_cli_prints_to_stdout(tmp_path: Path, capsys):
    src = _write_source(tmp_path, '{ $: "br" }')

    main([str(src), "--doctype"])

    assert capsys.readouterr().out == "<!DOCTYPE html><br />\n"


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO('["a", { $: "b", body: "c" }]'))

    main(["-"])

    assert capsys.readouterr().out == "a<b>c</b>\n"


def test_cli_config_and_flag_override(tmp_path: Path, capsys):
    src = _write_source(tmp_path, '{ $: "p", body: "1 < 2" }')
    config = tmp_path / "jhtml.yaml"
    config.write_text("escape: true\ndoctype: true\n", encoding="utf-8")

    main([str(src), "--config", str(config)])
    assert capsys.readouterr().out == "<!DOCTYPE html><p>1 &lt; 2</p>\n"

    main([str(src), "--config", str(config), "--no-escape", "--no-doctype"])
    assert capsys.readouterr().out == "<p>1 < 2</p>\n"


def test_cli_rejects_invalid_config(tmp_path: Path):
    src = _write_source(tmp_path, '{ $: "br" }')
    config = tmp_path / "jhtml.yaml"
    config.write_text("pretty: true\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main([str(src), "--config", str(config)])
    assert "Invalid config" in str(exc.value.code)


def test_cli_rejects_non_mapping_config(tmp_path: Path):
    src = _write_source(tmp_path, '{ $: "br" }')
    config = tmp_path / "jhtml.yaml"
    config.write_text("- escape\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main([str(src), "--config", str(config)])
    assert "mapping" in str(exc.value.code)


def test_cli_missing_source(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.jhtml")])
    assert "Source file not found" in str(exc.value.code)


@pytest.mark.parametrize("text", ['{ $: "p", body: ', '{ body: "nameless" }'])
def test_cli_reports_compile_errors(tmp_path: Path, text: str):
    src = _write_source(tmp_path, text)

    with pytest.raises(SystemExit) as exc:
        main([str(src)])
    assert "Failed to compile" in str(exc.value.code)


def test_cli_warns_about_duplicate_doctype(tmp_path: Path, capsys):
    src = _write_source(tmp_path, '[{ $: "doctype" }, { $: "html" }]')

    main([str(src), "--doctype"])

    captured = capsys.readouterr()
    assert captured.out == "<!DOCTYPE html><!DOCTYPE html><html />\n"
    assert "second doctype" in captured.err


def test_cli_module_entrypoint(tmp_path: Path):
    src = _write_source(tmp_path, '{ $: "h1", "class": "title", body: "Hi" }')

    result = subprocess.run(
        [sys.executable, "-m", "jhtml.cli", str(src)],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == '<h1 class="title">Hi</h1>\n'


def test_cli_rejects_undecodable_source(tmp_path: Path):
    src = tmp_path / "page.jhtml"
    src.write_bytes(b"\xff")

    with pytest.raises(SystemExit) as exc:
        main([str(src)])
    assert "Cannot read" in str(exc.value.code)


def test_cli_rejects_directory_source(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path)])
    assert "Cannot read" in str(exc.value.code)


def test_cli_does_not_warn_about_doctype_text(tmp_path: Path, capsys):
    src = _write_source(tmp_path, '{ $: "pre", body: "<!DOCTYPE html>" }')

    main([str(src), "--doctype"])

    captured = capsys.readouterr()
    assert captured.out == "<!DOCTYPE html><pre><!DOCTYPE html></pre>\n"
    assert captured.err == ""
