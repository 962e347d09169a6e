import pytest
from typer.testing import CliRunner

from themec import __version__
from themec.cache import cache_path_for
from themec.cli import typer_app

runner = CliRunner()


@pytest.fixture(autouse=True)
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert f"themec {__version__}" in result.output


def test_compile_prints_output(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("{% if $ok %}{{ $x }}{% :if %}")

    result = runner.invoke(typer_app, ["compile", str(page)])

    assert result.exit_code == 0
    assert "{% if ok %}{{ x }}{% endif %}" in result.output


def test_compile_writes_output_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("{{ $x }}")
    out = tmp_path / "out" / "page.j2"

    result = runner.invoke(typer_app, ["compile", str(page), "-o", str(out)])

    assert result.exit_code == 0
    assert "Wrote compiled theme" in result.output
    assert out.read_text().endswith("\n{{ x }}")


def test_compile_missing_file(tmp_path):
    result = runner.invoke(typer_app, ["compile", str(tmp_path / "nope.html")])
    assert result.exit_code == 1


def test_compile_unpaired_tag_fails(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("{% if $ok %}never closed")

    result = runner.invoke(typer_app, ["compile", str(page)])
    assert result.exit_code == 1


def test_cache_compiles_configured_themes(tmp_path):
    themes = tmp_path / "themes"
    (themes / "vendor").mkdir(parents=True)
    (themes / "a.html").write_text("{{ $a }}")
    (themes / "vendor" / "b.html").write_text("{{ $b }}")
    cfg = tmp_path / "themec.yaml"
    cfg.write_text("view:\n  theme_path: themes\n  cache_path: cache\n")

    result = runner.invoke(typer_app, ["cache", "-c", str(cfg)])

    assert result.exit_code == 0
    assert "View files cache succeed." in result.output
    assert cache_path_for(themes / "a.html", tmp_path / "cache").exists()
    assert not cache_path_for(themes / "vendor" / "b.html", tmp_path / "cache").exists()


def test_cache_missing_dir(tmp_path):
    result = runner.invoke(typer_app, ["cache", str(tmp_path / "nope")])
    assert result.exit_code == 1


def test_tree_shows_nodes(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("{% if $ok %}A{% :if %}")

    result = runner.invoke(typer_app, ["tree", str(page)])

    assert result.exit_code == 0
    assert "ifNode" in result.output
