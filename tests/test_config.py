from pathlib import Path

import pytest

from pughtml.config import load_config, parse_config
from pughtml.errors import ConfigError


def test_parse_full_config(tmp_path: Path):
    (tmp_path / "partials").mkdir()
    (tmp_path / "partials" / "nav.pug").write_text("nav")
    (tmp_path / "site.css").write_text("")
    config = parse_config({
        "write": [{"src": "index.pug", "dst": "out/index.html"}],
        "headers": ["partials/*.pug"],
        "watch": "*.css",
        "include_dir": "partials",
        "max_include_depth": 4,
    }, tmp_path)

    assert config.write_pairs == {tmp_path / "index.pug": tmp_path / "out" / "index.html"}
    assert config.header_paths == {tmp_path / "partials" / "nav.pug"}
    assert config.watch_paths == {tmp_path / "site.css"}
    assert config.include_dir == tmp_path / "partials"
    assert config.max_include_depth == 4
    assert config.source_paths == {
        tmp_path / "index.pug", tmp_path / "partials" / "nav.pug", tmp_path / "site.css",
    }


def test_defaults(tmp_path: Path):
    config = parse_config({"write": [{"src": "a.pug", "dst": "a.html"}]}, tmp_path)
    assert config.header_paths == set()
    assert config.watch_paths == set()
    assert config.include_dir is None
    assert config.max_include_depth == 32


@pytest.mark.parametrize("cfg", [
    None,
    [],
    {},
    {"write": []},
    {"write": [{"src": "a.pug"}]},
    {"write": ["a.pug"]},
    {"write": [{"src": "a.pug", "dst": "a.html"}], "max_include_depth": 0},
    {"write": [{"src": "a.pug", "dst": "a.html"}], "max_include_depth": True},
    {"write": [{"src": "a.pug", "dst": "a.html"}], "watch": {"x": 1}},
])
def test_invalid_config(cfg, tmp_path: Path):
    with pytest.raises(ConfigError):
        parse_config(cfg, tmp_path)


def test_load_config_reads_yaml(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path("pughtml.yml").write_text("write:\n  - src: index.pug\n    dst: index.html\n")
    config = load_config("pughtml.yml")
    assert config.write_pairs == {Path("index.pug"): Path("index.html")}


def test_load_config_errors(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yml")
    bad = tmp_path / "bad.yml"
    bad.write_text("write: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(bad)
