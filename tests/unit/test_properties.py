from pathlib import Path

import pytest

from installkit.core.config import BuildConfig, load_build_config
from installkit.core.properties import parse_properties


def test_parse_properties_separators_and_comments() -> None:
    text = """
# comment
! another comment
netbeans.version=27
nbpackage.url : https://example.org/nbpackage-1.0-bin.zip
jdk.linux.x64.sha   abc
  padded.key = padded value  
empty.key=
"""
    parsed = parse_properties(text)

    assert parsed == {
        "netbeans.version": "27",
        "nbpackage.url": "https://example.org/nbpackage-1.0-bin.zip",
        "jdk.linux.x64.sha": "abc",
        "padded.key": "padded value",
        "empty.key": "",
    }


def test_parse_properties_line_continuation_and_escapes() -> None:
    text = "netbeans.url=https://example.org/\\\n    netbeans-27-bin.zip\nodd\\ key=a\\tb\n"

    parsed = parse_properties(text)

    assert parsed["netbeans.url"] == "https://example.org/netbeans-27-bin.zip"
    assert parsed["odd key"] == "a\tb"


def test_build_config_treats_blank_values_as_absent(tmp_path: Path) -> None:
    path = tmp_path / "build.properties"
    path.write_text("netbeans.version=   \nnetbeans.url= https://example.org/nb.zip \n", encoding="utf-8")

    config = load_build_config(path)

    assert config.value("netbeans.version") is None
    assert config.value("netbeans.url") == "https://example.org/nb.zip"
    assert config.value("missing") is None
    assert "netbeans.version" in config


def test_build_config_is_read_only() -> None:
    source = {"a.url": "https://example.org/a.zip"}
    config = BuildConfig(source)
    source["b.url"] = "https://example.org/b.zip"

    assert list(config) == ["a.url"]
    with pytest.raises(TypeError):
        config.entries["c.url"] = "x"  # type: ignore[index]
