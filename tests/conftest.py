import stat
import pytest
from pathlib import Path
from ibc.config.models import AppConfig, GeneralConfig, ToolConfig

PNG_SIZE = 1024

FAKE_OPTIPNG = """#!/bin/sh
# Stand-in for optipng: no arguments exits 0, "-o N file" shrinks the file to 3/4.
if [ "$#" -eq 0 ]; then
    exit 0
fi
file="$3"
keep=$(( $(wc -c < "$file") * 3 / 4 ))
head -c "$keep" "$file" > "$file.tmp" && mv "$file.tmp" "$file"
"""


def write_png(path: Path, size: int = PNG_SIZE) -> Path:
    header = b"\x89PNG\r\n\x1a\n"
    path.write_bytes(header + b"\x00" * (size - len(header)))
    return path

@pytest.fixture
def png_dirs(tmp_path):
    """Two directories: one with 2 PNGs and a text file, one without any PNG."""
    icons = tmp_path / "icons"
    icons.mkdir()
    write_png(icons / "a.png")
    write_png(icons / "b.png")
    (icons / "notes.txt").write_text("not an image")

    empty = tmp_path / "empty"
    empty.mkdir()
    (empty / "README.md").write_text("nothing here")

    return icons, empty

@pytest.fixture
def fake_optipng(tmp_path):
    script = tmp_path / "bin" / "optipng"
    script.parent.mkdir()
    script.write_text(FAKE_OPTIPNG)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script

@pytest.fixture
def app_config(png_dirs, fake_optipng):
    return AppConfig(
        general=GeneralConfig(directories=list(png_dirs), level=3),
        tool=ToolConfig(executable=str(fake_optipng))
    )
