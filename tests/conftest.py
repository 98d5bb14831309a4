from __future__ import annotations

import pytest

ALL_STAR = """\
#TITLE:All Star
#ARTIST:Smash Mouth
#MP3:05-All Star.mp3
#BPM:104
#GAP:500
: 0 18 54 Some
: 9 12 61 bo
- 20
: 22 5 58 dy 
: 28 4 58 once told 
-
E
"""


@pytest.fixture
def all_star() -> str:
    return ALL_STAR


@pytest.fixture
def song_file(tmp_path, all_star):
    path = tmp_path / "All Star.txt"
    path.write_text(all_star, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in (
        "ULTRASTAR_LYRICS_ENCODING",
        "ULTRASTAR_LYRICS_HTTP_TIMEOUT",
        "ULTRASTAR_LYRICS_HTTP_MAX_RETRIES",
        "ULTRASTAR_LYRICS_HTTP_BACKOFF_BASE",
        "ULTRASTAR_LYRICS_JSON_INDENT",
        "ULTRASTAR_LYRICS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
