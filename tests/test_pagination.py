import pytest

from socialfeed.config.settings import Settings
from socialfeed.utils.pagination import normalize_page, page_count


@pytest.mark.parametrize("page, limit, expected", [
    (None, None, (1, 20)),
    ("2", "5", (2, 5)),
    (3, 7, (3, 7)),
    ("abc", "xyz", (1, 20)),
    ("0", "-4", (1, 20)),
    ("-1", "10", (1, 10)),
    ("1.5", "10", (1, 10)),
    (" 4 ", "10", (4, 10)),
    ("1", "1000", (1, 100)),
])
def test_normalize_page(page, limit, expected):
    assert normalize_page(page, limit) == expected


def test_page_count():
    assert page_count(0, 20) == 0
    assert page_count(20, 20) == 1
    assert page_count(21, 20) == 2


def test_split_ratio_from_env(monkeypatch):
    monkeypatch.setenv("FEED_SPLIT_RATIO", "article:0.7,media:0.3")

    assert Settings().FEED_SPLIT_RATIO == {"article": 0.7, "media": 0.3}


def test_missing_config_file_uses_defaults(tmp_path):
    settings = Settings(config_path=str(tmp_path / "absent.yaml"))

    assert settings.DEFAULT_PAGE_SIZE == 20
    assert settings.COMMENT_MAX_LENGTH == 1000
    assert settings.FEED_SPLIT_RATIO == {"article": 0.5, "media": 0.5}
