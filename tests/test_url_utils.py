import pytest

from gamevault.utils.url_utils import format_igdb_image


class TestFormatIgdbImage:
    def test_upgrades_protocol_relative_and_resizes(self):
        url = "//images.igdb.com/igdb/image/upload/t_thumb/co1wyy.jpg"
        assert format_igdb_image(url, "t_cover_big") == "https://images.igdb.com/igdb/image/upload/t_cover_big/co1wyy.jpg"

    def test_https_url_is_resized(self):
        url = "https://images.igdb.com/igdb/image/upload/t_screenshot_med/sc6.jpg"
        assert format_igdb_image(url, "t_1080p") == "https://images.igdb.com/igdb/image/upload/t_1080p/sc6.jpg"

    def test_http_is_upgraded(self):
        url = "http://images.igdb.com/igdb/image/upload/t_thumb/co1.jpg"
        assert format_igdb_image(url, "t_original") == "https://images.igdb.com/igdb/image/upload/t_original/co1.jpg"

    def test_only_first_size_segment_is_replaced(self):
        url = "//images.igdb.com/igdb/image/upload/t_thumb/t_keep/co1.jpg"
        assert format_igdb_image(url, "t_cover_big") == "https://images.igdb.com/igdb/image/upload/t_cover_big/t_keep/co1.jpg"

    def test_url_without_size_segment_is_kept(self):
        assert format_igdb_image("//cdn.example.com/a.jpg", "t_cover_big") == "https://cdn.example.com/a.jpg"

    @pytest.mark.parametrize("value", [None, "", "   ", 42, {"url": "//x"}, "not a url", "ftp://host/t_thumb/a.jpg", "https://"])
    def test_non_urls_become_empty_string(self, value):
        assert format_igdb_image(value, "t_cover_big") == ""

    @pytest.mark.parametrize("url", [
        "//images.igdb.com/igdb/image/upload/t_thumb/co1.jpg",
        "https://images.igdb.com/igdb/image/upload/t_720p/co1.jpg",
        "http://images.igdb.com/a.jpg",
        None,
    ])
    def test_is_idempotent(self, url):
        once = format_igdb_image(url, "t_1080p")
        assert format_igdb_image(once, "t_1080p") == once
        assert once == "" or once.startswith("https://")

    @pytest.mark.parametrize("url, expected", [
        ("//cdn.test_x.com/igdb/t_thumb/a.jpg", "https://cdn.test_x.com/igdb/t_cover_big/a.jpg"),
        ("//t_host.example.com/a.jpg", "https://t_host.example.com/a.jpg"),
        ("https://t_host.example.com/upload/t_thumb/a.jpg", "https://t_host.example.com/upload/t_cover_big/a.jpg"),
    ])
    def test_size_token_is_only_matched_in_the_path(self, url, expected):
        assert format_igdb_image(url, "t_cover_big") == expected
