from gamevault.enrichment.normalizer import (
    normalize_detail, normalize_summaries, normalize_taxonomy, parse_records
)
from gamevault.models.game import GameDetail


def test_summaries_rewrite_cover_and_keep_other_fields(sample_games):
    games = normalize_summaries(sample_games)

    assert [g["id"] for g in games] == [10, 20, 30]
    assert games[0]["cover"] == {"id": 1, "url": "https://images.igdb.com/igdb/image/upload/t_cover_big/co1.jpg"}
    assert games[0]["platforms"] == [{"id": 6, "abbreviation": "PC"}]
    assert games[0]["name"] == "Hollow Knight"
    assert games[2]["cover"] is None


def test_cover_without_url_gets_empty_string():
    games = normalize_summaries([{"id": 1, "cover": {"id": 9}}])
    assert games[0]["cover"] == {"id": 9, "url": ""}


def test_records_without_valid_id_are_dropped():
    games = normalize_summaries([{"name": "no id"}, {"id": "x"}, "junk", {"id": 4, "name": "ok"}])
    assert [g["id"] for g in games] == [4]


def test_non_list_payload_is_treated_as_empty():
    assert normalize_summaries({"message": "oops"}) == []
    assert parse_records(None, GameDetail) == []


def test_detail_normalization():
    raw = {
        "id": 7,
        "name": "Outer Wilds",
        "cover": {"id": 1, "url": "//images.igdb.com/igdb/image/upload/t_thumb/c.jpg"},
        "screenshots": [
            {"id": 2, "url": "//images.igdb.com/igdb/image/upload/t_thumb/s1.jpg"},
            {"id": 3},
        ],
        "platforms": [
            {"id": 6, "name": "PC", "platform_logo": {"id": 4, "url": "//images.igdb.com/igdb/image/upload/t_thumb/pl.png"}},
            {"id": 48, "name": "PS4"},
        ],
        "similar_games": [5, 5, 0, -1, 8, 3.5],
        "summary": "A mystery.",
    }
    game = normalize_detail(GameDetail.model_validate(raw))

    assert game["cover"]["url"] == "https://images.igdb.com/igdb/image/upload/t_original/c.jpg"
    assert [s["url"] for s in game["screenshots"]] == [
        "https://images.igdb.com/igdb/image/upload/t_1080p/s1.jpg",
        "",
    ]
    assert game["platforms"][0]["platform_logo"]["url"] == "https://images.igdb.com/igdb/image/upload/t_logo_med/pl.png"
    assert "platform_logo" not in game["platforms"][1]
    assert game["similar_games"] == [5, 8]
    assert game["summary"] == "A mystery."


def test_detail_defaults_for_missing_lists():
    game = normalize_detail(GameDetail.model_validate({"id": 1, "name": "Bare"}))
    assert game["cover"] is None
    assert game["screenshots"] == []
    assert game["similar_games"] == []
    assert "platforms" not in game


def test_taxonomy_passthrough():
    entries = normalize_taxonomy([{"id": 5, "name": "Shooter"}, {"id": 6, "name": "Platform", "abbreviation": "PF"}])
    assert entries == [{"id": 5, "name": "Shooter"}, {"id": 6, "name": "Platform", "abbreviation": "PF"}]
