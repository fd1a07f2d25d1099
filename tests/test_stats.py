from fastapi.testclient import TestClient

from gametrc_api.utils.game import create_game, update_game
from gametrc_api.utils.stats import compute_stats

from conftest import make_game


def test_empty_library(db):
    stats = compute_stats(db)
    assert stats.total_games == 0
    assert stats.average_rating is None
    assert stats.completion_rate == 0
    assert stats.total_playtime_hours == 0
    assert stats.by_status.model_dump() == {
        "not_started": 0,
        "playing": 0,
        "completed": 0,
        "dropped": 0,
        "backlog": 0,
        "wishlist": 0,
    }
    assert stats.games_by_platform == []
    assert stats.recent_completions == []


def test_three_game_scenario(db):
    create_game(db, make_game(title="Done", status="Completed", rating=9))
    create_game(db, make_game(title="Wanted", status="Wishlist"))
    create_game(db, make_game(title="Later", status="Backlog", rating=7, playtime_hours=10))

    stats = compute_stats(db)
    assert stats.total_games == 3
    assert stats.average_rating == 8.0
    assert stats.completion_rate == 50.0
    assert stats.total_playtime_hours == 10
    assert stats.by_status.completed == 1
    assert stats.by_status.wishlist == 1
    assert stats.by_status.backlog == 1
    assert stats.by_status.playing == 0
    assert stats.recent_completions == ["Done"]


def test_only_wishlist_has_zero_completion_rate(db):
    create_game(db, make_game(status="Wishlist"))
    assert compute_stats(db).completion_rate == 0.0


def test_genre_counts_rank_by_count_then_name(db):
    create_game(db, make_game(genres=["RPG"]))
    create_game(db, make_game(genres=["RPG", "Indie"]))

    stats = compute_stats(db)
    assert [(e.name, e.count) for e in stats.games_by_genre] == [("RPG", 2), ("Indie", 1)]


def test_platform_and_franchise_rankings(db):
    create_game(db, make_game(platform="Switch", franchise="Mario"))
    create_game(db, make_game(platform="PC", franchise="Zelda"))
    create_game(db, make_game(platform="PC"))
    create_game(db, make_game(platform="Switch", franchise="Mario"))
    create_game(db, make_game(platform="Amiga"))

    stats = compute_stats(db)
    assert [(e.name, e.count) for e in stats.games_by_platform] == [("PC", 2), ("Switch", 2), ("Amiga", 1)]
    assert [(e.name, e.count) for e in stats.games_by_franchise] == [("Mario", 2), ("Zelda", 1)]


def test_recent_completions_newest_first_and_capped(db):
    games = [create_game(db, make_game(title=f"Game {i}", status="Completed")) for i in range(7)]
    # touching the oldest makes it the most recent completion
    update_game(db, games[0].id, make_game(title="Game 0", status="Completed"))

    stats = compute_stats(db)
    assert len(stats.recent_completions) == 5
    assert stats.recent_completions[0] == "Game 0"
    assert stats.recent_completions[1:] == ["Game 6", "Game 5", "Game 4", "Game 3"]

    assert compute_stats(db, recent_limit=2).recent_completions == ["Game 0", "Game 6"]


def test_stats_reflect_changes_immediately(db):
    game = create_game(db, make_game(status="Playing"))
    assert compute_stats(db).by_status.playing == 1
    update_game(db, game.id, make_game(status="Completed"))
    stats = compute_stats(db)
    assert stats.by_status.playing == 0
    assert stats.by_status.completed == 1
    assert stats.completion_rate == 100.0


def test_stats_endpoint(client: TestClient):
    client.post("/games/", json=make_game(title="A", status="Completed", rating=8, genres=["RPG"]))
    client.post("/games/", json=make_game(title="B", status="Dropped", playtime_hours=2.5))

    resp = client.get("/stats/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_games"] == 2
    assert data["average_rating"] == 8.0
    assert data["completion_rate"] == 50.0
    assert data["total_playtime_hours"] == 2.5
    assert data["by_status"]["dropped"] == 1
    assert data["games_by_genre"] == [{"name": "RPG", "count": 1}]
    assert data["recent_completions"] == ["A"]
