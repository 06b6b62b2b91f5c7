import json

import pytest

from scorebook.domain.commands import AddTimeout, Undo, UpdatePlayerStat
from scorebook.domain.history import HistoryStore, reduce
from scorebook.infra.repo.history_repo import HistoryDecodeError, HistoryRepository, dumps, loads
from scorebook.infra.repo.side_channel.memory import InMemoryKeyValueStore


@pytest.fixture
def store(snapshot):
    store = HistoryStore.initial(snapshot)
    store = reduce(store, UpdatePlayerStat("home", "h1", "fg2m", 1))
    store = reduce(store, AddTimeout("away"))
    return reduce(store, Undo())


def test_document_shape(store):
    document = json.loads(dumps(store))
    assert set(document) == {"past", "present", "future"}
    assert len(document["past"]) == 1
    assert len(document["future"]) == 1

    home = document["present"]["home_team"]
    player = home["players"][0]
    assert player["onBench"] is False
    assert player["summary"]["fg2m"] == 1
    assert player["total_score"] == 2
    assert home["teamF_per_qtr"] == [{"qtr": 1, "foul": 0}]
    assert document["future"][0]["away_team"]["timeouts"] == [{"qtr": 1, "game_time": "10:00"}]


def test_loads_restores_equal_store(store):
    assert loads(dumps(store)) == store


@pytest.mark.parametrize("raw", [b"", b"not json", b"[]", b'{"past": []}', b"\xff\xfe"])
def test_loads_rejects_corrupt_documents(raw):
    with pytest.raises(HistoryDecodeError):
        loads(raw)


def test_repository_save_load_delete(store):
    side_channel = InMemoryKeyValueStore()
    repo = HistoryRepository(side_channel, key="game")

    assert repo.load() is None
    repo.save(store)
    assert side_channel.get("game") is not None
    assert repo.load() == store

    repo.delete()
    assert repo.load() is None


def test_loads_rederives_stale_totals(store):
    document = json.loads(dumps(store))
    present = document["present"]
    present["home_team"]["players"][0]["total_score"] = 40
    present["home_total_score"] = 40
    present["away_total_score"] = 12

    restored = loads(json.dumps(document).encode())

    assert restored.present.home_team.players[0].total_score == 2
    assert restored.present.home_total_score == 2
    assert restored.present.away_total_score == 0
    assert restored == store
