import json


def _read_store(store):
    return json.loads(store.store_path.read_text(encoding="utf-8"))


def test_family_member_crud(client, store):
    list_members = client.get("/family-members")
    assert list_members.status_code == 200
    assert [item["id"] for item in list_members.json()] == [1, 2, 3]

    get_member = client.get("/family-members/2")
    assert get_member.status_code == 200
    assert get_member.json()["externalId"] == "0.1"

    create_member = client.post(
        "/family-members",
        json={"externalId": "2", "name": "Lars (Tygesson) Gyllencreutz", "father": "0.1", "nobleBranch": "Elder"},
    )
    assert create_member.status_code == 201
    created = create_member.json()["member"]
    assert created["id"] == 4
    assert created["nobleBranch"] == "Elder"
    assert "birth" not in created

    update_member = client.put(
        "/family-members/4",
        json={"id": 99, "externalId": "2", "name": "Lars Gyllencreutz", "death": "1623"},
    )
    assert update_member.status_code == 200
    assert update_member.json()["member"] == {
        "id": 4,
        "externalId": "2",
        "name": "Lars Gyllencreutz",
        "death": "1623",
    }

    delete_member = client.delete("/family-members/1")
    assert delete_member.status_code == 200
    assert delete_member.json()["deletedMember"]["name"] == "Lars Tygesson"

    assert [item["id"] for item in _read_store(store)] == [2, 3, 4]
    # Single-record edits do not take backups.
    assert list(store.data_dir.glob(f"{store.backup_prefix}*.json")) == []


def test_create_family_member_in_empty_store_starts_at_one(client, store):
    store.store_path.write_text("[]", encoding="utf-8")

    resp = client.post("/family-members", json={"externalId": "0", "name": "Root"})
    assert resp.status_code == 201
    assert resp.json()["member"]["id"] == 1


def test_create_family_member_requires_name(client, store):
    before = store.store_path.read_bytes()

    resp = client.post("/family-members", json={"externalId": "9"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid family member payload"
    assert store.store_path.read_bytes() == before


def test_missing_family_member_returns_404(client):
    for resp in (
        client.get("/family-members/42"),
        client.put("/family-members/42", json={"externalId": "x", "name": "Nobody"}),
        client.delete("/family-members/42"),
    ):
        assert resp.status_code == 404
        assert resp.json() == {"error": "Family member not found"}


def test_search_family_members_matches_name_and_notes(client):
    by_name = client.get("/family-members/search/gyllen")
    assert by_name.status_code == 200
    assert [item["id"] for item in by_name.json()] == [2, 3]

    by_notes = client.get("/family-members/search/PLAGUE")
    assert [item["id"] for item in by_notes.json()] == [3]

    no_match = client.get("/family-members/search/zz")
    assert no_match.json() == []


def test_search_family_members_rejects_short_query(client):
    resp = client.get("/family-members/search/a")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Search query must be at least 2 characters"}


def test_list_family_members_with_corrupt_store_returns_500(client, store):
    store.store_path.write_text("{not json", encoding="utf-8")

    resp = client.get("/family-members")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to read family data"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_family_member_with_nan_leaves_store_untouched(client, store):
    before = store.store_path.read_bytes()

    resp = client.post(
        "/family-members",
        content=b'{"externalId": "9", "name": "Nils", "score": NaN}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to add family member"}
    assert store.store_path.read_bytes() == before
    assert client.get("/family-members").status_code == 200
