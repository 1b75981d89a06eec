import re
from datetime import datetime, timedelta, timezone

DATE_RE = re.compile(r"^[A-Z][a-z]+ \d{1,2}(st|nd|rd|th) \d{4}, \d{1,2}:\d{2}:\d{2} (am|pm)$")


def _in(**kwargs) -> str:
    return (datetime.now(timezone.utc) + timedelta(**kwargs)).isoformat()


def _post(client, headers, content="hello fritter", **extra):
    return client.post("/api/posts", json={"content": content, **extra}, headers=headers)


def test_create_default_freet(client, make_user):
    alice = make_user("alice")
    res = _post(client, alice, typeFreet="default")
    assert res.status_code == 201
    body = res.json()
    freet = body["freet"]
    assert body["message"] == "Your freet was created successfully."
    assert isinstance(freet["_id"], str)
    assert freet["author"] == "alice"
    assert "authorId" not in freet
    assert freet["freetType"] == "default"
    assert freet["edited"] is False
    assert freet["expiration"] == "January 1st 4000, 12:00:00 am"
    for key in ("dateCreated", "dateModified", "expiration"):
        assert DATE_RE.match(freet[key])


def test_create_requires_login(client):
    res = client.post("/api/posts", json={"content": "anon", "typeFreet": "default"})
    assert res.status_code == 403
    assert "error" in res.json()


def test_content_shape_errors(client, make_user):
    alice = make_user("alice")
    assert _post(client, alice, content="   ", typeFreet="default").status_code == 400
    assert _post(client, alice, content="x" * 141, typeFreet="default").status_code == 413
    assert _post(client, alice, typeFreet="bogus").status_code == 400
    assert client.get("/api/posts").json() == []


def test_fleeting_needs_future_expiration(client, make_user):
    alice = make_user("alice")
    assert _post(client, alice, typeFreet="fleeting").status_code == 400
    assert _post(client, alice, typeFreet="fleeting", expiration=_in(hours=-1)).status_code == 400

    res = _post(client, alice, typeFreet="fleeting", expiration=_in(days=1))
    assert res.status_code == 201
    assert res.json()["freet"]["freetType"] == "fleeting"


def test_list_by_author_newest_modified_first(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    first = _post(client, alice, content="first", typeFreet="default").json()["freet"]
    _post(client, bob, content="bob's", typeFreet="default")
    _post(client, alice, content="second", typeFreet="default")

    # editing bumps the modified time to the top
    client.patch(f"/api/posts/{first['_id']}", json={"content": "first, edited"}, headers=alice)

    res = client.get("/api/posts", params={"author": "alice"})
    assert res.status_code == 200
    assert [f["content"] for f in res.json()] == ["first, edited", "second"]
    assert len(client.get("/api/posts").json()) == 3


def test_unknown_author_is_404(client):
    assert client.get("/api/posts", params={"author": "nobody"}).status_code == 404


def test_get_single_and_malformed_id(client, make_user):
    alice = make_user("alice")
    fid = _post(client, alice, typeFreet="default").json()["freet"]["_id"]
    assert client.get(f"/api/posts/{fid}").json()["_id"] == fid
    assert client.get("/api/posts/not-an-id").status_code == 404
    assert client.get("/api/posts/9999").status_code == 404


def test_edit_marks_edited_and_checks_owner(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    fid = _post(client, alice, typeFreet="default").json()["freet"]["_id"]

    res = client.patch(f"/api/posts/{fid}", json={"content": "not yours"}, headers=bob)
    assert res.status_code == 403

    res = client.patch(f"/api/posts/{fid}", json={"content": "updated"}, headers=alice)
    assert res.status_code == 200
    freet = res.json()["freet"]
    assert freet["content"] == "updated"
    assert freet["edited"] is True

    assert client.patch(f"/api/posts/{fid}", json={"content": ""}, headers=alice).status_code == 400


def test_edit_fleeting_expiration(client, make_user):
    alice = make_user("alice")
    fid = _post(client, alice, typeFreet="fleeting", expiration=_in(days=1)).json()["freet"]["_id"]
    before = client.get(f"/api/posts/{fid}").json()["expiration"]

    res = client.patch(f"/api/posts/{fid}", json={"content": "later", "expiration": _in(days=5)}, headers=alice)
    assert res.status_code == 200
    assert res.json()["freet"]["expiration"] != before

    res = client.patch(f"/api/posts/{fid}", json={"content": "later", "expiration": _in(days=-5)}, headers=alice)
    assert res.status_code == 400


def test_feed_and_archive_views(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    keep = _post(client, alice, content="keep", typeFreet="default").json()["freet"]["_id"]
    gone = _post(client, alice, content="gone", typeFreet="default").json()["freet"]["_id"]
    _post(client, bob, content="bob", typeFreet="default")

    res = client.patch(f"/api/posts/archived/{gone}", json={"archiveStatus": "archive"}, headers=alice)
    assert res.status_code == 200
    assert res.json()["freet"]["freetType"] == "fleeting"

    feed_ids = [f["_id"] for f in client.get("/api/posts/feed").json()]
    assert keep in feed_ids
    assert gone not in feed_ids

    archived = client.get("/api/posts/archived", headers=alice).json()
    assert [f["_id"] for f in archived] == [gone]
    assert client.get("/api/posts/archived", headers=bob).json() == []
    assert client.get("/api/posts/archived").status_code == 403


def test_archive_round_trip(client, make_user):
    alice = make_user("alice")
    fid = _post(client, alice, typeFreet="default").json()["freet"]["_id"]

    client.patch(f"/api/posts/archived/{fid}", json={"archiveStatus": "archive"}, headers=alice)
    res = client.patch(f"/api/posts/archived/{fid}", json={"archiveStatus": "unarchive"}, headers=alice)
    assert res.status_code == 200
    freet = res.json()["freet"]
    assert freet["freetType"] == "default"
    assert freet["expiration"] == "January 1st 4000, 12:00:00 am"


def test_archive_guards(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    fid = _post(client, alice, typeFreet="default").json()["freet"]["_id"]

    # not expired, so there is nothing to unarchive
    res = client.patch(f"/api/posts/archived/{fid}", json={"archiveStatus": "unarchive"}, headers=alice)
    assert res.status_code == 400
    assert res.json()["error"] == "Cannot be unarchived"

    res = client.patch(f"/api/posts/archived/{fid}", json={"archiveStatus": "archive"}, headers=bob)
    assert res.status_code == 403

    client.patch(f"/api/posts/archived/{fid}", json={"archiveStatus": "archive"}, headers=alice)
    res = client.patch(f"/api/posts/archived/{fid}", json={"archiveStatus": "archive"}, headers=alice)
    assert res.status_code == 400


def test_delete_freet(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    fid = _post(client, alice, typeFreet="default").json()["freet"]["_id"]

    assert client.delete(f"/api/posts/{fid}", headers=bob).status_code == 403
    res = client.delete(f"/api/posts/{fid}", headers=alice)
    assert res.status_code == 200
    assert res.json() == {"message": "Your freet was deleted successfully."}
    assert client.get(f"/api/posts/{fid}").status_code == 404
    assert client.delete(f"/api/posts/{fid}", headers=alice).status_code == 404
