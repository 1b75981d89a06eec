from sqlalchemy import func, select

from fritter.core.config import settings
from fritter.models.freet import Freet
from fritter.models.fritter_pay import FritterPay
from fritter.models.merchant_freet import MerchantFreet


def test_signup_rejects_duplicates_and_bad_usernames(client, make_user):
    make_user("alice")
    res = client.post("/auth/signup", json={"username": "alice", "password": "password123"})
    assert res.status_code == 409
    assert res.json() == {"error": "USERNAME_DUPLICATE"}

    res = client.post("/auth/signup", json={"username": "bad name", "password": "password123"})
    assert res.status_code == 400
    assert "username" in res.json()["error"]


def test_login_and_me(client, make_user):
    alice = make_user("alice")
    res = client.get("/api/users/me", headers=alice)
    assert res.status_code == 200
    assert res.json()["username"] == "alice"

    res = client.post("/auth/login", json={"username": "alice", "password": "wrongpassword"})
    assert res.status_code == 401

    res = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert client.get("/api/users/me").status_code == 403


def test_refresh_issues_new_access_token(client, make_user):
    make_user("alice")
    res = client.post("/auth/login", json={"username": "alice", "password": "password123"})
    # the cookie is Secure, so the http test client will not replay it on its own
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith("refreshToken=")
    refresh_token = set_cookie.split(";", 1)[0].split("=", 1)[1]
    assert f"Max-Age={settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60}" in set_cookie

    res = client.post("/auth/refresh", headers={"Cookie": f"refreshToken={refresh_token}"})
    assert res.status_code == 200
    assert res.json()["accessToken"]


def test_delete_account_cascades(client, db, make_user, add_fritter_pay):
    alice = make_user("alice")
    add_fritter_pay(alice)
    client.post("/api/posts", json={"content": "plain", "typeFreet": "default"}, headers=alice)
    client.post(
        "/api/posts",
        json={"content": "bike", "typeFreet": "merchant", "listingName": "Bike", "listingPrice": 50},
        headers=alice,
    )

    res = client.delete("/api/users/me", headers=alice)
    assert res.status_code == 200

    for model in (Freet, MerchantFreet, FritterPay):
        assert db.scalar(select(func.count()).select_from(model)) == 0


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok", "database": "sqlite"}
