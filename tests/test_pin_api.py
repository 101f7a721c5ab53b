from quotedesk.models.pin import PinProfile


def test_login_sets_session_cookies(client, pins):
    r = client.post("/pin", json={"pin": pins["admin"].pin})

    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert client.cookies.get("pin_auth") == pins["admin"].pin
    assert client.cookies.get("pin_role") == "admin"
    set_cookie = r.headers.get_list("set-cookie")
    assert all("HttpOnly" in c and "samesite=lax" in c.lower() for c in set_cookie)
    assert all("Max-Age=3600" in c for c in set_cookie)


def test_login_rejects_malformed_pin(client):
    r = client.post("/pin", json={"pin": "12ab"})
    assert r.status_code == 400
    assert r.json() == {"error": "กรุณากรอก PIN 6 หลัก"}


def test_login_rejects_unknown_pin(client, pins):
    r = client.post("/pin", json={"pin": "111222"})
    assert r.status_code == 401
    assert r.json() == {"error": "PIN ไม่ถูกต้อง"}


def test_profile_blank_without_session(client):
    r = client.get("/pin")
    assert r.json() == {"firstName": "", "lastName": "", "role": "user", "signatureImage": ""}


def test_profile_for_session(client, login, pins):
    login(pins["user"].pin)
    r = client.get("/pin")
    assert r.json() == {
        "firstName": "Suda",
        "lastName": "Rakdee",
        "role": "user",
        "signatureImage": "",
    }


def test_logout_clears_pin_cookie(client, login, pins):
    login(pins["user"].pin)
    r = client.get("/logout", follow_redirects=False)

    assert r.status_code == 302
    assert r.headers["location"] == "/pin"
    assert 'pin_auth=""' in r.headers["set-cookie"]


def test_pin_management_is_admin_only(client, login, pins):
    assert client.get("/pins").status_code == 403
    login(pins["user"].pin)
    assert client.get("/pins").status_code == 403
    body = {"pin": "246810", "firstName": "Anan", "lastName": "Boonmee"}
    assert client.post("/pin/register", json=body).status_code == 403


def test_list_pins(client, login, pins):
    login(pins["admin"].pin, role="admin")
    r = client.get("/pins")

    assert r.status_code == 200
    assert {row["pin"] for row in r.json()} == {pins["admin"].pin, pins["user"].pin}
    assert {"id", "pin", "firstName", "lastName", "signatureImage", "createdAt"} <= set(r.json()[0])


def test_master_pin_manages_pins(client, login, db):
    login("000000")
    r = client.post(
        "/pin/register",
        json={"pin": "246810", "firstName": "Anan", "lastName": "Boonmee", "role": "ADMIN"},
    )

    assert r.status_code == 200
    profile = db.query(PinProfile).filter_by(pin="246810").one()
    assert profile.role == "admin"
    assert profile.signature_image is None


def test_create_pin_validation(client, login, pins):
    login(pins["admin"].pin, role="admin")
    base = {"pin": "246810", "firstName": "Anan", "lastName": "Boonmee", "role": "user"}

    r = client.post("/pin/register", json={**base, "lastName": ""})
    assert r.json() == {"error": "กรุณากรอกชื่อและนามสกุล"}

    r = client.post("/pin/register", json={**base, "pin": "12345"})
    assert r.json() == {"error": "กรุณากรอก PIN 6 หลัก"}

    r = client.post("/pin/register", json={**base, "role": "owner"})
    assert r.json() == {"error": "กรุณาเลือก Role ให้ถูกต้อง"}

    r = client.post("/pin/register", json={**base, "signatureImage": "https://example.com/sig.png"})
    assert r.status_code == 400
    assert r.json() == {"error": "ลายเซ็นต้องเป็นไฟล์รูปภาพ"}

    r = client.post("/pin/register", json={**base, "pin": pins["user"].pin})
    assert r.status_code == 409


def test_update_pin(client, login, pins, db):
    login(pins["admin"].pin, role="admin")
    r = client.put(
        f"/pins/{pins['user'].id}",
        json={
            "pin": "777777",
            "firstName": "Suda",
            "lastName": "Rakdee",
            "signatureImage": "data:image/png;base64,AAAA",
        },
    )

    assert r.status_code == 200
    assert r.json()["pin"] == "777777"
    assert r.json()["signatureImage"] == "data:image/png;base64,AAAA"

    # omitted signatureImage leaves the stored one alone
    r = client.put(
        f"/pins/{pins['user'].id}",
        json={"pin": "777777", "firstName": "Suda", "lastName": "R."},
    )
    assert r.json()["signatureImage"] == "data:image/png;base64,AAAA"
    assert r.json()["lastName"] == "R."


def test_update_pin_conflict_and_missing(client, login, pins):
    login(pins["admin"].pin, role="admin")
    body = {"pin": pins["admin"].pin, "firstName": "Suda", "lastName": "Rakdee"}

    assert client.put(f"/pins/{pins['user'].id}", json=body).status_code == 409
    assert client.put("/pins/missing", json={**body, "pin": "888888"}).status_code == 404


def test_delete_pin(client, login, pins):
    user_id = pins["user"].id
    login(pins["admin"].pin, role="admin")

    assert client.delete(f"/pins/{user_id}").json() == {"ok": True}
    assert client.delete(f"/pins/{user_id}").status_code == 404
