CONTACT = {"name": "Ada", "email": "ada@example.com", "subject": "Hello", "message": "Nice site"}


def _unread(admin_client):
    return admin_client.get("/api/dashboard/stats").json()["unreadContactCount"]


def test_anonymous_contact_submission(client, login):
    resp = client.post("/api/contacts", json={**CONTACT, "isRead": True})
    assert resp.status_code == 201
    body = resp.json()
    assert body["isRead"] is False
    assert body["subject"] == "Hello"

    login(client)
    assert _unread(client) == 1


def test_contact_missing_email_is_rejected_and_not_stored(admin_client):
    before = _unread(admin_client)
    payload = {k: v for k, v in CONTACT.items() if k != "email"}

    resp = admin_client.post("/api/contacts", json=payload)

    assert resp.status_code == 400
    assert "email" in resp.json()["message"]
    assert _unread(admin_client) == before
    assert admin_client.get("/api/contacts").json() == []


def test_contact_bad_email_is_400(client):
    resp = client.post("/api/contacts", json={**CONTACT, "email": "not-an-email"})
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Validation error: email: value is not a valid email address")


def test_admin_contact_workflow(admin_client):
    first = admin_client.post("/api/contacts", json=CONTACT).json()
    second = admin_client.post("/api/contacts", json={**CONTACT, "name": "Grace"}).json()

    listed = admin_client.get("/api/contacts").json()
    assert [c["id"] for c in listed] == [second["id"], first["id"]]
    assert _unread(admin_client) == 2

    resp = admin_client.put(f"/api/contacts/{first['id']}/read")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Contact marked as read"}
    assert admin_client.get(f"/api/contacts/{first['id']}").json()["isRead"] is True
    assert _unread(admin_client) == 1

    assert admin_client.delete(f"/api/contacts/{second['id']}").json() == {
        "message": "Contact deleted successfully"
    }
    assert _unread(admin_client) == 0

    missing = admin_client.put("/api/contacts/999/read")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Contact not found"}
    assert admin_client.get("/api/contacts/x").json() == {"message": "Invalid contact ID"}


def test_dashboard_stats(admin_client):
    admin_client.post("/api/projects", json={"title": "t", "description": "d"})
    admin_client.post(
        "/api/blog-posts", json={"title": "t", "content": "c", "excerpt": "e", "category": "tech"}
    )
    admin_client.post(
        "/api/youtube-videos", json={"title": "t", "description": "d", "videoUrl": "https://youtu.be/a"}
    )
    admin_client.post("/api/contacts", json=CONTACT)

    assert admin_client.get("/api/dashboard/stats").json() == {
        "projectCount": 1,
        "blogPostCount": 1,
        "videoCount": 1,
        "unreadContactCount": 1,
    }
