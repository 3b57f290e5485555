import pytest
from fastapi.testclient import TestClient

from portfolio.api.main import create_app
from portfolio.db.repositories.sql import SqlContentRepository


PROJECT = {
    "title": "Portfolio site",
    "description": "Personal site",
    "imageUrl": "https://img.example/site.png",
    "projectUrl": "https://example.com",
    "technologies": ["Python", "FastAPI"],
}


def test_public_lists_start_empty(client):
    for path in ("/api/projects", "/api/blog-posts", "/api/youtube-videos", "/api/skills"):
        resp = client.get(path)
        assert resp.status_code == 200, path
        assert resp.json() == []


def test_project_crud(admin_client):
    created = admin_client.post("/api/projects", json=PROJECT)
    assert created.status_code == 201
    project = created.json()
    assert project["id"] > 0
    assert project["imageUrl"] == PROJECT["imageUrl"]
    assert project["technologies"] == ["Python", "FastAPI"]
    assert "createdAt" in project

    fetched = admin_client.get(f"/api/projects/{project['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == project

    updated = admin_client.put(f"/api/projects/{project['id']}", json={"title": "Renamed"})
    assert updated.status_code == 200
    assert updated.json()["title"] == "Renamed"
    assert updated.json()["description"] == "Personal site"
    assert updated.json()["createdAt"] == project["createdAt"]

    deleted = admin_client.delete(f"/api/projects/{project['id']}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Project deleted successfully"}

    missing = admin_client.get(f"/api/projects/{project['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Project not found"}


def test_projects_listed_newest_first(admin_client):
    first = admin_client.post("/api/projects", json={**PROJECT, "title": "first"}).json()
    second = admin_client.post("/api/projects", json={**PROJECT, "title": "second"}).json()
    listed = admin_client.get("/api/projects").json()
    assert [p["id"] for p in listed] == [second["id"], first["id"]]


@pytest.mark.parametrize("raw_id", ["abc", "1.5", "0", "-3", "9223372036854775808"])
def test_invalid_ids_are_400(client, raw_id):
    resp = client.get(f"/api/projects/{raw_id}")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid project ID"}


def test_out_of_range_id_is_400_on_sql_backend(settings, clock):
    repo = SqlContentRepository("sqlite+pysqlite:///:memory:", clock=clock)
    with TestClient(create_app(settings, repository=repo)) as c:
        resp = c.get("/api/projects/9999999999999999999999999")
        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid project ID"}

        # Largest storable id is valid, just absent
        resp = c.get(f"/api/projects/{2**63 - 1}")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Project not found"}
    repo.close()


def test_missing_required_field_is_400(admin_client):
    resp = admin_client.post("/api/projects", json={"description": "no title"})
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Validation error")
    assert "title" in resp.json()["message"]
    assert admin_client.get("/api/projects").json() == []


def test_null_for_required_field_on_update_is_400(admin_client):
    project = admin_client.post("/api/projects", json=PROJECT).json()
    resp = admin_client.put(f"/api/projects/{project['id']}", json={"title": None})
    assert resp.status_code == 400
    assert admin_client.get(f"/api/projects/{project['id']}").json()["title"] == PROJECT["title"]


def test_update_unknown_project_is_404(admin_client):
    resp = admin_client.put("/api/projects/999", json={"title": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Project not found"}


def test_blog_post_update_refreshes_updated_at(admin_client):
    post = admin_client.post(
        "/api/blog-posts",
        json={"title": "Hello", "content": "Body", "excerpt": "Short", "category": "tech"},
    ).json()
    assert post["updatedAt"] == post["createdAt"]

    updated = admin_client.put(f"/api/blog-posts/{post['id']}", json={}).json()
    assert updated["updatedAt"] > post["updatedAt"]
    assert updated["createdAt"] == post["createdAt"]

    assert admin_client.delete(f"/api/blog-posts/{post['id']}").json() == {
        "message": "Blog post deleted successfully"
    }
    assert admin_client.get(f"/api/blog-posts/{post['id']}").json() == {"message": "Blog post not found"}


def test_video_thumbnail_derived_from_url(admin_client):
    video = admin_client.post(
        "/api/youtube-videos",
        json={"title": "Talk", "description": "d", "videoUrl": "https://www.youtube.com/watch?v=abc123"},
    ).json()
    assert video["thumbnailUrl"] == "https://img.youtube.com/vi/abc123/hqdefault.jpg"

    moved = admin_client.put(
        f"/api/youtube-videos/{video['id']}", json={"videoUrl": "https://youtu.be/xyz789"}
    ).json()
    assert moved["thumbnailUrl"] == "https://img.youtube.com/vi/xyz789/hqdefault.jpg"


def test_custom_video_thumbnail_is_kept(admin_client):
    video = admin_client.post(
        "/api/youtube-videos",
        json={
            "title": "Talk",
            "description": "d",
            "videoUrl": "https://youtu.be/abc123",
            "thumbnailUrl": "https://cdn.example/custom.jpg",
        },
    ).json()
    assert video["thumbnailUrl"] == "https://cdn.example/custom.jpg"

    moved = admin_client.put(
        f"/api/youtube-videos/{video['id']}", json={"videoUrl": "https://youtu.be/xyz789"}
    ).json()
    assert moved["thumbnailUrl"] == "https://cdn.example/custom.jpg"


def test_video_invalid_id(client):
    resp = client.get("/api/youtube-videos/nope")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid video ID"}


def test_skill_category_filter_and_bounds(admin_client):
    created = admin_client.post("/api/skills", json={"name": "Go", "percentage": 80, "category": "backend"})
    assert created.status_code == 201
    admin_client.post("/api/skills", json={"name": "React", "percentage": 90, "category": "frontend"})

    backend = admin_client.get("/api/skills", params={"category": "backend"}).json()
    assert [s["name"] for s in backend] == ["Go"]
    assert len(admin_client.get("/api/skills").json()) == 2

    too_high = admin_client.post("/api/skills", json={"name": "Rust", "percentage": 101, "category": "backend"})
    assert too_high.status_code == 400
    assert len(admin_client.get("/api/skills").json()) == 2

    skill_id = created.json()["id"]
    assert admin_client.put(f"/api/skills/{skill_id}", json={"percentage": -1}).status_code == 400
    assert admin_client.put(f"/api/skills/{skill_id}", json={"percentage": 85}).json()["percentage"] == 85
    assert admin_client.delete(f"/api/skills/{skill_id}").json() == {"message": "Skill deleted successfully"}
    assert admin_client.delete(f"/api/skills/{skill_id}").status_code == 404


def test_unknown_route_uses_message_shape(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.json()


def test_skill_detail_is_public(admin_client, client):
    created = admin_client.post("/api/skills", json={"name": "Go", "percentage": 80, "category": "backend"}).json()
    admin_client.post("/api/auth/logout")

    resp = client.get(f"/api/skills/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created

    missing = client.get(f"/api/skills/{created['id'] + 100}")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Skill not found"}

    assert client.get("/api/skills/nope").json() == {"message": "Invalid skill ID"}
