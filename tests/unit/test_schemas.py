import pytest
from pydantic import ValidationError

from portfolio.db import schemas


def test_create_accepts_camel_case_and_dumps_snake_case():
    project = schemas.ProjectCreate.model_validate(
        {"title": "Site", "description": "d", "imageUrl": "https://img", "technologies": ["Python"]}
    )
    assert project.image_url == "https://img"
    assert project.model_dump()["image_url"] == "https://img"
    assert project.model_dump(by_alias=True)["imageUrl"] == "https://img"


def test_unknown_fields_ignored():
    project = schemas.ProjectCreate.model_validate({"title": "t", "description": "d", "bogus": 1})
    assert not hasattr(project, "bogus")


def test_create_requires_fields():
    with pytest.raises(ValidationError):
        schemas.ProjectCreate.model_validate({"description": "d"})
    with pytest.raises(ValidationError):
        schemas.ProjectCreate.model_validate({"title": "", "description": "d"})


def test_partial_update_tracks_only_sent_fields():
    update = schemas.ProjectUpdate.model_validate({"title": "New"})
    assert update.changes() == {"title": "New"}
    assert schemas.ProjectUpdate.model_validate({}).changes() == {}


def test_partial_update_allows_clearing_optional_fields():
    update = schemas.ProjectUpdate.model_validate({"imageUrl": None})
    assert update.changes() == {"image_url": None}


def test_partial_update_rejects_null_for_required_fields():
    with pytest.raises(ValidationError) as excinfo:
        schemas.ProjectUpdate.model_validate({"title": None})
    assert "title cannot be null" in str(excinfo.value)


@pytest.mark.parametrize("percentage", [-1, 101])
def test_skill_percentage_bounds(percentage):
    with pytest.raises(ValidationError):
        schemas.SkillCreate(name="Go", percentage=percentage, category="backend")
    with pytest.raises(ValidationError):
        schemas.SkillUpdate.model_validate({"percentage": percentage})


@pytest.mark.parametrize("email", ["", "plainaddress", "a@b", "a b@c.io", "ada@@example.com"])
def test_contact_rejects_bad_email(email):
    with pytest.raises(ValidationError):
        schemas.ContactCreate(name="n", email=email, subject="s", message="m")


def test_contact_ignores_client_read_flag():
    contact = schemas.ContactCreate.model_validate(
        {"name": "n", "email": " n@example.com ", "subject": "s", "message": "m", "isRead": True}
    )
    assert contact.email == "n@example.com"
    assert "is_read" not in contact.model_dump()


def test_dashboard_stats_serialize_camel_case():
    stats = schemas.DashboardStats(project_count=1, blog_post_count=2, video_count=3, unread_contact_count=4)
    assert stats.model_dump(by_alias=True) == {
        "projectCount": 1,
        "blogPostCount": 2,
        "videoCount": 3,
        "unreadContactCount": 4,
    }
