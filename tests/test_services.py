import pytest
from sqlalchemy.exc import SQLAlchemyError

from portfolioflow.data.defaults import DEFAULT_PROJECT, DEFAULT_RESUME_DATA, PLACEHOLDER_IMAGE_URL
from portfolioflow.db.db import SessionLocal
from portfolioflow.db.dbmodels import ContactMessage as ContactMessageRow, ResumeContent
from portfolioflow.services import contact, projects, resume
from portfolioflow.services.errors import MessageNotFoundError, ProjectNotFoundError, ResumeUpdateError
from portfolioflow.utils.forms import ContactForm, ProjectForm


def broken_session():
    raise SQLAlchemyError("database is down")


def make_project_form(**overrides):
    data = {
        "title": "Portfolio Site",
        "description": "This very website, built with FastAPI.",
        "category": "Web Development",
        "technologies": "FastAPI,  Jinja2 ,,SQLAlchemy",
        "source_link": "https://github.com/someone/portfolio",
    }
    data.update(overrides)
    return ProjectForm(**data)


# Projects

def test_empty_store_lists_the_default_project():
    assert projects.get_projects() == [DEFAULT_PROJECT]


def test_read_error_falls_back_to_default_project(monkeypatch):
    monkeypatch.setattr(projects, "SessionLocal", broken_session)
    assert projects.get_projects() == [DEFAULT_PROJECT]


def test_created_project_persists_split_technologies():
    created = projects.create_project(make_project_form())
    assert created.id
    assert created.technologies == ["FastAPI", "Jinja2", "SQLAlchemy"]

    stored = projects.get_project(created.id)
    assert stored.technologies == ["FastAPI", "Jinja2", "SQLAlchemy"]
    assert stored.source_link == "https://github.com/someone/portfolio"
    # No image and no model: the card gets the placeholder
    assert stored.image_url == PLACEHOLDER_IMAGE_URL
    assert projects.get_projects() == [stored]


def test_projects_are_listed_by_title():
    projects.create_project(make_project_form(title="Zebra Tracker"))
    projects.create_project(make_project_form(title="Alpha Engine"))
    assert [p.title for p in projects.get_projects()] == ["Alpha Engine", "Zebra Tracker"]


def test_update_project_keeps_its_id():
    created = projects.create_project(make_project_form())
    updated = projects.update_project(created.id, make_project_form(
        title="Portfolio Site v2", category="AI Integration", technologies="Ollama"))
    assert updated.id == created.id
    assert updated.title == "Portfolio Site v2"
    assert projects.get_project(created.id).technologies == ["Ollama"]


def test_missing_project_raises():
    with pytest.raises(ProjectNotFoundError):
        projects.get_project("does-not-exist")
    with pytest.raises(ProjectNotFoundError):
        projects.update_project("does-not-exist", make_project_form())


def test_default_project_is_always_readable():
    assert projects.get_project(DEFAULT_PROJECT.id) == DEFAULT_PROJECT


def test_categories_and_filtering():
    listing = [
        DEFAULT_PROJECT,
        DEFAULT_PROJECT.model_copy(update={"id": "p2", "category": "AI Integration"}),
        DEFAULT_PROJECT.model_copy(update={"id": "p3", "category": "AI Integration"}),
    ]
    assert projects.get_unique_categories(listing) == ["3D Graphics", "AI Integration"]
    assert [p.id for p in projects.filter_projects(listing, "AI Integration")] == ["p2", "p3"]
    assert projects.filter_projects(listing, None) == listing


def test_project_contexts_carry_the_category_as_a_list():
    (context,) = projects.get_project_contexts()
    assert context.id == DEFAULT_PROJECT.id
    assert context.categories == ["3D Graphics"]


# Resume

def test_resume_read_on_empty_store_returns_and_persists_defaults():
    assert resume.get_resume_data() == DEFAULT_RESUME_DATA

    db = SessionLocal()
    try:
        row = db.get(ResumeContent, resume.RESUME_DOC_ID)
        assert row is not None
        assert row.data["summaryItems"] == DEFAULT_RESUME_DATA.summary_items
    finally:
        db.close()


def test_resume_read_error_falls_back_to_defaults(monkeypatch):
    monkeypatch.setattr(resume, "SessionLocal", broken_session)
    assert resume.get_resume_data() == DEFAULT_RESUME_DATA


def test_resume_update_overwrites_only_given_fields():
    resume.get_resume_data()
    updated = resume.update_resume_data({
        "summary_items": ["Builds things."],
        "skills": [{"name": "Python", "level": 95}],
    })
    assert updated.summary_items == ["Builds things."]
    assert [s.name for s in updated.skills] == ["Python"]
    assert updated.education == DEFAULT_RESUME_DATA.education
    assert resume.get_resume_data() == updated


def test_resume_update_before_first_read_starts_from_defaults():
    updated = resume.update_resume_data({"github_url": "https://github.com/another"})
    assert updated.github_url == "https://github.com/another"
    assert updated.skills == DEFAULT_RESUME_DATA.skills


def test_resume_update_can_clear_a_link():
    resume.update_resume_data({"github_url": "https://github.com/another"})
    cleared = resume.update_resume_data({"github_url": None})
    assert cleared.github_url is None
    assert resume.get_resume_data().github_url is None


def test_resume_update_rejects_invalid_data():
    with pytest.raises(ResumeUpdateError):
        resume.update_resume_data({"skills": [{"name": "Python", "level": 101}]})


def test_resume_update_failure_raises(monkeypatch):
    monkeypatch.setattr(resume, "SessionLocal", broken_session)
    with pytest.raises(ResumeUpdateError):
        resume.update_resume_data({"summary_items": ["x"]})


def test_stored_skill_without_level_reads_as_zero():
    db = SessionLocal()
    try:
        db.add(ResumeContent(id=resume.RESUME_DOC_ID, data={
            "skills": [{"name": "Juggling"}, {"level": 40}]}))
        db.commit()
    finally:
        db.close()

    skills = resume.get_resume_data().skills
    assert [(s.name, s.level) for s in skills] == [("Juggling", 0), ("Unnamed Skill", 40)]


# Contact messages

def send(name="Ada Lovelace", message="I would love to collaborate on something."):
    return contact.submit_contact_message(
        ContactForm(name=name, email="ada@example.com", message=message))


def test_contact_message_is_stored_unread():
    saved = send()
    assert saved.is_read is False
    assert [m.id for m in contact.list_contact_messages()] == [saved.id]


def test_contact_messages_are_listed_newest_first():
    first = send(name="First")
    second = send(name="Second")
    assert [m.id for m in contact.list_contact_messages()] == [second.id, first.id]


def test_toggle_and_delete_contact_message():
    saved = send()
    assert contact.toggle_read_status(saved.id).is_read is True
    assert contact.toggle_read_status(saved.id).is_read is False

    contact.delete_contact_message(saved.id)
    assert contact.list_contact_messages() == []

    db = SessionLocal()
    try:
        assert db.query(ContactMessageRow).count() == 0
    finally:
        db.close()


def test_missing_contact_message_raises():
    with pytest.raises(MessageNotFoundError):
        contact.toggle_read_status("nope")
    with pytest.raises(MessageNotFoundError):
        contact.delete_contact_message("nope")
