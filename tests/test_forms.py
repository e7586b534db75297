import pytest
from pydantic import ValidationError

from portfolioflow.utils.forms import (
    ContactForm, IntroForm, ProjectForm, ResumeForm, form_errors, parse_skill_lines,
)


def project_data(**overrides):
    data = {
        "title": "Crate Viewer",
        "description": "A small viewer for wooden crates.",
        "category": "3D Graphics",
        "technologies": "Three.js, React",
    }
    data.update(overrides)
    return data


def test_project_technologies_are_split_trimmed_and_emptied():
    form = ProjectForm(**project_data(technologies=" React,  Next.js , ,Three.js,"))
    assert form.technology_list() == ["React", "Next.js", "Three.js"]
    assert form.to_record()["technologies"] == ["React", "Next.js", "Three.js"]


def test_project_requires_at_least_one_technology():
    with pytest.raises(ValidationError) as exc:
        ProjectForm(**project_data(technologies=" , ,"))
    assert "technologies" in form_errors(exc.value)


@pytest.mark.parametrize("path", ["models/crate.glb", "/models/crate.obj", "/assets/crate.glb"])
def test_project_model_path_must_be_a_glb_under_models(path):
    with pytest.raises(ValidationError):
        ProjectForm(**project_data(model_path=path))


def test_project_empty_optional_fields_become_none():
    record = ProjectForm(**project_data(model_path="/models/crate.glb")).to_record()
    assert record["model"] == "/models/crate.glb"
    assert record["live_link"] is None
    assert record["image_url"] is None
    assert record["data_ai_hint"] == "project image"


def test_project_ai_hint_is_at_most_two_words():
    assert ProjectForm(**project_data(data_ai_hint="wooden crate")).data_ai_hint == "wooden crate"
    with pytest.raises(ValidationError):
        ProjectForm(**project_data(data_ai_hint="a big wooden crate"))


def test_project_rejects_bad_links_and_unknown_category():
    with pytest.raises(ValidationError) as exc:
        ProjectForm(**project_data(live_link="not a url", category="Games"))
    errors = form_errors(exc.value)
    assert errors["live_link"] == "Please enter a valid URL."
    assert "category" in errors


def test_contact_message_shorter_than_ten_characters_is_rejected():
    with pytest.raises(ValidationError) as exc:
        ContactForm(name="Ada", email="ada@example.com", message="Hi there")
    assert list(form_errors(exc.value)) == ["message"]


def test_contact_form_validates_email():
    with pytest.raises(ValidationError):
        ContactForm(name="Ada", email="not-an-email", message="Hello, I like your work!")


def test_parse_skill_lines():
    skills = parse_skill_lines("Python | 90\n\n  Blender|75 \nLeadership")
    assert skills == [
        {"name": "Python", "level": "90"},
        {"name": "Blender", "level": "75"},
        {"name": "Leadership", "level": "0"},
    ]


def test_resume_form_clears_blank_links():
    form = ResumeForm(
        summary="First line of summary\nSecond line",
        skills=parse_skill_lines("Python | 90"),
        github_url="https://github.com/someone",
        linkedin_url="",
    )
    update = form.to_update()
    assert update["summary_items"] == ["First line of summary", "Second line"]
    assert update["skills"][0].name == "Python"
    assert update["skills"][0].level == 90
    assert update["github_url"] == "https://github.com/someone"
    assert update["linkedin_url"] is None
    assert update["instagram_url"] is None


def test_resume_form_rejects_out_of_range_skill_level():
    with pytest.raises(ValidationError):
        ResumeForm(summary="A long enough summary", skills=parse_skill_lines("Python | 150"))


def test_intro_form_skill_list():
    form = IntroForm(employer="Acme", job_title="Engineer",
                     user_skills="Python, FastAPI,,SQL", user_experience="Five years of backend work")
    assert form.skill_list() == ["Python", "FastAPI", "SQL"]
    assert form.desired_tone == "casual"
