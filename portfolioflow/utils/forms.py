"""
Form schemas for everything a visitor or the admin can submit.

A form only becomes a database write or a flow call after it validates, so
a rejected submission never touches persistence or the model.
"""

from pydantic import AnyUrl, EmailStr, Field, TypeAdapter, ValidationError, field_validator
from typing import List, Literal, Optional

from portfolioflow.utils.models import CamelModel, Category, Skill

_url_adapter = TypeAdapter(AnyUrl)


def split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def split_lines(value: str) -> List[str]:
    return [line.strip() for line in value.splitlines() if line.strip()]


def _optional_url(value: Optional[str], message: str) -> Optional[str]:
    if value is None or value == "":
        return value
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError(message)
    return value


class FormModel(CamelModel):
    # Error locations use field names, which is what the templates key on
    model_config = {"loc_by_alias": False}


class ProjectForm(FormModel):
    title: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    long_description: Optional[str] = ""
    model_path: Optional[str] = ""
    data_ai_hint: Optional[str] = Field("", max_length=50)
    category: Category
    technologies: str = Field(..., min_length=1,
                              title="Comma-separated technology names")
    live_link: Optional[str] = ""
    source_link: Optional[str] = ""
    documentation_link: Optional[str] = ""
    image_url: Optional[str] = ""

    @field_validator("model_path")
    @classmethod
    def check_model_path(cls, v):
        if v and not (v.startswith("/models/") and v.endswith(".glb")):
            raise ValueError(
                "Model path must start with /models/ and end with .glb, or be empty.")
        return v

    @field_validator("data_ai_hint")
    @classmethod
    def check_ai_hint(cls, v):
        if v and len(v.split(" ")) > 2:
            raise ValueError("AI hint should be one or two keywords, or empty.")
        return v

    @field_validator("technologies")
    @classmethod
    def check_technologies(cls, v):
        if not split_csv(v):
            raise ValueError(
                "Please list at least one technology (comma-separated).")
        return v

    @field_validator("live_link", "source_link", "documentation_link")
    @classmethod
    def check_links(cls, v):
        return _optional_url(v, "Please enter a valid URL.")

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v):
        return _optional_url(v, "Please enter a valid URL for the image.")

    def technology_list(self) -> List[str]:
        return split_csv(self.technologies)

    def to_record(self) -> dict:
        """Column values for the projects table."""
        return {
            "title": self.title,
            "description": self.description,
            "long_description": self.long_description or None,
            "image_url": self.image_url or None,
            "model": self.model_path or None,
            "data_ai_hint": self.data_ai_hint or "project image",
            "category": self.category,
            "technologies": self.technology_list(),
            "live_link": self.live_link or None,
            "source_link": self.source_link or None,
            "documentation_link": self.documentation_link or None,
        }


class ResumeForm(FormModel):
    summary: str = Field(..., min_length=10, title="One summary item per line")
    skills: List[Skill] = Field(..., min_length=1)
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    instagram_url: Optional[str] = None
    resume_pdf_url: Optional[str] = None

    @field_validator("github_url", "linkedin_url", "instagram_url", "resume_pdf_url")
    @classmethod
    def check_links(cls, v):
        return _optional_url(v, "Please enter a valid URL.")

    def to_update(self) -> dict:
        update = {
            "summary_items": split_lines(self.summary),
            "skills": [Skill(name=s.name, level=s.level) for s in self.skills],
        }
        # A blank link field clears the stored link
        for field in ("github_url", "linkedin_url", "instagram_url", "resume_pdf_url"):
            update[field] = getattr(self, field) or None
        return update


def parse_skill_lines(text: str) -> List[dict]:
    """Parse ``Name | level`` lines from the admin resume textarea.

    Lines without a level get level 0 so the form reports them instead of
    silently dropping them.
    """
    skills = []
    for line in split_lines(text):
        name, _, level = line.rpartition("|")
        if not name:
            name, level = level, "0"
        skills.append({"name": name.strip(), "level": level.strip() or "0"})
    return skills


class ContactForm(FormModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=500)


class IntroForm(FormModel):
    employer: str = Field(..., min_length=2)
    job_title: str = Field(..., min_length=2)
    user_skills: str = Field(..., min_length=5,
                             title="Comma-separated skills")
    user_experience: str = Field(..., min_length=10)
    desired_tone: Literal["formal", "casual", "enthusiastic"] = "casual"

    def skill_list(self) -> List[str]:
        return split_csv(self.user_skills)


def form_errors(exc: ValidationError) -> dict:
    """Flatten a ValidationError into ``{field: message}`` for templates."""
    errors = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        errors.setdefault(field, err["msg"].removeprefix("Value error, "))
    return errors
