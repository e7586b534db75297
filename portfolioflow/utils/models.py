from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Literal, List, Optional
from datetime import datetime
import uuid


Category = Literal["Web Development", "3D Graphics",
                   "AI Integration", "Mobile App"]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""
    model_config = {"populate_by_name": True, "alias_generator": to_camel}


# Portfolio content

class Project(CamelModel):
    id: str = Field(..., title="Opaque id assigned by the database")
    title: str
    description: str
    long_description: Optional[str] = None
    image_url: Optional[str] = None
    model: Optional[str] = Field(None, title="Path of a .glb under /models/")
    data_ai_hint: str = "project image"
    category: Category
    technologies: List[str] = Field(default_factory=list)
    live_link: Optional[str] = None
    source_link: Optional[str] = None
    documentation_link: Optional[str] = None


class ProjectContext(CamelModel):
    """Restricted project view handed to the language model."""
    id: str
    title: str
    description: str
    long_description: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    live_link: Optional[str] = None
    source_link: Optional[str] = None
    documentation_link: Optional[str] = None

    @classmethod
    def from_project(cls, project: Project) -> "ProjectContext":
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            long_description=project.long_description,
            categories=[project.category],
            technologies=list(project.technologies),
            live_link=project.live_link,
            source_link=project.source_link,
            documentation_link=project.documentation_link,
        )


class Skill(CamelModel):
    name: str = Field(..., min_length=1)
    level: int = Field(..., ge=0, le=100, title="Proficiency 0-100")


class EducationEntry(CamelModel):
    degree: str
    institution: str
    dates: str
    description: Optional[str] = None


class WorkExperienceEntry(CamelModel):
    job_title: str
    company: str
    dates: str
    responsibilities: List[str] = Field(default_factory=list)


class AwardEntry(CamelModel):
    title: str
    issuer: Optional[str] = None
    date: Optional[str] = None
    url: Optional[str] = None


class ResumeData(CamelModel):
    summary_items: List[str] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[WorkExperienceEntry] = Field(default_factory=list)
    awards: List[AwardEntry] = Field(default_factory=list)
    instagram_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    resume_pdf_url: Optional[str] = None


class ContactMessage(CamelModel):
    id: str
    name: str
    email: str
    message: str
    created_at: datetime
    is_read: bool = False


# Chat

class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    text: str
    sender: Literal["user", "assistant"]
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ChatPart(BaseModel):
    text: Optional[str] = None


class ChatHistoryEntry(BaseModel):
    role: Literal["user", "model"]
    parts: List[ChatPart] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return (self.parts[0].text or "") if self.parts else ""
