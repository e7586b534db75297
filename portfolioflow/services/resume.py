from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from portfolioflow.db.db import SessionLocal
from portfolioflow.db.dbmodels import ResumeContent
from portfolioflow.data.defaults import DEFAULT_RESUME_DATA
from portfolioflow.services.errors import ResumeUpdateError
from portfolioflow.utils.models import ResumeData

RESUME_DOC_ID = "mainProfile"

# Stored null means the admin cleared the link
LINK_FIELDS = {"instagramUrl", "githubUrl", "linkedinUrl", "resumePdfUrl"}


def _default_document() -> dict:
    return DEFAULT_RESUME_DATA.model_dump(by_alias=True, mode="json")


def _normalize_skills(skills) -> list:
    normalized = []
    for skill in skills or []:
        level = skill.get("level")
        normalized.append({
            "name": skill.get("name") or "Unnamed Skill",
            "level": level if isinstance(level, (int, float)) else 0,
        })
    return normalized


def _merge_with_defaults(stored: dict) -> ResumeData:
    merged = _default_document()
    merged.update({k: v for k, v in stored.items()
                   if v is not None or k in LINK_FIELDS})
    merged["skills"] = _normalize_skills(merged.get("skills"))
    return ResumeData.model_validate(merged)


def get_resume_data() -> ResumeData:
    """Read the resume document, creating it from the defaults on first use."""
    db = None
    try:
        db = SessionLocal()
        row = db.get(ResumeContent, RESUME_DOC_ID)
        if row is not None:
            return _merge_with_defaults(row.data or {})

        print(
            f"📝 Resume document {RESUME_DOC_ID} not found. Creating with default data.")
        db.add(ResumeContent(id=RESUME_DOC_ID, data=_default_document()))
        db.commit()
        return DEFAULT_RESUME_DATA.model_copy(deep=True)
    except SQLAlchemyError as e:
        print(f"❌ Error fetching resume data: {e}")
        print("⚠️ Falling back to default resume data due to fetch error.")
        return DEFAULT_RESUME_DATA.model_copy(deep=True)
    finally:
        if db is not None:
            db.close()


def update_resume_data(update: dict) -> ResumeData:
    """Overwrite the given resume fields (snake_case keys) and return the result."""
    try:
        partial = ResumeData(**update).model_dump(
            by_alias=True, mode="json", include=set(update))
    except ValueError as e:
        raise ResumeUpdateError(f"Invalid resume data: {e}") from e

    db = None
    try:
        db = SessionLocal()
        row = db.get(ResumeContent, RESUME_DOC_ID)
        now = datetime.utcnow()
        if row is None:
            data = {**_default_document(), **partial}
            row = ResumeContent(id=RESUME_DOC_ID, data=data,
                                created_at=now, updated_at=now)
            db.add(row)
        else:
            # Assign a new dict so the JSON column registers the change
            row.data = {**(row.data or {}), **partial}
            row.updated_at = now
        db.commit()
        print("✅ Resume data updated successfully.")
        return _merge_with_defaults(row.data)
    except SQLAlchemyError as e:
        if db is not None:
            db.rollback()
        print(f"❌ Error updating resume data: {e}")
        raise ResumeUpdateError(f"Failed to update resume data: {e}") from e
    finally:
        if db is not None:
            db.close()
