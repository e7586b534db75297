from datetime import datetime
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from portfolioflow.db.db import SessionLocal
from portfolioflow.db.dbmodels import Project as ProjectRow
from portfolioflow.data.defaults import DEFAULT_PROJECT, PLACEHOLDER_IMAGE_URL
from portfolioflow.services.errors import PersistenceError, ProjectNotFoundError
from portfolioflow.utils.forms import ProjectForm
from portfolioflow.utils.models import Project, ProjectContext


def _to_project(row: ProjectRow) -> Project:
    # Cards need an image unless a 3D model is shown instead
    image_url = row.image_url or (None if row.model else PLACEHOLDER_IMAGE_URL)
    return Project(
        id=row.id,
        title=row.title or "Untitled Project",
        description=row.description or "",
        long_description=row.long_description or row.description or "",
        image_url=image_url,
        model=row.model,
        data_ai_hint=row.data_ai_hint or "project image",
        category=row.category or "Web Development",
        technologies=list(row.technologies or []),
        live_link=row.live_link,
        source_link=row.source_link,
        documentation_link=row.documentation_link,
    )


def get_projects() -> List[Project]:
    """All projects ordered by title, or the sample project when there are none."""
    db = None
    try:
        db = SessionLocal()
        rows = db.query(ProjectRow).order_by(ProjectRow.title).all()
        projects = [_to_project(row) for row in rows]
        if not projects:
            print("📭 No projects found in the database, adding default project.")
            projects.append(DEFAULT_PROJECT)
        return projects
    except SQLAlchemyError as e:
        print(f"❌ Error fetching projects: {e}")
        print("⚠️ Falling back to default project due to fetch error.")
        return [DEFAULT_PROJECT]
    finally:
        if db is not None:
            db.close()


def get_unique_categories(projects: List[Project]) -> List[str]:
    return sorted({p.category for p in projects})


def filter_projects(projects: List[Project], category: Optional[str] = None) -> List[Project]:
    if not category:
        return list(projects)
    return [p for p in projects if p.category == category]


def get_project(project_id: str) -> Project:
    if project_id == DEFAULT_PROJECT.id:
        return DEFAULT_PROJECT

    db = SessionLocal()
    try:
        row = db.get(ProjectRow, project_id)
    except SQLAlchemyError as e:
        print(f"❌ Error fetching project {project_id}: {e}")
        raise PersistenceError(f"Could not load project: {e}") from e
    finally:
        db.close()

    if row is None:
        raise ProjectNotFoundError(project_id)
    return _to_project(row)


def get_project_contexts() -> List[ProjectContext]:
    """Project list in the restricted shape exposed to the model."""
    return [ProjectContext.from_project(p) for p in get_projects()]


def create_project(form: ProjectForm) -> Project:
    db = SessionLocal()
    try:
        row = ProjectRow(**form.to_record())
        db.add(row)
        db.commit()
        db.refresh(row)
        print(f"💾 Saved project '{row.title}' ({row.id})")
        return _to_project(row)
    except SQLAlchemyError as e:
        db.rollback()
        print(f"❌ Error saving project: {e}")
        raise PersistenceError(f"Failed to save project: {e}") from e
    finally:
        db.close()


def update_project(project_id: str, form: ProjectForm) -> Project:
    db = SessionLocal()
    try:
        row = db.get(ProjectRow, project_id)
        if row is None:
            raise ProjectNotFoundError(project_id)

        for column, value in form.to_record().items():
            setattr(row, column, value)
        row.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(row)
        print(f"📝 Updated project '{row.title}' ({row.id})")
        return _to_project(row)
    except SQLAlchemyError as e:
        db.rollback()
        print(f"❌ Error updating project {project_id}: {e}")
        raise PersistenceError(f"Failed to update project: {e}") from e
    finally:
        db.close()
