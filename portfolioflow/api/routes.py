import asyncio
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from portfolioflow.services.contact import submit_contact_message
from portfolioflow.services.errors import PersistenceError, ProjectNotFoundError
from portfolioflow.services.projects import filter_projects, get_project, get_projects, get_unique_categories
from portfolioflow.services.resume import get_resume_data
from portfolioflow.utils.forms import ContactForm, form_errors

router = APIRouter(prefix="/api")


@router.get("/projects")
async def list_projects(category: Optional[str] = None):
    projects = await asyncio.to_thread(get_projects)
    return [p.model_dump(by_alias=True) for p in filter_projects(projects, category)]


@router.get("/projects/categories")
async def list_categories():
    projects = await asyncio.to_thread(get_projects)
    return get_unique_categories(projects)


@router.get("/projects/{project_id}")
async def read_project(project_id: str):
    try:
        project = await asyncio.to_thread(get_project, project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return project.model_dump(by_alias=True)


@router.get("/resume")
async def read_resume():
    resume = await asyncio.to_thread(get_resume_data)
    return resume.model_dump(by_alias=True)


@router.post("/contact", status_code=201)
async def create_contact_message(payload: dict):
    try:
        form = ContactForm.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=form_errors(e))

    try:
        message = await asyncio.to_thread(submit_contact_message, form)
    except PersistenceError:
        raise HTTPException(
            status_code=500, detail="Your message could not be sent. Please try again later.")
    return {"success": True, "id": message.id}
