"""
Admin panel: login, project and resume editing, contact message inbox.

Pages redirect to the login form when there is no admin token; the form
posts and JSON endpoints answer 401 instead.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from portfolioflow.auth.auth import (
    COOKIE_NAME, authenticate_user, create_access_token, current_admin, require_admin, set_token_cookie,
)
from portfolioflow.data.defaults import ALL_TECHNOLOGIES, DEFAULT_PROJECT
from portfolioflow.db.db import get_db
from portfolioflow.services.contact import delete_contact_message, list_contact_messages, toggle_read_status
from portfolioflow.services.errors import (
    MessageNotFoundError, PersistenceError, ProjectNotFoundError, ResumeUpdateError,
)
from portfolioflow.services.projects import create_project, get_project, get_projects, update_project
from portfolioflow.services.resume import get_resume_data, update_resume_data
from portfolioflow.utils.forms import ProjectForm, ResumeForm, form_errors, parse_skill_lines
from portfolioflow.utils.models import Project, ResumeData
from portfolioflow.utils.template_engine import templates

router = APIRouter()

PROJECT_FIELDS = list(ProjectForm.model_fields)


def project_form_values(project: Optional[Project] = None) -> dict:
    if project is None:
        return {"category": "Web Development"}
    return {
        "title": project.title,
        "description": project.description,
        "long_description": project.long_description or "",
        "model_path": project.model or "",
        "data_ai_hint": project.data_ai_hint,
        "category": project.category,
        "technologies": ", ".join(project.technologies),
        "live_link": project.live_link or "",
        "source_link": project.source_link or "",
        "documentation_link": project.documentation_link or "",
        "image_url": project.image_url or "",
    }


def resume_form_values(resume: ResumeData) -> dict:
    return {
        "summary": "\n".join(resume.summary_items),
        "skills": "\n".join(f"{s.name} | {s.level}" for s in resume.skills),
        "github_url": resume.github_url or "",
        "linkedin_url": resume.linkedin_url or "",
        "instagram_url": resume.instagram_url or "",
        "resume_pdf_url": resume.resume_pdf_url or "",
    }


def render_dashboard(request: Request, admin: str, status_code: int = 200, **overrides):
    projects = get_projects()
    resume = get_resume_data()
    try:
        messages = list_contact_messages()
        messages_error = None
    except PersistenceError:
        messages, messages_error = [], "Could not load messages."

    context = {
        "admin": admin,
        "projects": projects,
        "default_project_id": DEFAULT_PROJECT.id,
        "technology_suggestions": ALL_TECHNOLOGIES,
        "messages": messages,
        "messages_error": messages_error,
        "editing_project": None,
        "project_form": project_form_values(),
        "project_errors": {},
        "resume_form": resume_form_values(resume),
        "resume_errors": {},
        "notice": request.query_params.get("notice"),
        "error_message": None,
    }
    context.update(overrides)
    return templates.TemplateResponse(
        request, "admin/dashboard.html", context, status_code=status_code)


# Login / logout

@router.get("/admin/login", response_class=HTMLResponse)
async def get_login_page(request: Request):
    if current_admin(request):
        return RedirectResponse(url="/admin", status_code=303)
    return templates.TemplateResponse(request, "admin/login.html", {"error": None})


@router.post("/admin/login", response_class=HTMLResponse)
async def post_login(request: Request,
                     username: str = Form(""),
                     password: str = Form(""),
                     db: Session = Depends(get_db)):
    user = authenticate_user(db, username, password)
    if not user:
        print(f"⚠️ Failed admin login for '{username}'")
        return templates.TemplateResponse(
            request, "admin/login.html",
            {"error": "Invalid username or password."}, status_code=401)

    token = create_access_token(data={"sub": user.username, "is_admin": True})
    response = RedirectResponse(url="/admin", status_code=303)
    set_token_cookie(response, token)
    print(f"🔐 Admin '{user.username}' logged in")
    return response


@router.get("/admin/logout")
async def logout():
    response = RedirectResponse(url="/")
    response.delete_cookie(COOKIE_NAME)
    return response


# Dashboard

@router.get("/admin", response_class=HTMLResponse)
async def get_dashboard(request: Request, edit: Optional[str] = None):
    admin = current_admin(request)
    if admin is None:
        return RedirectResponse(url="/admin/login", status_code=303)

    overrides = {}
    if edit:
        try:
            project = await asyncio.to_thread(get_project, edit)
        except ProjectNotFoundError:
            raise HTTPException(status_code=404, detail="Project not found")
        overrides = {"editing_project": project,
                     "project_form": project_form_values(project)}
    return await asyncio.to_thread(render_dashboard, request, admin, **overrides)


async def _project_submission(request: Request) -> dict:
    form_data = await request.form()
    return {field: form_data.get(field, "") for field in PROJECT_FIELDS}


@router.post("/admin/projects", response_class=HTMLResponse)
async def post_new_project(request: Request, admin: str = Depends(require_admin)):
    submitted = await _project_submission(request)
    try:
        form = ProjectForm(**submitted)
    except ValidationError as e:
        return await asyncio.to_thread(
            render_dashboard, request, admin, status_code=422,
            project_form=submitted, project_errors=form_errors(e))

    try:
        project = await asyncio.to_thread(create_project, form)
    except PersistenceError:
        return await asyncio.to_thread(
            render_dashboard, request, admin, status_code=500, project_form=submitted,
            error_message="Failed to save the project. Please try again.")

    print(f"📝 {admin} added project '{project.title}'")
    return RedirectResponse(url="/admin?notice=Project+created", status_code=303)


@router.post("/admin/projects/{project_id}", response_class=HTMLResponse)
async def post_project_update(project_id: str, request: Request,
                              admin: str = Depends(require_admin)):
    submitted = await _project_submission(request)
    try:
        form = ProjectForm(**submitted)
    except ValidationError as e:
        return await asyncio.to_thread(
            render_dashboard, request, admin, status_code=422,
            editing_project={"id": project_id, "title": submitted.get("title")},
            project_form=submitted, project_errors=form_errors(e))

    try:
        await asyncio.to_thread(update_project, project_id, form)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except PersistenceError:
        return await asyncio.to_thread(
            render_dashboard, request, admin, status_code=500, project_form=submitted,
            error_message="Failed to update the project. Please try again.")

    return RedirectResponse(url="/admin?notice=Project+updated", status_code=303)


@router.post("/admin/resume", response_class=HTMLResponse)
async def post_resume(request: Request,
                      summary: str = Form(""),
                      skills: str = Form(""),
                      github_url: str = Form(""),
                      linkedin_url: str = Form(""),
                      instagram_url: str = Form(""),
                      resume_pdf_url: str = Form(""),
                      admin: str = Depends(require_admin)):
    submitted = {
        "summary": summary,
        "skills": skills,
        "github_url": github_url,
        "linkedin_url": linkedin_url,
        "instagram_url": instagram_url,
        "resume_pdf_url": resume_pdf_url,
    }
    try:
        form = ResumeForm(**{**submitted, "skills": parse_skill_lines(skills)})
    except ValidationError as e:
        return await asyncio.to_thread(
            render_dashboard, request, admin, status_code=422,
            resume_form=submitted, resume_errors=form_errors(e))

    try:
        await asyncio.to_thread(update_resume_data, form.to_update())
    except ResumeUpdateError:
        return await asyncio.to_thread(
            render_dashboard, request, admin, status_code=500, resume_form=submitted,
            error_message="Failed to update the resume. Please try again.")

    return RedirectResponse(url="/admin?notice=Resume+updated", status_code=303)


# Contact message inbox

@router.get("/api/admin/messages")
async def get_messages(admin: str = Depends(require_admin)):
    try:
        messages = await asyncio.to_thread(list_contact_messages)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [m.model_dump(by_alias=True, mode="json") for m in messages]


@router.post("/api/admin/messages/{message_id}/toggle-read")
async def post_toggle_read(message_id: str, admin: str = Depends(require_admin)):
    try:
        message = await asyncio.to_thread(toggle_read_status, message_id)
    except MessageNotFoundError:
        raise HTTPException(status_code=404, detail="Message not found")
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return message.model_dump(by_alias=True, mode="json")


@router.delete("/api/admin/messages/{message_id}")
async def remove_message(message_id: str, admin: str = Depends(require_admin)):
    try:
        await asyncio.to_thread(delete_contact_message, message_id)
    except MessageNotFoundError:
        raise HTTPException(status_code=404, detail="Message not found")
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True}
