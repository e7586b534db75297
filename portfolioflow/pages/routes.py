import asyncio
from typing import Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from portfolioflow.ai.flows.intro_message import IntroMessageInput, generate_intro_message
from portfolioflow.auth.auth import resolve_visitor, set_token_cookie
from portfolioflow.chat.session import chat_sessions
from portfolioflow.pages.greeting import build_greeting, localized_texts, visitor_from_cookies
from portfolioflow.services.contact import submit_contact_message
from portfolioflow.services.errors import PersistenceError
from portfolioflow.services.projects import filter_projects, get_projects, get_unique_categories
from portfolioflow.services.resume import get_resume_data
from portfolioflow.utils.forms import ContactForm, IntroForm, form_errors
from portfolioflow.utils.template_engine import templates

router = APIRouter()


def render_page(request: Request, name: str, context: Optional[dict] = None,
                status_code: int = 200, visitor: Optional[tuple] = None):
    """Render a page, handing a guest token to visitors who don't have one."""
    username, new_token = visitor or resolve_visitor(request)
    context = {"visitor": username, **(context or {})}
    response = templates.TemplateResponse(
        request, name, context, status_code=status_code)
    if new_token:
        set_token_cookie(response, new_token, max_age=3600)
    return response


@router.get("/", response_class=HTMLResponse)
async def get_home_page(request: Request, category: Optional[str] = None):
    projects = await asyncio.to_thread(get_projects)
    visitor_name, visitor_lang = visitor_from_cookies(request.cookies)
    texts = await localized_texts(visitor_lang)

    return render_page(request, "index.html", {
        "projects": filter_projects(projects, category),
        "categories": get_unique_categories(projects),
        "selected_category": category or "",
        "greeting": build_greeting(texts, visitor_name),
        "motto": texts["motto"],
    })


@router.get("/resume", response_class=HTMLResponse)
async def get_resume_page(request: Request):
    resume = await asyncio.to_thread(get_resume_data)
    return render_page(request, "resume.html", {"resume": resume})


@router.get("/contact", response_class=HTMLResponse)
async def get_contact_page(request: Request):
    return render_page(request, "contact.html", {"form": {}, "errors": {}})


@router.post("/contact", response_class=HTMLResponse)
async def post_contact_form(request: Request,
                            name: str = Form(""),
                            email: str = Form(""),
                            message: str = Form("")):
    submitted = {"name": name, "email": email, "message": message}
    try:
        form = ContactForm(**submitted)
    except ValidationError as e:
        return render_page(request, "contact.html", {
            "form": submitted, "errors": form_errors(e)}, status_code=422)

    try:
        await asyncio.to_thread(submit_contact_message, form)
    except PersistenceError:
        return render_page(request, "contact.html", {
            "form": submitted,
            "errors": {},
            "error_message": "Your message could not be sent. Please try again later.",
        }, status_code=500)

    return render_page(request, "contact.html", {
        "form": {},
        "errors": {},
        "success_message": f"Thanks {form.name}, your message has been sent!",
    })


@router.get("/mr-m", response_class=HTMLResponse)
async def get_mr_m_page(request: Request):
    projects = await asyncio.to_thread(get_projects)
    visitor = resolve_visitor(request)
    session = chat_sessions.get(visitor[0])
    return render_page(request, "mr_m.html", {
        "projects": projects,
        "session": session.snapshot(),
    }, visitor=visitor)


@router.get("/ai-intro", response_class=HTMLResponse)
async def get_intro_page(request: Request):
    return render_page(request, "ai_intro.html", {"form": {}, "errors": {}})


@router.post("/ai-intro", response_class=HTMLResponse)
async def post_intro_form(request: Request,
                          employer: str = Form(""),
                          job_title: str = Form(""),
                          user_skills: str = Form(""),
                          user_experience: str = Form(""),
                          desired_tone: str = Form("casual")):
    submitted = {
        "employer": employer,
        "job_title": job_title,
        "user_skills": user_skills,
        "user_experience": user_experience,
        "desired_tone": desired_tone,
    }
    try:
        form = IntroForm(**submitted)
    except ValidationError as e:
        return render_page(request, "ai_intro.html", {
            "form": submitted, "errors": form_errors(e)}, status_code=422)

    result = await asyncio.to_thread(generate_intro_message, IntroMessageInput(
        employer=form.employer,
        job_title=form.job_title,
        user_skills=form.skill_list(),
        user_experience=form.user_experience,
        desired_tone=form.desired_tone,
    ))
    return render_page(request, "ai_intro.html", {
        "form": submitted,
        "errors": {},
        "intro_message": result.intro_message,
    })


@router.get("/secret-lair", response_class=HTMLResponse)
async def get_secret_lair_page(request: Request):
    return render_page(request, "secret_lair.html")
