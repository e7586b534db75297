import asyncio

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import Field

from portfolioflow.auth.auth import resolve_visitor, set_token_cookie
from portfolioflow.chat.session import ChatBusyError, ChatSessionError, NoProjectSelectedError, chat_sessions
from portfolioflow.services.errors import PersistenceError, ProjectNotFoundError
from portfolioflow.services.projects import get_project
from portfolioflow.utils.models import CamelModel

router = APIRouter(prefix="/api/chat")


class SelectProjectRequest(CamelModel):
    project_id: str = Field(..., min_length=1)


class AskRequest(CamelModel):
    question: str


def visitor_id(request: Request, response: Response) -> str:
    """Chat sessions are keyed by the token's subject; new visitors get a guest token."""
    username, new_token = resolve_visitor(request)
    if new_token:
        set_token_cookie(response, new_token, max_age=3600)
    return username


@router.get("/session")
async def get_session(username: str = Depends(visitor_id)):
    return chat_sessions.get(username).snapshot()


@router.post("/select")
async def select_project(body: SelectProjectRequest, username: str = Depends(visitor_id)):
    try:
        project = await asyncio.to_thread(get_project, body.project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))

    session = chat_sessions.get(username)
    session.select_project(project)
    print(f"🤖 {username} is now chatting about '{project.title}'")
    return session.snapshot()


@router.post("/ask")
async def ask_question(body: AskRequest, username: str = Depends(visitor_id)):
    session = chat_sessions.get(username)
    try:
        reply = await asyncio.to_thread(session.ask, body.question)
    except (NoProjectSelectedError, ChatBusyError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ChatSessionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"reply": reply.model_dump(mode="json"), "session": session.snapshot()}


@router.post("/back")
async def go_back(username: str = Depends(visitor_id)):
    session = chat_sessions.get(username)
    session.back()
    return session.snapshot()
