import asyncio

from fastapi import APIRouter, Depends, Response

from portfolioflow.ai.flows.handwriting import RecognizeHandwritingInput, recognize_handwriting
from portfolioflow.ai.flows.intro_message import IntroMessageInput, generate_intro_message
from portfolioflow.ai.flows.project_image import GenerateProjectImageInput, generate_project_image
from portfolioflow.ai.flows.project_qna import ProjectQnaInput, ask_mr_m
from portfolioflow.ai.flows.translate import TranslateTextInput, translate_text
from portfolioflow.auth.auth import require_admin
from portfolioflow.pages.greeting import remember_visitor

router = APIRouter(prefix="/api/ai")


@router.post("/mr-m")
async def post_mr_m_question(flow_input: ProjectQnaInput):
    result = await asyncio.to_thread(ask_mr_m, flow_input)
    return result.model_dump(by_alias=True)


@router.post("/intro-message")
async def post_intro_message(flow_input: IntroMessageInput):
    result = await asyncio.to_thread(generate_intro_message, flow_input)
    return result.model_dump(by_alias=True)


@router.post("/project-image")
async def post_project_image(flow_input: GenerateProjectImageInput,
                             admin: str = Depends(require_admin)):
    print(f"🎨 {admin} requested a project image")
    result = await asyncio.to_thread(generate_project_image, flow_input)
    return result.model_dump(by_alias=True)


@router.post("/handwriting")
async def post_handwriting(flow_input: RecognizeHandwritingInput, response: Response):
    result = await asyncio.to_thread(recognize_handwriting, flow_input)

    # The home page greets the visitor by the name they wrote
    if result.recognized_text:
        remember_visitor(response, result.recognized_text, result.detected_language)
    return result.model_dump(by_alias=True)


@router.post("/translate")
async def post_translate(flow_input: TranslateTextInput):
    result = await asyncio.to_thread(translate_text, flow_input)
    return result.model_dump(by_alias=True)
