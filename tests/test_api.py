from fastapi.testclient import TestClient

from portfolioflow.ai import ollama
from portfolioflow.ai.flows.project_qna import FALLBACK_ANSWER, ProjectQnaOutput
from portfolioflow.chat import session as chat_session
from portfolioflow.data.defaults import DEFAULT_PROJECT, DEFAULT_RESUME_DATA
from portfolioflow.services.contact import list_contact_messages
from portfolioflow.services.projects import create_project
from portfolioflow.utils.forms import ProjectForm

PNG_URI = "data:image/png;base64,iVBORw0KGgo="


def test_projects_endpoint_uses_wire_names(client):
    (project,) = client.get("/api/projects").json()
    assert project["id"] == DEFAULT_PROJECT.id
    assert project["longDescription"] == DEFAULT_PROJECT.long_description
    assert project["dataAiHint"] == DEFAULT_PROJECT.data_ai_hint


def test_projects_category_filter_and_categories(client):
    create_project(ProjectForm(title="Chat Widget", description="Talks to visitors all day.",
                               category="AI Integration", technologies="Python"))
    create_project(ProjectForm(title="Shop Front", description="Sells things on the web.",
                               category="Web Development", technologies="React"))

    assert client.get("/api/projects/categories").json() == ["AI Integration", "Web Development"]
    titles = [p["title"] for p in client.get("/api/projects", params={"category": "AI Integration"}).json()]
    assert titles == ["Chat Widget"]


def test_project_by_id(client):
    assert client.get(f"/api/projects/{DEFAULT_PROJECT.id}").json()["title"] == DEFAULT_PROJECT.title
    assert client.get("/api/projects/missing").status_code == 404


def test_resume_endpoint_returns_defaults(client):
    data = client.get("/api/resume").json()
    assert data["summaryItems"] == DEFAULT_RESUME_DATA.summary_items
    assert data["experience"][0]["jobTitle"] == DEFAULT_RESUME_DATA.experience[0].job_title


def test_contact_endpoint(client):
    response = client.post("/api/contact", json={
        "name": "Ada", "email": "ada@example.com", "message": "Short"})
    assert response.status_code == 422
    assert "message" in response.json()["detail"]
    assert list_contact_messages() == []

    response = client.post("/api/contact", json={
        "name": "Ada", "email": "ada@example.com",
        "message": "I would love to collaborate on something."})
    assert response.status_code == 201
    assert list_contact_messages()[0].id == response.json()["id"]


# AI endpoints

def test_mr_m_endpoint_returns_fallback_when_model_is_down(client):
    response = client.post("/api/ai/mr-m", json={"question": "Which projects use React?"})
    assert response.status_code == 200
    assert response.json() == {"answer": FALLBACK_ANSWER}


def test_mr_m_endpoint_rejects_blank_question(client):
    assert client.post("/api/ai/mr-m", json={"question": "  "}).status_code == 422


def test_mr_m_endpoint_with_project_context(client, monkeypatch):
    monkeypatch.setattr(ollama, "generate",
                        lambda prompt, **kwargs: '{"answer": "It shows a crate."}')
    response = client.post("/api/ai/mr-m", json={
        "question": "What does it show?",
        "chatHistory": [],
        "projectContext": {
            "id": DEFAULT_PROJECT.id,
            "title": DEFAULT_PROJECT.title,
            "description": DEFAULT_PROJECT.description,
            "categories": ["3D Graphics"],
            "technologies": DEFAULT_PROJECT.technologies,
        },
    })
    assert response.json() == {"answer": "It shows a crate."}


def test_handwriting_endpoint_remembers_the_visitor(client, monkeypatch):
    monkeypatch.setattr(ollama, "generate",
                        lambda prompt, **kwargs: '{"recognizedText": "Ada", "detectedLanguage": "en"}')
    response = client.post("/api/ai/handwriting", json={"imageDataUri": PNG_URI})
    assert response.json() == {"recognizedText": "Ada", "detectedLanguage": "en"}
    assert response.cookies["visitor_name"] == "Ada"
    assert response.cookies["visitor_lang"] == "en"

    assert "Hello Ada, Mytreyan here" in client.get("/").text


def test_handwriting_endpoint_stores_only_valid_languages(client, monkeypatch):
    monkeypatch.setattr(ollama, "generate",
                        lambda prompt, **kwargs: '{"recognizedText": "Ada", "detectedLanguage": "x"}')
    response = client.post("/api/ai/handwriting", json={"imageDataUri": PNG_URI})
    assert response.cookies["visitor_lang"] == "en"
    assert client.get("/").status_code == 200


def test_handwriting_endpoint_fallback_sets_no_cookie(client):
    response = client.post("/api/ai/handwriting", json={"imageDataUri": PNG_URI})
    assert response.json() == {"recognizedText": "", "detectedLanguage": None}
    assert "visitor_name" not in response.cookies


def test_handwriting_endpoint_rejects_non_data_uri(client):
    response = client.post("/api/ai/handwriting", json={"imageDataUri": "hello"})
    assert response.status_code == 422


def test_translate_endpoint_falls_back_to_original(client):
    response = client.post("/api/ai/translate", json={
        "textToTranslate": "Hello", "targetLanguage": "ta"})
    assert response.json() == {"translatedText": "Hello"}


def test_intro_message_endpoint(client, monkeypatch):
    monkeypatch.setattr(ollama, "generate",
                        lambda prompt, **kwargs: '{"introMessage": "Hi Acme!"}')
    response = client.post("/api/ai/intro-message", json={
        "employer": "Acme", "jobTitle": "Engineer", "userSkills": ["Python"],
        "userExperience": "Five years", "desiredTone": "casual"})
    assert response.json() == {"introMessage": "Hi Acme!"}


def test_project_image_endpoint_requires_admin(client):
    response = client.post("/api/ai/project-image", json={"description": "A crate"})
    assert response.status_code == 401


def test_project_image_endpoint_for_admin(admin_client):
    response = admin_client.post("/api/ai/project-image", json={"description": "A crate"})
    assert response.status_code == 200
    assert response.json()["imageUrl"] == "https://placehold.co/600x400.png"


# Chat session endpoints

def test_chat_session_round_trip(client, monkeypatch):
    monkeypatch.setattr(chat_session, "ask_mr_m",
                        lambda flow_input: ProjectQnaOutput(answer=f"About {flow_input.project_context.title}"))

    snapshot = client.get("/api/chat/session").json()
    assert snapshot == {"state": "no_project_selected", "project": None, "messages": []}

    snapshot = client.post("/api/chat/select", json={"projectId": DEFAULT_PROJECT.id}).json()
    assert snapshot["state"] == "idle"
    assert snapshot["project"]["id"] == DEFAULT_PROJECT.id
    assert len(snapshot["messages"]) == 1

    data = client.post("/api/chat/ask", json={"question": "What is it?"}).json()
    assert data["reply"]["text"] == f"About {DEFAULT_PROJECT.title}"
    assert [m["sender"] for m in data["session"]["messages"]] == ["assistant", "user", "assistant"]

    snapshot = client.post("/api/chat/back").json()
    assert snapshot["state"] == "no_project_selected"
    assert snapshot["messages"] == []


def test_chat_session_is_kept_per_visitor(app, client):
    client.post("/api/chat/select", json={"projectId": DEFAULT_PROJECT.id})
    other_visitor = TestClient(app)
    assert other_visitor.get("/api/chat/session").json()["state"] == "no_project_selected"
    assert client.get("/api/chat/session").json()["state"] == "idle"


def test_chat_ask_without_project_is_a_conflict(client):
    response = client.post("/api/chat/ask", json={"question": "Hello?"})
    assert response.status_code == 409


def test_chat_select_missing_project(client):
    response = client.post("/api/chat/select", json={"projectId": "missing"})
    assert response.status_code == 404


def test_chat_ask_blank_question(client):
    client.post("/api/chat/select", json={"projectId": DEFAULT_PROJECT.id})
    assert client.post("/api/chat/ask", json={"question": "  "}).status_code == 422


def test_chat_model_failure_becomes_error_reply(client):
    client.post("/api/chat/select", json={"projectId": DEFAULT_PROJECT.id})
    data = client.post("/api/chat/ask", json={"question": "What is it?"}).json()
    # The flow itself falls back rather than raising
    assert data["reply"]["text"] == FALLBACK_ANSWER
