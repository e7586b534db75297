"""
Mr.M, the portfolio assistant.

One contract serves both ways of asking:

- with ``projectContext`` the prompt is focused on that project and the model
  may fall back on general knowledge for domain questions;
- without it the model gets ``getProjectsTool`` and must answer strictly from
  what the tool returns.

Whatever goes wrong, the caller gets an ``answer``.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from portfolioflow.ai import ollama
from portfolioflow.ai.prompts import define_prompt
from portfolioflow.services.projects import get_project_contexts
from portfolioflow.utils.models import CamelModel, ChatHistoryEntry, ProjectContext

FALLBACK_ANSWER = "I'm sorry, I encountered a problem while trying to answer. Please try again."


class ProjectQnaInput(CamelModel):
    question: str = Field(..., title="The visitor's question")
    chat_history: Optional[List[ChatHistoryEntry]] = None
    project_context: Optional[ProjectContext] = None

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Question must not be empty.")
        return v.strip()


class ProjectQnaOutput(CamelModel):
    answer: str


_HISTORY_BLOCK = """
{% if chat_history %}
{% for entry in chat_history %}
{{ entry.role }}: {{ entry.text }}
{% endfor %}
{% endif %}
"""

CONTEXTUAL_PROMPT = define_prompt("""You are Mr.M, a friendly and helpful AI assistant for Mytreyan's portfolio.
You are currently focused on Mytreyan's project: "{{ project.title }}".

Project Details for "{{ project.title }}":
Title: {{ project.title }}
Description: {{ project.description }}
{% if project.long_description %}
Long Description: {{ project.long_description }}
{% endif %}
Categories: {{ project.categories | join(", ") if project.categories else "Not specified" }}
Technologies Used: {{ project.technologies | join(", ") if project.technologies else "Not specified" }}
{% if project.live_link %}
Live Demo Link: {{ project.live_link }}
{% endif %}
{% if project.source_link %}
Source Code Link: {{ project.source_link }}
{% endif %}
{% if project.documentation_link %}
Documentation Link: {{ project.documentation_link }}
{% endif %}

Instructions for Mr.M:
1. If the question is about "{{ project.title }}", answer PRIMARILY from the Project Details above.
   If they don't contain the answer, clearly say you don't have that information for this project.
   Do NOT invent details about "{{ project.title }}".
2. If the question is about the project's domain ({{ project.categories[0] if project.categories else "its field" }})
   or its technologies, use your general knowledge and link back to the project when it feels natural.
3. Other general questions may be answered from general knowledge.
4. Be polite and conversational and use the chat history for context. If the visitor asks about
   another of Mytreyan's projects, suggest selecting it from the project list.

Respond with JSON: {"answer": "<your answer>"}

Previous chat about "{{ project.title }}" (if any):
""" + _HISTORY_BLOCK + """
User's current question: {{ question }}
""")

TOOL_PROMPT = define_prompt("""You are Mr.M, a friendly AI assistant for Mytreyan's portfolio.
Answer questions about Mytreyan's projects.

Rules:
- Call getProjectsTool to get the current list of projects before answering.
- Answer ONLY from the information the tool returns.
- If the tool output does not contain the information asked for, say explicitly that you
  don't have that information. Never invent project names, features, links or technologies.
- Keep answers concise and conversational.

Respond with JSON: {"answer": "<your answer>"}

Previous conversation (if any):
""" + _HISTORY_BLOCK + """
User's current question: {{ question }}
""")


def _get_projects_tool(_arguments: dict) -> list:
    return [p.model_dump(by_alias=True) for p in get_project_contexts()]


GET_PROJECTS_TOOL = ollama.Tool(
    name="getProjectsTool",
    description="Fetch the full, current list of Mytreyan's portfolio projects.",
    handler=_get_projects_tool,
)


def ask_mr_m(flow_input: ProjectQnaInput) -> ProjectQnaOutput:
    schema = ProjectQnaOutput.model_json_schema(by_alias=True)
    context = flow_input.project_context
    try:
        if context is not None:
            print(
                f"🤖 Mr.M: contextual question for '{context.title}': {flow_input.question}")
            prompt = CONTEXTUAL_PROMPT.render(
                project=context,
                chat_history=flow_input.chat_history,
                question=flow_input.question,
            )
            text = ollama.generate(prompt, output_schema=schema)
        else:
            print(f"🤖 Mr.M: portfolio question: {flow_input.question}")
            prompt = TOOL_PROMPT.render(
                chat_history=flow_input.chat_history,
                question=flow_input.question,
            )
            text = ollama.chat(
                [{"role": "user", "content": prompt}],
                tools={GET_PROJECTS_TOOL.name: GET_PROJECTS_TOOL},
                output_schema=schema,
            )
    except ollama.ModelCallError as e:
        print(f"❌ Mr.M: model call failed: {e}")
        return ProjectQnaOutput(answer=FALLBACK_ANSWER)

    output = ollama.parse_output(text, ProjectQnaOutput)
    if output is None or not output.answer.strip():
        print("❌ Mr.M: Failed to get an answer from the model.")
        return ProjectQnaOutput(answer=FALLBACK_ANSWER)
    return output
