import threading
from collections import OrderedDict
from enum import Enum
from typing import Callable, List, Optional

from portfolioflow.ai.flows.project_qna import ProjectQnaInput, ProjectQnaOutput, ask_mr_m
from portfolioflow.utils.models import ChatHistoryEntry, ChatMessage, ChatPart, Project, ProjectContext

ERROR_REPLY = "Sorry, I'm having trouble connecting right now. Please try again later."


class ChatState(str, Enum):
    NO_PROJECT_SELECTED = "no_project_selected"
    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"


class ChatSessionError(Exception):
    pass


class NoProjectSelectedError(ChatSessionError):
    pass


class ChatBusyError(ChatSessionError):
    pass


def greeting_for(project: Project) -> str:
    return (f"Hi! I'm Mr.M. Ask me anything about \"{project.title}\", "
            "its technologies, or the field it belongs to.")


class ChatSession:
    """Mr.M conversation about one selected project.

    Selecting a project (or going back) starts a new conversation; an answer
    that arrives for an abandoned conversation is dropped.
    """

    def __init__(self, ask: Optional[Callable[[ProjectQnaInput], ProjectQnaOutput]] = None):
        self._ask = ask
        self._lock = threading.Lock()
        self._conversation = 0
        self.project: Optional[Project] = None
        self.messages: List[ChatMessage] = []
        self.awaiting_answer = False

    @property
    def state(self) -> ChatState:
        if self.project is None:
            return ChatState.NO_PROJECT_SELECTED
        if self.awaiting_answer:
            return ChatState.AWAITING_ANSWER
        return ChatState.IDLE

    def select_project(self, project: Project) -> None:
        with self._lock:
            self._conversation += 1
            self.project = project
            self.awaiting_answer = False
            self.messages = [ChatMessage(
                text=greeting_for(project), sender="assistant")]

    def back(self) -> None:
        with self._lock:
            self._conversation += 1
            self.project = None
            self.awaiting_answer = False
            self.messages = []

    def history_for_flow(self) -> List[ChatHistoryEntry]:
        # The greeting is ours, not part of the conversation the model sees
        return [
            ChatHistoryEntry(
                role="user" if msg.sender == "user" else "model",
                parts=[ChatPart(text=msg.text)],
            )
            for msg in self.messages[1:]
        ]

    def ask(self, question: str) -> ChatMessage:
        question = question.strip()
        with self._lock:
            if not question:
                raise ChatSessionError("Question must not be empty.")
            if self.project is None:
                raise NoProjectSelectedError("Select a project first.")
            if self.awaiting_answer:
                raise ChatBusyError("Mr.M is still answering the last question.")

            history = self.history_for_flow()
            self.messages.append(ChatMessage(text=question, sender="user"))
            self.awaiting_answer = True
            conversation = self._conversation
            project = self.project

        try:
            ask = self._ask or ask_mr_m
            result = ask(ProjectQnaInput(
                question=question,
                chat_history=history,
                project_context=ProjectContext.from_project(project),
            ))
            reply = ChatMessage(text=result.answer, sender="assistant")
        except Exception as e:
            print(f"❌ Error calling Mr.M flow: {e}")
            reply = ChatMessage(text=ERROR_REPLY, sender="assistant")

        with self._lock:
            if conversation == self._conversation:
                self.messages.append(reply)
                self.awaiting_answer = False
            else:
                print("🔄 Dropping answer for an abandoned conversation")
        return reply

    def snapshot(self) -> dict:
        return {
            "state": self.state.value,
            "project": self.project.model_dump(by_alias=True) if self.project else None,
            "messages": [m.model_dump(mode="json") for m in self.messages],
        }


class ChatSessionStore:
    """One ChatSession per visitor, oldest evicted past ``max_sessions``."""

    def __init__(self, max_sessions: int = 1000,
                 ask: Optional[Callable[[ProjectQnaInput], ProjectQnaOutput]] = None):
        self.max_sessions = max_sessions
        self._ask = ask
        self._sessions: "OrderedDict[str, ChatSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, user_id: str) -> ChatSession:
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = ChatSession(ask=self._ask)
                self._sessions[user_id] = session
                while len(self._sessions) > self.max_sessions:
                    self._sessions.popitem(last=False)
            else:
                self._sessions.move_to_end(user_id)
            return session

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


chat_sessions = ChatSessionStore()
