import json
import os
import re
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
import requests
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

load_dotenv()


# Ollama Configuration - override any of these from the environment / .env
OLLAMA_CONFIG = {
    # Ollama server root; /api/generate and /api/chat are appended
    "API_URL": os.getenv("OLLAMA_API_URL", "http://localhost:11434"),

    # Text model, must support tool calling for Mr.M
    "MODEL": os.getenv("OLLAMA_MODEL", "llama3.2:latest"),

    # Vision model for handwriting recognition
    "VISION_MODEL": os.getenv("OLLAMA_VISION_MODEL", "llama3.2-vision:latest"),

    # Image generation model for project artwork
    "IMAGE_MODEL": os.getenv("OLLAMA_IMAGE_MODEL", "x/z-image-turbo:latest"),

    # Request timeout in seconds
    "TIMEOUT": int(os.getenv("OLLAMA_TIMEOUT", "120")),

    # How many times the model may call tools before it has to answer
    "MAX_TOOL_ROUNDS": 3,
}

T = TypeVar("T", bound=BaseModel)


class ModelCallError(Exception):
    """The model server could not be reached or answered with an error."""


class Tool:
    """A function the model may call mid-generation."""

    def __init__(self, name: str, description: str, handler: Callable[[dict], Any],
                 parameters: Optional[dict] = None):
        self.name = name
        self.description = description
        self.handler = handler
        self.parameters = parameters or {"type": "object", "properties": {}}

    def spec(self) -> dict:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def run(self, arguments: dict) -> Any:
        return self.handler(arguments or {})


def _post(path: str, payload: dict) -> dict:
    url = OLLAMA_CONFIG["API_URL"].rstrip("/") + path
    print(f"[📤] {path} → Ollama model {payload.get('model')}")
    try:
        response = requests.post(
            url, json=payload, timeout=OLLAMA_CONFIG["TIMEOUT"])
    except requests.RequestException as e:
        print(f"❌ Ollama request failed: {e}")
        raise ModelCallError(str(e)) from e

    if response.status_code != 200:
        print(f"❌ Ollama HTTP {response.status_code}")
        raise ModelCallError(
            f"Ollama HTTP {response.status_code}: {response.text[:200]}")

    try:
        data = response.json()
    except ValueError as e:
        raise ModelCallError(f"Ollama returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ModelCallError(
            f"Ollama returned {type(data).__name__}, expected an object")
    return data


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def generate(prompt: str, model: Optional[str] = None,
             output_schema: Optional[dict] = None,
             images: Optional[List[str]] = None) -> str:
    """Single-shot completion; ``images`` are raw base64 strings."""
    payload = {
        "model": model or OLLAMA_CONFIG["MODEL"],
        "prompt": prompt,
        "stream": False,
    }
    if output_schema:
        payload["format"] = output_schema
    if images:
        payload["images"] = images
    return _text(_post("/api/generate", payload).get("response"))


def generate_image(prompt: str) -> Optional[str]:
    """Return the generated image as base64, or None when the model produced none."""
    data = _post("/api/generate", {
        "model": OLLAMA_CONFIG["IMAGE_MODEL"],
        "prompt": prompt,
        "stream": False,
    })
    if data.get("image"):
        return data["image"]
    images = data.get("images") or []
    return images[0] if images else None


def chat(messages: List[dict], tools: Optional[Dict[str, Tool]] = None,
         output_schema: Optional[dict] = None) -> str:
    """Run a chat completion, resolving tool calls until the model answers."""
    tools = tools or {}
    messages = list(messages)

    for _ in range(OLLAMA_CONFIG["MAX_TOOL_ROUNDS"] + 1):
        payload = {
            "model": OLLAMA_CONFIG["MODEL"],
            "messages": messages,
            "stream": False,
        }
        if tools:
            payload["tools"] = [tool.spec() for tool in tools.values()]
        if output_schema:
            payload["format"] = output_schema

        message = _post("/api/chat", payload).get("message") or {}
        if not isinstance(message, dict):
            raise ModelCallError("Ollama chat reply has no message object")
        tool_calls = message.get("tool_calls") or []
        if not tool_calls:
            return _text(message.get("content"))

        messages.append(message)
        for call in tool_calls:
            function = call.get("function") or {}
            name = function.get("name", "")
            tool = tools.get(name)
            if tool is None:
                result = {"error": f"Unknown tool: {name}"}
            else:
                print(f"🔧 Model called tool {name}")
                result = tool.run(function.get("arguments") or {})
            messages.append({
                "role": "tool",
                "tool_name": name,
                "content": json.dumps(result, default=str),
            })

    raise ModelCallError("Model kept calling tools without answering")


def clean_thinking_tags(text: str) -> str:
    """Remove reasoning blocks some local models emit before their answer."""
    cleaned = re.sub(r'<(think|reasoning|thought)>.*?</\1>', '', text,
                     flags=re.DOTALL | re.IGNORECASE)
    # Unterminated block: drop everything after the opening tag
    cleaned = re.sub(r'<(think|reasoning)>.*', '', cleaned,
                     flags=re.DOTALL | re.IGNORECASE)
    return cleaned.strip()


def parse_output(text: str, output_model: Type[T]) -> Optional[T]:
    """Validate model text against ``output_model``; None when it doesn't fit."""
    try:
        return output_model.model_validate_json(clean_thinking_tags(text))
    except ValidationError as e:
        print(f"⚠️ Model output failed {output_model.__name__} validation: {e}")
        return None
