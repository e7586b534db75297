import re
from typing import Optional
from pydantic import Field, field_validator

from portfolioflow.ai import ollama
from portfolioflow.utils.models import CamelModel

DATA_URI_PATTERN = re.compile(r"^data:image/[\w.+-]+;base64,(?P<payload>[A-Za-z0-9+/=\s]+)$")


class RecognizeHandwritingInput(CamelModel):
    image_data_uri: str = Field(...,
                                title="data:image/png;base64,<encoded_data>")

    @field_validator("image_data_uri")
    @classmethod
    def check_data_uri(cls, v):
        if not DATA_URI_PATTERN.match(v):
            raise ValueError(
                "Expected an image data URI like 'data:image/png;base64,...'.")
        return v

    def image_base64(self) -> str:
        return DATA_URI_PATTERN.match(self.image_data_uri).group("payload").strip()


class RecognizeHandwritingOutput(CamelModel):
    recognized_text: str = ""
    detected_language: Optional[str] = Field(
        None, title="BCP-47 code such as en, ta or hi")


HANDWRITING_PROMPT = """Analyze the attached image, which contains a handwritten name.
1. Recognize and extract this name. Put only the name in "recognizedText". If the writing is unclear, try your best or return an empty string.
2. Identify the language of the script used and return it as a BCP-47 code (e.g. "en", "ta", "hi") in "detectedLanguage". Omit it if you cannot tell.

Respond with JSON: {"recognizedText": "...", "detectedLanguage": "..."}"""


def recognize_handwriting(flow_input: RecognizeHandwritingInput) -> RecognizeHandwritingOutput:
    try:
        text = ollama.generate(
            HANDWRITING_PROMPT,
            model=ollama.OLLAMA_CONFIG["VISION_MODEL"],
            output_schema=RecognizeHandwritingOutput.model_json_schema(),
            images=[flow_input.image_base64()],
        )
    except ollama.ModelCallError as e:
        print(f"❌ Error during handwriting recognition: {e}")
        return RecognizeHandwritingOutput()

    output = ollama.parse_output(text, RecognizeHandwritingOutput)
    if output is None:
        print("⚠️ Handwriting recognition: no usable output from the model.")
        return RecognizeHandwritingOutput()
    return RecognizeHandwritingOutput(
        recognized_text=output.recognized_text.strip(),
        detected_language=output.detected_language or None,
    )
