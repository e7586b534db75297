from pydantic import Field

from portfolioflow.ai import ollama
from portfolioflow.ai.prompts import define_prompt
from portfolioflow.utils.models import CamelModel


class TranslateTextInput(CamelModel):
    text_to_translate: str = Field(..., min_length=1)
    target_language: str = Field(..., min_length=2,
                                 title="BCP-47 code such as es, fr or ta")


class TranslateTextOutput(CamelModel):
    translated_text: str


TRANSLATION_PROMPT = define_prompt("""Translate the following text into {{ target_language }}.
Text to translate:
"{{ text_to_translate }}"

Respond with JSON: {"translatedText": "<only the translated text>"}
""")


def translate_text(flow_input: TranslateTextInput) -> TranslateTextOutput:
    prompt = TRANSLATION_PROMPT.render(**flow_input.model_dump())
    try:
        text = ollama.generate(
            prompt, output_schema=TranslateTextOutput.model_json_schema())
    except ollama.ModelCallError as e:
        print(f"❌ Translation failed: {e}")
        return TranslateTextOutput(translated_text=flow_input.text_to_translate)

    output = ollama.parse_output(text, TranslateTextOutput)
    if output is None:
        # Show the original rather than nothing
        return TranslateTextOutput(translated_text=flow_input.text_to_translate)
    return output
