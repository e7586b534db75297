from typing import List, Literal
from pydantic import Field

from portfolioflow.ai import ollama
from portfolioflow.ai.prompts import define_prompt
from portfolioflow.utils.models import CamelModel

FALLBACK_INTRO = "I'm sorry, I couldn't generate an introduction right now. Please try again."


class IntroMessageInput(CamelModel):
    employer: str = Field(..., min_length=1)
    job_title: str = Field(..., min_length=1)
    user_skills: List[str] = Field(default_factory=list)
    user_experience: str
    desired_tone: Literal["formal", "casual", "enthusiastic"] = "casual"


class IntroMessageOutput(CamelModel):
    intro_message: str


INTRO_PROMPT = define_prompt("""You are an AI assistant that specializes in generating personalized introductory messages for job seekers. You will take the user's skills, experience, and the potential employer's information to create a compelling introduction.

Employer: {{ employer }}
Job Title: {{ job_title }}
User Skills:
{% for skill in user_skills %}
- {{ skill }}
{% else %}
No skills listed.
{% endfor %}
User Experience: {{ user_experience }}
Desired Tone: {{ desired_tone }}

Generate an introductory message that is tailored to the employer and job title, highlighting the user's relevant skills and experience. The message should be in a {{ desired_tone }} tone.

Respond with JSON: {"introMessage": "<the message>"}
""")


def generate_intro_message(flow_input: IntroMessageInput) -> IntroMessageOutput:
    prompt = INTRO_PROMPT.render(**flow_input.model_dump())
    try:
        text = ollama.generate(
            prompt, output_schema=IntroMessageOutput.model_json_schema())
    except ollama.ModelCallError as e:
        print(f"❌ Intro message generation failed: {e}")
        return IntroMessageOutput(intro_message=FALLBACK_INTRO)

    output = ollama.parse_output(text, IntroMessageOutput)
    if output is None or not output.intro_message.strip():
        return IntroMessageOutput(intro_message=FALLBACK_INTRO)
    return output
