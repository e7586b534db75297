from pydantic import Field

from portfolioflow.ai import ollama
from portfolioflow.data.defaults import PLACEHOLDER_IMAGE_URL
from portfolioflow.utils.models import CamelModel


class GenerateProjectImageInput(CamelModel):
    description: str = Field(..., min_length=1)


class GenerateProjectImageOutput(CamelModel):
    image_url: str = Field(..., title="Data URI, or the placeholder URL")


def generate_project_image(flow_input: GenerateProjectImageInput) -> GenerateProjectImageOutput:
    prompt = (
        "Generate a visually appealing and representative image for a project "
        f'with the following description: "{flow_input.description}". '
        "The image should be suitable for a project portfolio card."
    )
    try:
        image_b64 = ollama.generate_image(prompt)
    except ollama.ModelCallError as e:
        print(f"❌ Project image generation failed: {e}")
        image_b64 = None

    if not image_b64:
        print("⚠️ No image returned, using placeholder image.")
        return GenerateProjectImageOutput(image_url=PLACEHOLDER_IMAGE_URL)
    return GenerateProjectImageOutput(image_url=f"data:image/png;base64,{image_b64}")
