from jinja2 import Environment, StrictUndefined, Template

# Prompts are plain text, never HTML
prompt_env = Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


def define_prompt(source: str) -> Template:
    return prompt_env.from_string(source)
