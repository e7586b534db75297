import asyncio
import re
from typing import Dict, Optional, Tuple
from urllib.parse import quote, unquote

from portfolioflow.ai.flows.translate import TranslateTextInput, translate_text

NAME_COOKIE = "visitor_name"
LANGUAGE_COOKIE = "visitor_lang"
VISITOR_COOKIE_MAX_AGE = 60 * 60 * 24 * 30

# Primary subtag plus optional subtags, e.g. en, ta, zh-Hant, pt-BR
LANGUAGE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")

GREETING_TEXTS = {
    "greeting_prefix": "Hello ",
    "greeting_no_name": "Hello there, ",
    "name_fallback": "Mytreyan here",
    "motto": "can create light outta a blackhole",
}


def clean_language(language: Optional[str]) -> str:
    """A usable BCP-47 code, or en for anything missing or malformed."""
    if language and LANGUAGE_PATTERN.match(language.strip()):
        return language.strip()
    return "en"


def remember_visitor(response, name: str, language: Optional[str]) -> None:
    # Names come in any script; cookies only carry ASCII
    response.set_cookie(key=NAME_COOKIE, value=quote(name),
                        max_age=VISITOR_COOKIE_MAX_AGE)
    response.set_cookie(key=LANGUAGE_COOKIE, value=clean_language(language),
                        max_age=VISITOR_COOKIE_MAX_AGE)


def visitor_from_cookies(cookies) -> Tuple[Optional[str], Optional[str]]:
    name = cookies.get(NAME_COOKIE)
    return (unquote(name) if name else None), cookies.get(LANGUAGE_COOKIE)


async def localized_texts(language: Optional[str]) -> Dict[str, str]:
    """Home page texts in the visitor's language; English needs no model call."""
    language = clean_language(language)
    if language.lower() == "en" or language.lower().startswith("en-"):
        return dict(GREETING_TEXTS)

    keys = list(GREETING_TEXTS)
    results = await asyncio.gather(*[
        asyncio.to_thread(translate_text, TranslateTextInput(
            text_to_translate=GREETING_TEXTS[key], target_language=language))
        for key in keys
    ])
    return {key: result.translated_text for key, result in zip(keys, results)}


def build_greeting(texts: Dict[str, str], user_name: Optional[str]) -> str:
    if user_name:
        return f"{texts['greeting_prefix']}{user_name}, {texts['name_fallback']}"
    return f"{texts['greeting_no_name']}{texts['name_fallback']}"
