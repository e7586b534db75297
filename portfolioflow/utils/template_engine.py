from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

from portfolioflow.data.defaults import CATEGORIES

PACKAGE_DIR = Path(__file__).resolve().parent.parent
SITE_NAME = "Mytreyan's Portfolio"

templates = Jinja2Templates(directory=PACKAGE_DIR / "templates")


def format_timestamp(value: Optional[datetime], fmt: str = "%Y-%m-%d %H:%M") -> str:
    if value is None:
        return "N/A"
    return value.strftime(fmt)


def truncate_words(text: Optional[str], limit: int = 30) -> str:
    words = (text or "").split()
    if len(words) <= limit:
        return " ".join(words)
    return " ".join(words[:limit]) + "..."


templates.env.filters["timestamp"] = format_timestamp
templates.env.filters["truncate_words"] = truncate_words
templates.env.globals["site_name"] = SITE_NAME
templates.env.globals["all_categories"] = CATEGORIES
