from pathlib import Path

from fastapi.templating import Jinja2Templates

from .services.formatting import format_currency, format_number, format_percentage

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["percentage"] = format_percentage
templates.env.filters["number"] = format_number
