from pathlib import Path
from fastapi.templating import Jinja2Templates
from moads.formatting import format_currency, format_date, pluralize_campaigns, status_badge_class

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["date"] = format_date
templates.env.filters["badge"] = status_badge_class
templates.env.filters["campaign_count"] = pluralize_campaigns
