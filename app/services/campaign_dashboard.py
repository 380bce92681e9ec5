from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import logging

import httpx
from jinja2 import Environment, FileSystemLoader

from app.core.exceptions import ValidationError
from app.schemas.campaign import CampaignCreate

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

FILTER_OPTIONS = ("all", "active", "upcoming")
STATUS_OPTIONS = ("active", "upcoming", "completed")
FORM_FIELDS = ("name", "budget", "startDate", "endDate", "status")

LOAD_FAILED_MESSAGE = "Failed to load campaigns."
SUBMIT_FAILED_MESSAGE = "Failed to add campaign."

def empty_form() -> Dict[str, str]:
    return {field: "" for field in FORM_FIELDS}

def format_budget(value) -> str:
    return f"${float(value):.2f}"

def format_date(value) -> str:
    """Locale short date of an ISO timestamp, taken in UTC."""
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return str(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%x")

def matches_filter(campaign: dict, value: str) -> bool:
    if not value or value.lower() == "all":
        return True
    return str(campaign.get("status", "")).lower() == value.lower()

class CampaignDashboard:
    """
    Client-side view state for the campaign list and the create form.

    Holds the last fetched campaigns, the selected filter, the in-progress
    form values and the current error message. All network access goes
    through the injected httpx client.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        campaigns_path: str = "/api/campaigns",
        statuses: Sequence[str] = STATUS_OPTIONS,
        title: str = "Campaign Dashboard",
    ):
        self.client = client
        self.campaigns_path = campaigns_path
        self.statuses = list(statuses)
        self.title = title
        self.campaigns: List[dict] = []
        self.filter = "all"
        self.form = empty_form()
        self.error = ""

    @property
    def visible_campaigns(self) -> List[dict]:
        return [campaign for campaign in self.campaigns if matches_filter(campaign, self.filter)]

    async def load(self):
        try:
            response = await self.client.get(self.campaigns_path)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch campaigns: {str(e)}")
            self.error = LOAD_FAILED_MESSAGE
            return
        if response.status_code != 200:
            logger.warning(f"Failed to fetch campaigns: {response.status_code} - {response.text}")
            self.error = LOAD_FAILED_MESSAGE
            return
        try:
            campaigns = response.json()
        except ValueError:
            campaigns = None
        if not isinstance(campaigns, list):
            logger.warning(f"Unexpected campaigns payload: {response.text[:200]}")
            self.error = LOAD_FAILED_MESSAGE
            return
        self.campaigns = campaigns

    def apply_filter(self, value: str) -> List[dict]:
        self.filter = (value or "all").lower()
        return self.visible_campaigns

    async def submit(self, form_values: Optional[Dict[str, str]] = None) -> bool:
        """Validate and create a campaign; returns True when it was created."""
        for field in FORM_FIELDS:
            if form_values and field in form_values:
                self.form[field] = form_values[field]
        self.error = ""

        try:
            CampaignCreate.from_payload(self.form, statuses=self.statuses)
        except ValidationError as e:
            self.error = e.message
            return False

        try:
            response = await self.client.post(self.campaigns_path, json=self.form)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to submit campaign: {str(e)}")
            self.error = SUBMIT_FAILED_MESSAGE
            return False

        if not response.is_success:
            self.error = self._error_message(response)
            return False

        self.form = empty_form()
        await self.load()
        return True

    def render(self) -> str:
        template = template_environment.get_template("dashboard.html")
        return template.render(
            title=self.title,
            campaigns=self.visible_campaigns,
            filter=self.filter,
            filter_options=FILTER_OPTIONS,
            status_options=self.statuses,
            form=self.form,
            error=self.error,
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return SUBMIT_FAILED_MESSAGE
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
        return SUBMIT_FAILED_MESSAGE

template_environment = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)
template_environment.filters["budget"] = format_budget
template_environment.filters["short_date"] = format_date
