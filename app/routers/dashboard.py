from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.services.campaign_dashboard import FORM_FIELDS, CampaignDashboard
from app.utils.httpx import get_campaigns_client

router = APIRouter()

def build_dashboard(request: Request, client) -> CampaignDashboard:
    settings = request.app.state.settings
    return CampaignDashboard(
        client,
        campaigns_path=f"{settings.API_PREFIX}/campaigns",
        statuses=settings.CAMPAIGN_STATUSES,
        title=settings.APP_NAME,
    )

@router.get("/", response_class=HTMLResponse)
async def show_dashboard(request: Request, filter: str = "all"):
    settings = request.app.state.settings
    async with get_campaigns_client(request.app, settings.CAMPAIGNS_API_URL) as client:
        dashboard = build_dashboard(request, client)
        await dashboard.load()
        dashboard.apply_filter(filter)
        return HTMLResponse(dashboard.render())

@router.post("/", response_class=HTMLResponse)
async def submit_campaign(request: Request):
    settings = request.app.state.settings
    form = await request.form()
    form_values = {field: str(form.get(field, "")) for field in FORM_FIELDS}

    async with get_campaigns_client(request.app, settings.CAMPAIGNS_API_URL) as client:
        dashboard = build_dashboard(request, client)
        await dashboard.load()
        created = await dashboard.submit(form_values)
        dashboard.apply_filter(str(form.get("filter", "all")))
        return HTMLResponse(dashboard.render(), status_code=200 if created else 400)
