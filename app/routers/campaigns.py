from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import json
import logging

from app.core.config import Settings
from app.core.database import get_db
from app.core.exceptions import CampaignTrackerError, InternalError, MethodNotSupportedError
from app.models import Campaign
from app.schemas import CampaignCreate, CampaignRead, MessageResponse

router = APIRouter()
logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

async def read_json_body(request: Request):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None

@router.get("", response_model=List[CampaignRead])
async def list_campaigns(db: AsyncSession = Depends(get_db)):
    try:
        result = await db.execute(select(Campaign))
        return result.scalars().all()
    except Exception as e:
        logger.error(f"Error while listing campaigns: {str(e)}")
        raise InternalError() from e

@router.post(
    "",
    status_code=201,
    response_model=CampaignRead,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def create_campaign(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        payload = await read_json_body(request)
        statuses = settings.CAMPAIGN_STATUSES if settings.ENFORCE_CAMPAIGN_STATUS else None
        candidate = CampaignCreate.from_payload(payload, statuses=statuses)

        db_campaign = Campaign(**candidate.model_dump())
        db.add(db_campaign)
        await db.commit()
        await db.refresh(db_campaign)
    except CampaignTrackerError:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"Error while saving campaign: {str(e)}")
        raise InternalError() from e

    logger.info(f"Created campaign {db_campaign.id} ({db_campaign.name})")
    return db_campaign

@router.api_route("", methods=["PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE"], include_in_schema=False)
async def reject_method(request: Request):
    raise MethodNotSupportedError(request.method, ALLOWED_METHODS)
