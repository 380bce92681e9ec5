"""Request and response schemas."""

from .base import ResponseBase, MessageResponse
from .campaign import CampaignCreate, CampaignRead
