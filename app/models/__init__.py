"""Database models."""

from .campaign import Campaign
