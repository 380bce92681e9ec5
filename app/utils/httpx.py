import httpx
from fastapi import FastAPI

# Base URL used when the dashboard calls back into its own app
in_process_base_url = 'http://campaign-tracker'

def get_campaigns_client(app: FastAPI, api_url: str = "") -> httpx.AsyncClient:
    """Client the dashboard uses to reach the campaigns endpoint."""
    if api_url:
        return httpx.AsyncClient(base_url=api_url)
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=in_process_base_url)
