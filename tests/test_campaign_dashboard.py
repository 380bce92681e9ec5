"""
Tests for the dashboard view state and its HTML routes.
"""

from datetime import datetime

import httpx
import pytest

from app.services.campaign_dashboard import CampaignDashboard, format_budget, format_date


def campaign(campaign_id, status, name=None):
    return {
        "id": campaign_id,
        "name": name or f"Campaign {campaign_id}",
        "budget": 100.0,
        "startDate": "2024-03-01T00:00:00.000Z",
        "endDate": "2024-03-31T00:00:00.000Z",
        "status": status,
    }


def mock_client(handler, requests=None):
    def record(request):
        if requests is not None:
            requests.append(request)
        return handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(record), base_url="http://test")


VALID_FORM = {
    "name": "Spring Sale",
    "budget": "1500",
    "startDate": "2024-03-01",
    "endDate": "2024-03-31",
    "status": "active",
}


class TestApplyFilter:

    def test_matches_status_case_insensitively(self):
        dashboard = CampaignDashboard(client=None)
        dashboard.campaigns = [campaign(1, "Active"), campaign(2, "upcoming"), campaign(3, "ACTIVE")]

        visible = dashboard.apply_filter("active")

        assert [c["id"] for c in visible] == [1, 3]

    def test_all_shows_everything(self):
        dashboard = CampaignDashboard(client=None)
        dashboard.campaigns = [campaign(1, "Active"), campaign(2, "completed")]

        assert dashboard.apply_filter("all") == dashboard.campaigns

    @pytest.mark.asyncio
    async def test_does_not_refetch(self):
        requests = []
        async with mock_client(lambda r: httpx.Response(200, json=[campaign(1, "upcoming")]), requests) as client:
            dashboard = CampaignDashboard(client)
            await dashboard.load()
            dashboard.apply_filter("upcoming")
            dashboard.apply_filter("active")

        assert len(requests) == 1
        assert dashboard.visible_campaigns == []


class TestLoad:

    @pytest.mark.asyncio
    async def test_replaces_held_campaigns(self):
        async with mock_client(lambda r: httpx.Response(200, json=[campaign(7, "active")])) as client:
            dashboard = CampaignDashboard(client)
            dashboard.campaigns = [campaign(1, "active")]
            await dashboard.load()

        assert [c["id"] for c in dashboard.campaigns] == [7]

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_previous_set(self):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(fail) as client:
            dashboard = CampaignDashboard(client)
            dashboard.campaigns = [campaign(1, "active")]
            await dashboard.load()

        assert [c["id"] for c in dashboard.campaigns] == [1]
        assert dashboard.error == "Failed to load campaigns."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json={"message": "not a list"}),
    ])
    async def test_malformed_body_keeps_previous_set(self, response):
        async with mock_client(lambda r: response) as client:
            dashboard = CampaignDashboard(client)
            dashboard.campaigns = [campaign(1, "active")]
            await dashboard.load()

        assert [c["id"] for c in dashboard.campaigns] == [1]
        assert dashboard.error == "Failed to load campaigns."

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_set(self):
        async with mock_client(lambda r: httpx.Response(500, json={"message": "Internal server error"})) as client:
            dashboard = CampaignDashboard(client)
            dashboard.campaigns = [campaign(1, "active")]
            await dashboard.load()

        assert [c["id"] for c in dashboard.campaigns] == [1]
        assert dashboard.error == "Failed to load campaigns."


class TestSubmit:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("override, message", [
        ({"name": ""}, "All fields are required."),
        ({"budget": "lots"}, "Budget must be a number."),
    ])
    async def test_local_validation_skips_network(self, override, message):
        requests = []
        async with mock_client(lambda r: httpx.Response(201, json={}), requests) as client:
            dashboard = CampaignDashboard(client)
            created = await dashboard.submit(dict(VALID_FORM, **override))

        assert created is False
        assert dashboard.error == message
        assert requests == []

    @pytest.mark.asyncio
    async def test_shows_server_message(self):
        async with mock_client(lambda r: httpx.Response(400, json={"message": "Budget must be a number."})) as client:
            dashboard = CampaignDashboard(client)
            created = await dashboard.submit(VALID_FORM)

        assert created is False
        assert dashboard.error == "Budget must be a number."
        assert dashboard.form == VALID_FORM

    @pytest.mark.asyncio
    async def test_any_2xx_counts_as_created(self):
        def handler(request):
            if request.method == "POST":
                return httpx.Response(202)
            return httpx.Response(200, json=[campaign(9, "active", name="Spring Sale")])

        async with mock_client(handler) as client:
            dashboard = CampaignDashboard(client)
            created = await dashboard.submit(VALID_FORM)

        assert created is True
        assert dashboard.error == ""
        assert [c["id"] for c in dashboard.campaigns] == [9]

    @pytest.mark.asyncio
    async def test_falls_back_to_generic_message(self):
        async with mock_client(lambda r: httpx.Response(502, text="Bad Gateway")) as client:
            dashboard = CampaignDashboard(client)
            await dashboard.submit(VALID_FORM)

        assert dashboard.error == "Failed to add campaign."

    @pytest.mark.asyncio
    async def test_network_failure_sets_generic_message(self):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(fail) as client:
            dashboard = CampaignDashboard(client)
            created = await dashboard.submit(VALID_FORM)

        assert created is False
        assert dashboard.error == "Failed to add campaign."

    @pytest.mark.asyncio
    async def test_success_clears_form_and_reloads(self, http_client):
        dashboard = CampaignDashboard(http_client)

        created = await dashboard.submit(VALID_FORM)

        assert created is True
        assert dashboard.error == ""
        assert all(value == "" for value in dashboard.form.values())
        assert [c["name"] for c in dashboard.campaigns] == ["Spring Sale"]
        assert dashboard.campaigns[0]["budget"] == 1500

        assert len(dashboard.apply_filter("active")) == 1
        assert dashboard.apply_filter("upcoming") == []


class TestRender:

    def test_formatters(self):
        assert format_budget(1500) == "$1500.00"
        assert format_budget(12.5) == "$12.50"
        assert format_date("2024-03-01T00:00:00.000Z") == datetime(2024, 3, 1).strftime("%x")

    def test_empty_set_renders_placeholder_row(self):
        dashboard = CampaignDashboard(client=None)

        assert "No campaigns found." in dashboard.render()

    def test_renders_rows_and_escapes_names(self):
        dashboard = CampaignDashboard(client=None)
        dashboard.campaigns = [campaign(1, "active", name="<b>Launch</b>")]

        html = dashboard.render()

        assert "&lt;b&gt;Launch&lt;/b&gt;" in html
        assert "$100.00" in html
        assert "No campaigns found." not in html


class TestDashboardRoutes:

    @pytest.mark.asyncio
    async def test_get_renders_empty_dashboard(self, http_client):
        response = await http_client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "No campaigns found." in response.text

    @pytest.mark.asyncio
    async def test_post_creates_and_filters(self, http_client):
        response = await http_client.post("/", data=dict(VALID_FORM, filter="active"))

        assert response.status_code == 200
        assert "Spring Sale" in response.text

        hidden = await http_client.get("/", params={"filter": "upcoming"})
        assert "Spring Sale" not in hidden.text
        assert "No campaigns found." in hidden.text

    @pytest.mark.asyncio
    async def test_post_with_missing_field_shows_error(self, http_client):
        response = await http_client.post("/", data=dict(VALID_FORM, name=""))

        assert response.status_code == 400
        assert "All fields are required." in response.text
        assert (await http_client.get("/api/campaigns")).json() == []
