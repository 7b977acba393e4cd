"""
/generate and catalogue endpoints through the FastAPI app
"""
import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from adcraft_engine.main import app, rate_limit_exceeded_handler
from adcraft_engine.routers.generate import get_dispatcher

from tests.conftest import (
    BRAND_INPUTS,
    LANDING_PAGE_OUTPUT,
    GENERIC_OUTPUT,
    make_client,
    json_response,
    text_response,
    image_response,
    image_part,
    text_part,
)


class TestGenerateEndpoint:
    """POST /generate"""

    @pytest.fixture(autouse=True)
    def setup(self, dispatcher_for):
        self.client = TestClient(app)
        self.dispatcher_for = dispatcher_for
        yield
        app.dependency_overrides.clear()

    def use_provider(self, *responses):
        gemini = make_client(*responses)
        dispatcher = self.dispatcher_for(gemini)
        app.dependency_overrides[get_dispatcher] = lambda: dispatcher
        return gemini

    def test_landing_page(self):
        self.use_provider(json_response(LANDING_PAGE_OUTPUT))

        response = self.client.post("/generate", json={
            "toolType": "landing_page",
            "inputs": BRAND_INPUTS,
            "uid": "user-123",
        })

        assert response.status_code == 200
        output = response.json()["output"]
        for field in ("heroHeadline", "problemDescription", "solutionDescription", "ctaText"):
            assert output[field]

    @pytest.mark.parametrize("body_uid", [{}, {"uid": ""}])
    def test_missing_uid_returns_401(self, body_uid):
        gemini = self.use_provider(json_response(GENERIC_OUTPUT))

        response = self.client.post("/generate", json={
            "toolType": "facebook_ads",
            "inputs": BRAND_INPUTS,
            **body_uid,
        })

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        gemini.aio.models.generate_content.assert_not_awaited()

    def test_malformed_json_is_surfaced(self):
        self.use_provider(text_response("{not valid"))

        response = self.client.post("/generate", json={
            "toolType": "newsletter",
            "inputs": BRAND_INPUTS,
            "uid": "user-123",
        })

        assert response.status_code == 500
        body = response.json()
        assert set(body) == {"error"}
        assert "malformed JSON" in body["error"]

    def test_logo_scenario(self):
        self.use_provider(image_response(image_part(), text_part("Navy bean mark")))

        response = self.client.post("/generate", json={
            "toolType": "logo_generator",
            "inputs": {"businessName": "Acme", "logoStyle": "minimalist", "logoColors": "Navy & Gold"},
            "uid": "user-123",
        })

        assert response.status_code == 200
        output = response.json()["output"]
        assert output["image"].startswith("data:image/png;base64,")
        assert output["description"] == "Navy bean mark"

    def test_logo_with_nothing_generated_is_an_error(self):
        self.use_provider(image_response())

        response = self.client.post("/generate", json={
            "toolType": "logo_generator",
            "inputs": {"businessName": "Acme", "logoStyle": "minimalist"},
            "uid": "user-123",
        })

        assert response.status_code == 500
        assert "No content generated" in response.json()["error"]

    def test_provider_exception_becomes_500(self):
        gemini = self.use_provider(json_response(GENERIC_OUTPUT))
        gemini.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")

        response = self.client.post("/generate", json={
            "toolType": "google_ads",
            "inputs": BRAND_INPUTS,
            "uid": "user-123",
        })

        assert response.status_code == 500
        assert response.json() == {"error": "quota exceeded"}

    def test_invalid_body_uses_error_shape(self):
        response = self.client.post("/generate", json={"inputs": BRAND_INPUTS, "uid": "user-123"})

        assert response.status_code == 500
        assert "toolType" in response.json()["error"]

    def test_invalid_aspect_ratio_rejected(self):
        response = self.client.post("/generate", json={
            "toolType": "image_generator",
            "inputs": {**BRAND_INPUTS, "aspectRatio": "2:1"},
            "uid": "user-123",
        })

        assert response.status_code == 500
        assert "aspectRatio" in response.json()["error"]

    @pytest.mark.parametrize("body", [
        {"toolType": "image_generator", "inputs": {"businessName": "Acme", "aspectRatio": "2:1"}},
        {"uid": ""},
        {"uid": "   ", "inputs": BRAND_INPUTS},
        {"toolType": "newsletter", "inputs": "not an object", "uid": 42},
        ["newsletter"],
    ])
    def test_invalid_body_without_uid_returns_401(self, body):
        gemini = self.use_provider(json_response(GENERIC_OUTPUT))

        response = self.client.post("/generate", json=body)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        gemini.aio.models.generate_content.assert_not_awaited()

    def test_unparseable_body_returns_401(self):
        response = self.client.post(
            "/generate",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


class TestRateLimit:
    """slowapi throttling on the generation surface"""

    def test_handler_registered(self):
        assert app.exception_handlers[RateLimitExceeded] is rate_limit_exceeded_handler

    def test_exceeding_the_limit_returns_500(self):
        limiter = Limiter(key_func=get_remote_address)
        limited_app = FastAPI()
        limited_app.state.limiter = limiter
        limited_app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

        @limited_app.post("/generate")
        @limiter.limit("2/minute")
        async def limited_generate(request: Request):
            return {"output": GENERIC_OUTPUT}

        client = TestClient(limited_app)
        statuses = [client.post("/generate").status_code for _ in range(2)]
        response = client.post("/generate")

        assert statuses == [200, 200]
        assert response.status_code == 500
        assert response.json() == {"error": "Rate limit exceeded: 2 per 1 minute"}


class TestServiceEndpoints:

    def setup_method(self):
        self.client = TestClient(app)

    def test_tools_catalogue(self):
        response = self.client.get("/tools")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert len(data["tools"]) == 14
        image_tools = {t["id"] for t in data["tools"] if t["kind"] == "image"}
        assert image_tools == {"logo_generator", "image_generator"}
        assert "1:1" in data["aspect_ratios"]
        assert "Professional" in data["tone_options"]

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ("healthy", "degraded")
        assert "gemini_api" in data["checks"]
