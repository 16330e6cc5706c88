"""
API endpoint tests

Runs every route against a service backed by the fake engine.
"""

from fastapi import status
from fastapi.testclient import TestClient

from sentibench.api.constants import APIPrefix, EndpointPath, ErrorCode
from sentibench.core.message_types import Device


def _url(path: EndpointPath, **params) -> str:
    return f"{APIPrefix.V1.value}{path.value.format(**params)}"


class TestHealthEndpoints:
    """Tests for /health and /stats"""

    def test_health_before_load(self, client: TestClient):
        """Test health reports an idle, unloaded model"""
        # Act
        response = client.get(_url(EndpointPath.HEALTH))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "ok"
        assert data["model_status"] == "IDLE"
        assert data["model_loaded"] is False
        assert data["device"] is None
        assert isinstance(data["uptime"], (int, float))

    def test_stats_after_classify(self, client: TestClient):
        """Test stats count classifications"""
        # Arrange
        client.post(_url(EndpointPath.CLASSIFY), json={"text": "I love it"})

        # Act
        response = client.get(_url(EndpointPath.STATS))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["aggregate"]["total_requests"] == 1

    def test_root_lists_endpoints(self, client: TestClient):
        """Test the root endpoint indexes the API"""
        # Act
        response = client.get("/")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["endpoints"]["classify"] == "/api/v1/classify"


class TestSystemEndpoints:
    """Tests for capabilities, engine info and diagnostics"""

    def test_capabilities(self, client: TestClient):
        """Test capabilities come from the prober"""
        # Act
        response = client.get(_url(EndpointPath.CAPABILITIES))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"webgpu": True, "webgl": True}

    def test_engine_info(self, client: TestClient, config):
        """Test engine info reports the model id"""
        # Act
        response = client.get(_url(EndpointPath.ENGINE_INFO))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["model_id"] == config.model_id

    def test_diagnostics(self, client: TestClient):
        """Test diagnostics return READY with three steps"""
        # Act
        response = client.post(_url(EndpointPath.DIAGNOSTICS))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "READY"
        assert [s["step"] for s in data["steps"]] == ["env", "model", "inference"]

    def test_diagnostics_failure_is_not_http_error(self, client: TestClient, engine):
        """Test a failed load is reported inside the body"""
        # Arrange
        engine.fail_load.add(Device.CPU)

        # Act
        response = client.post(_url(EndpointPath.DIAGNOSTICS))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ERROR"


class TestClassifyEndpoints:
    """Tests for /load and /classify"""

    def test_load(self, client: TestClient):
        """Test loading the default model"""
        # Act
        response = client.post(_url(EndpointPath.LOAD))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "message": "Model loaded successfully",
            "device": "cpu",
        }

    def test_load_failure_returns_500(self, client: TestClient, engine):
        """Test a load failure maps to 500"""
        # Arrange
        engine.fail_load.add(Device.CPU)

        # Act
        response = client.post(_url(EndpointPath.LOAD))

        # Assert
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"]["error"]["type"] == ErrorCode.MODEL_LOAD_FAILED.value

    def test_classify(self, client: TestClient):
        """Test a sentence is classified"""
        # Act
        response = client.post(_url(EndpointPath.CLASSIFY), json={"text": "I simply love this app"})

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"label": "POSITIVE", "score": 0.98}

    def test_blank_classify_returns_400(self, client: TestClient, engine):
        """Test blank input is rejected before the engine"""
        # Act
        response = client.post(_url(EndpointPath.CLASSIFY), json={"text": "   "})

        # Assert
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["error"]["type"] == ErrorCode.INVALID_REQUEST.value
        assert engine.configs == []

    def test_inference_failure_returns_500(self, client: TestClient, engine):
        """Test an inference failure maps to 500"""
        # Arrange
        engine.fail_inference.add(Device.CPU)

        # Act
        response = client.post(_url(EndpointPath.CLASSIFY), json={"text": "hello"})

        # Assert
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"]["error"]["type"] == ErrorCode.INFERENCE_FAILED.value


class TestBenchmarkEndpoints:
    """Tests for /benchmark and /benchmark/{device}"""

    def test_suite(self, client: TestClient):
        """Test the suite returns three ordered results and steps"""
        # Act
        response = client.post(_url(EndpointPath.BENCHMARK))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [r["device"] for r in data["results"]] == ["cpu", "webgl", "webgpu"]
        assert data["results"][0]["speedup"] == 1.0
        assert data["steps"][-1] == "Restoring efficient environment (CPU/quantized)..."

    def test_single_device(self, client: TestClient):
        """Test one device without a body"""
        # Act
        response = client.post(_url(EndpointPath.BENCHMARK_DEVICE, device="webgl"))

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["device"] == "webgl"
        assert data["status"] == "success"

    def test_single_device_with_text(self, client: TestClient, engine):
        """Test a custom text is benchmarked"""
        # Act
        response = client.post(
            _url(EndpointPath.BENCHMARK_DEVICE, device="cpu"),
            json={"text": "custom input"},
        )

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert engine.pipelines[-1].calls == ["custom input", "custom input"]

    def test_unknown_device_returns_422(self, client: TestClient):
        """Test an unknown device fails path validation"""
        # Act
        response = client.post(_url(EndpointPath.BENCHMARK_DEVICE, device="tpu"))

        # Assert
        assert response.status_code == 422


class TestCaseEndpoints:
    """Tests for /test-cases"""

    def test_fallback_cases(self, client: TestClient):
        """Test the fallback list is served when the LLM fails"""
        # Act
        response = client.post(_url(EndpointPath.TEST_CASES), json={"topic": "gadgets", "count": 3})

        # Assert
        assert response.status_code == status.HTTP_200_OK
        cases = response.json()["cases"]
        assert len(cases) == 3
        assert cases[0] == {
            "text": "The service was absolutely terrible and slow.",
            "expectedSentiment": "NEGATIVE",
        }

    def test_count_validated(self, client: TestClient):
        """Test count must be positive"""
        # Act
        response = client.post(_url(EndpointPath.TEST_CASES), json={"count": 0})

        # Assert
        assert response.status_code == 422
