"""
Unit tests for startup diagnostics
"""

import pytest

from sentibench.core.message_types import Device, ModelStatus, StepStatus
from sentibench.services.diagnostics import run_diagnostics


class TestDiagnostics:
    """Tests for run_diagnostics"""

    @pytest.mark.asyncio
    async def test_all_steps_succeed(self, loader, runner, prober, config, engine):
        """Test env, model and inference steps on a healthy engine"""
        # Act
        report = await run_diagnostics(loader, runner, prober, config)

        # Assert
        assert report.status == ModelStatus.READY
        assert [s.step for s in report.steps] == ["env", "model", "inference"]
        assert all(s.status == StepStatus.SUCCESS for s in report.steps)
        assert engine.pipelines[0].calls == [config.diagnostic_text]
        assert loader.device == Device.CPU

    @pytest.mark.asyncio
    async def test_load_failure_reported_as_step(self, loader, runner, prober, config, engine):
        """Test a failed load ends with an error step instead of raising"""
        # Arrange
        engine.fail_load.add(Device.CPU)

        # Act
        report = await run_diagnostics(loader, runner, prober, config)

        # Assert
        assert report.status == ModelStatus.ERROR
        assert [s.step for s in report.steps] == ["env", "error"]
        assert report.steps[-1].status == StepStatus.ERROR

    @pytest.mark.asyncio
    async def test_inference_failure_reported_as_step(self, loader, runner, prober, config, engine):
        """Test a failed warm-up ends with an error step"""
        # Arrange
        engine.fail_inference.add(Device.CPU)

        # Act
        report = await run_diagnostics(loader, runner, prober, config)

        # Assert
        assert report.status == ModelStatus.ERROR
        assert [s.step for s in report.steps] == ["env", "model", "error"]

    @pytest.mark.asyncio
    async def test_progress_forwarded(self, loader, runner, prober, config):
        """Test loading progress reaches the callback"""
        # Arrange
        events = []

        # Act
        await run_diagnostics(loader, runner, prober, config, progress_callback=events.append)

        # Assert
        assert events
