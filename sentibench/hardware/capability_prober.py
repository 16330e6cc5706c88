"""
GPU capability detection for sentibench.

Answers whether the host exposes the two GPU acceleration paths the
benchmark compares against CPU:
- WebGPU-class compute (ONNX Runtime WebGPU execution provider)
- WebGL-class graphics-API compute (ONNX Runtime DirectML execution provider)

Both checks go through ONNX Runtime's available providers. A failing
probe is never an error: it simply reports the path as unsupported.
"""

import logging
import platform
from typing import Callable, Dict, List, Optional

import psutil

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.message_types import Capabilities, Device


logger = logging.getLogger(__name__)


def query_onnx_providers() -> List[str]:
    """Return ONNX Runtime's available execution providers"""
    import onnxruntime as ort
    return list(ort.get_available_providers())


def onnx_runtime_version() -> Optional[str]:
    """ONNX Runtime version, or None when it is not installed"""
    try:
        import onnxruntime as ort
        return ort.__version__
    except ImportError:
        return None


class CapabilityProber:
    """
    Detects which GPU devices can be benchmarked.

    Results are cached per prober instance; create a new prober to
    re-detect after drivers change.
    """

    def __init__(
        self,
        config: SentimentBenchConfig = SENTIMENT_CONFIG,
        providers_fn: Callable[[], List[str]] = query_onnx_providers,
    ):
        self._config = config
        self._providers_fn = providers_fn
        self._cache: Dict[Device, bool] = {}

    def _has_provider_for(self, device: Device) -> bool:
        if device in self._cache:
            return self._cache[device]

        wanted = self._config.device_providers.get(device.value, [])
        try:
            available = set(self._providers_fn())
            supported = bool(wanted) and wanted[0] in available
            if supported:
                logger.info(f"{device.value} acceleration available ({wanted[0]})")
        except ImportError:
            logger.debug(f"ONNX Runtime not installed, {device.value} not available")
            supported = False
        except Exception as e:
            logger.warning(f"{device.value} detection error: {e}")
            supported = False

        self._cache[device] = supported
        return supported

    def supports_webgpu(self) -> bool:
        """
        Check if the WebGPU path is available.

        Returns:
            True if the WebGPU execution provider is available
        """
        return self._has_provider_for(Device.WEBGPU)

    def supports_webgl(self) -> bool:
        """
        Check if the WebGL-class graphics path is available.

        Returns:
            True if the graphics-API execution provider is available
        """
        return self._has_provider_for(Device.WEBGL)

    def supports(self, device: Device) -> bool:
        """CPU is always supported; GPU devices are probed"""
        if device == Device.WEBGPU:
            return self.supports_webgpu()
        if device == Device.WEBGL:
            return self.supports_webgl()
        return True

    def probe(self) -> Capabilities:
        """Both GPU checks in one call"""
        return Capabilities(
            webgpu=self.supports_webgpu(),
            webgl=self.supports_webgl(),
        )

    def environment_info(self) -> Dict[str, object]:
        """
        Host details reported by the diagnostics environment step.

        Returns:
            Dictionary with core/thread counts, platform and engine version
        """
        return {
            "cores": psutil.cpu_count(logical=False) or 0,
            "threads": psutil.cpu_count(logical=True) or 0,
            "platform": platform.system(),
            "onnxruntime": onnx_runtime_version(),
        }
