"""
Model Loader

Owns the single live sentiment pipeline and the device it is bound to.
Switching devices (or forcing a reload) disposes the old pipeline before
the new one is constructed.
"""

import asyncio
import logging
from typing import Any, Optional

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.exceptions import ModelLoadError
from sentibench.core.message_types import Device, ProgressCallback
from sentibench.backends.base_backend import BaseSentimentEngine
from sentibench.backends.onnxrt.config import BackendConfig, BackendConfigurator

logger = logging.getLogger(__name__)


class ModelLoader:
    """
    Single-slot model owner.

    At most one pipeline is live at a time. The check-and-load in load()
    and get_instance() runs under an asyncio.Lock so concurrent callers
    cannot race disposal against construction. Holding the slot across a
    load and the calls that use it is the caller's job (SentimentService).
    """

    def __init__(
        self,
        engine: BaseSentimentEngine,
        configurator: Optional[BackendConfigurator] = None,
        config: SentimentBenchConfig = SENTIMENT_CONFIG,
    ):
        self._engine = engine
        self._configurator = configurator or BackendConfigurator(config)
        self._task = config.task
        self._model_id = config.model_id

        self._instance: Optional[Any] = None
        self._device: Optional[Device] = None
        self._backend_config: Optional[BackendConfig] = None
        self._lock = asyncio.Lock()

    @property
    def device(self) -> Optional[Device]:
        """Device the live pipeline is bound to, None when nothing is loaded"""
        return self._device

    @property
    def backend_config(self) -> Optional[BackendConfig]:
        return self._backend_config

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def engine(self) -> BaseSentimentEngine:
        return self._engine

    def is_model_loaded(self) -> bool:
        return self._instance is not None

    async def load(
        self,
        device: Device = Device.CPU,
        force: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Any:
        """
        Return a pipeline bound to the requested device.

        Args:
            device: Target device
            force: Rebuild even when the live pipeline is already bound to device
            progress_callback: Optional sink for loading progress events

        Returns:
            The live pipeline

        Raises:
            ModelLoadError: If construction fails (bound device left cleared)
        """
        device = Device.parse(device)

        async with self._lock:
            return await self._load_locked(device, force, progress_callback)

    async def _load_locked(
        self,
        device: Device,
        force: bool,
        progress_callback: Optional[ProgressCallback],
    ) -> Any:
        """Body of load(); caller holds self._lock"""
        if self._instance is not None and self._device == device and not force:
            return self._instance

        self._release()

        backend_config = self._configurator.configure(device)
        logger.info(
            f"Loading {self._model_id} for {device.value} "
            f"({backend_config.dtype}{', forced' if force else ''})"
        )

        try:
            instance = await asyncio.to_thread(
                self._engine.load,
                self._task,
                self._model_id,
                backend_config,
                progress_callback,
            )
        except Exception as e:
            logger.error(f"Model load failed for {device.value}: {e}", exc_info=True)
            raise ModelLoadError(
                f"Failed to load model for {device.value}: {e}", device=device
            ) from e

        self._instance = instance
        self._device = device
        self._backend_config = backend_config
        logger.info(f"Model ready on {device.value}")
        return instance

    async def get_instance(self) -> Any:
        """Live pipeline, loading the CPU default when nothing is bound"""
        async with self._lock:
            if self._instance is None:
                return await self._load_locked(Device.CPU, False, None)
            return self._instance

    def _release(self) -> None:
        """Dispose the live pipeline (if any) and clear ownership"""
        instance = self._instance
        previous = self._device

        self._instance = None
        self._device = None
        self._backend_config = None

        if instance is None:
            return

        dispose = getattr(instance, "dispose", None)
        if callable(dispose):
            try:
                dispose()
            except Exception as e:
                logger.warning(f"Error disposing pipeline for {previous.value if previous else '?'}: {e}")
        logger.info(f"Released pipeline ({previous.value if previous else 'unbound'})")

    def dispose(self) -> None:
        """Release the live pipeline"""
        self._release()
