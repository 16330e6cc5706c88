"""
ONNX Runtime sentiment engine.

Builds a callable text-classification pipeline from a Hugging Face model
repo that ships ONNX weights:
- downloads (or reuses cached) config, tokenizer and ONNX weight files
- creates an InferenceSession with the providers of a BackendConfig
- runs tokenized text through the session and returns softmax scores
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from sentibench.core.message_types import (
    Device,
    LoadingStatus,
    LoadingProgressPayload,
    ProgressCallback,
)
from ..base_backend import BaseSentimentEngine
from .config import BackendConfig, EngineEnvironment, ENGINE_ENV


logger = logging.getLogger(__name__)

SUPPORTED_TASKS = ("sentiment-analysis", "text-classification")

# Files needed besides the ONNX weights
MODEL_SUPPORT_FILES = ("config.json", "tokenizer.json", "tokenizer_config.json")


def _softmax(logits: np.ndarray) -> np.ndarray:
    shifted = logits - np.max(logits)
    exp = np.exp(shifted)
    return exp / exp.sum()


def _emit_progress(
    callback: Optional[ProgressCallback],
    status: LoadingStatus,
    file: str,
    loaded: int,
    total: int,
) -> None:
    """Push a progress event; a failing sink never breaks the load"""
    if callback is None:
        return
    progress = int(loaded * 100 / total) if total else 100
    try:
        callback(LoadingProgressPayload(
            status=status,
            file=file,
            progress=min(progress, 100),
            loaded=loaded,
            total=total,
        ))
    except Exception as e:
        logger.debug(f"Progress callback failed: {e}")


class SentimentPipeline:
    """
    Loaded sentiment model bound to one device.

    Calling the pipeline with a text returns every label with its score,
    highest score first.
    """

    def __init__(
        self,
        session: Any,
        tokenizer: Any,
        id2label: Dict[int, str],
        backend_config: BackendConfig,
        max_length: int = 512,
    ):
        self.session = session
        self.tokenizer = tokenizer
        self.id2label = id2label
        self.backend_config = backend_config
        self.max_length = max_length

    @property
    def device(self) -> Device:
        return self.backend_config.device

    def __call__(self, text: str) -> List[Dict[str, Any]]:
        if self.session is None:
            raise RuntimeError("Pipeline has been disposed")

        inputs = self.tokenizer(
            text,
            return_tensors="np",
            truncation=True,
            max_length=self.max_length,
        )

        ort_inputs = {
            inp.name: inputs[inp.name].astype(np.int64)
            for inp in self.session.get_inputs()
            if inp.name in inputs
        }

        logits = self.session.run(None, ort_inputs)[0][0]
        scores = _softmax(np.asarray(logits, dtype=np.float64))

        results = [
            {"label": self.id2label.get(index, f"LABEL_{index}"), "score": float(score)}
            for index, score in enumerate(scores)
        ]
        results.sort(key=lambda item: item["score"], reverse=True)
        return results

    def dispose(self) -> None:
        """Release the session; ONNX Runtime frees it on garbage collection"""
        self.session = None
        self.tokenizer = None
        logger.info(f"Pipeline disposed ({self.device.value})")


class ONNXSentimentEngine(BaseSentimentEngine):
    """
    Constructs SentimentPipeline instances.

    Model files are fetched through the Hugging Face Hub cache. When the
    model id is a local directory the files are read from it directly.
    """

    def __init__(
        self,
        environment: EngineEnvironment = ENGINE_ENV,
        token: Optional[str] = None,
        max_length: int = 512,
    ):
        self.environment = environment
        self._token = token
        self._max_length = max_length

        # Lazy import ONNX Runtime
        self._onnxruntime = None

    def _ensure_onnxruntime(self):
        """Lazy load ONNX Runtime"""
        if self._onnxruntime is None:
            try:
                import onnxruntime as ort
                self._onnxruntime = ort
                logger.info(f"ONNX Runtime loaded (version: {ort.__version__})")
            except ImportError:
                raise RuntimeError(
                    "ONNX Runtime not installed. "
                    "Install with: pip install onnxruntime"
                )

    @property
    def version(self) -> Optional[str]:
        try:
            self._ensure_onnxruntime()
        except RuntimeError:
            return None
        return self._onnxruntime.__version__

    def _resolve_file(self, model_id: str, filename: str) -> Path:
        local_dir = Path(model_id)
        if local_dir.is_dir():
            path = local_dir / filename
            if not path.exists():
                raise FileNotFoundError(f"Model file not found: {path}")
            return path

        from huggingface_hub import hf_hub_download

        return Path(hf_hub_download(
            repo_id=model_id,
            filename=filename,
            cache_dir=self.environment.cache_dir,
            token=self._token,
            local_files_only=self.environment.allow_local_models,
            force_download=not self.environment.use_cache,
        ))

    def load(
        self,
        task: str,
        model_id: str,
        config: BackendConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> SentimentPipeline:
        """
        Build a pipeline for the configured device.

        Args:
            task: Pipeline task (sentiment-analysis)
            model_id: Hugging Face repo id or local directory
            config: Backend configuration for the target device
            progress_callback: Optional sink for loading progress events

        Returns:
            Ready-to-call SentimentPipeline

        Raises:
            ValueError: If the task is not a text-classification task
            RuntimeError: If ONNX Runtime is not available
        """
        if task not in SUPPORTED_TASKS:
            raise ValueError(f"Unsupported task: {task}")

        files = [*MODEL_SUPPORT_FILES, config.model_file]
        total = len(files)
        paths: Dict[str, Path] = {}

        for index, filename in enumerate(files):
            _emit_progress(progress_callback, LoadingStatus.INITIATE, filename, index, total)
            try:
                paths[filename] = self._resolve_file(model_id, filename)
            except Exception:
                _emit_progress(progress_callback, LoadingStatus.ERROR, filename, index, total)
                raise
            _emit_progress(progress_callback, LoadingStatus.PROGRESS, filename, index + 1, total)

        with open(paths["config.json"], "r", encoding="utf-8") as f:
            model_config = json.load(f)
        id2label = {
            int(key): value
            for key, value in model_config.get("id2label", {}).items()
        }

        from transformers import AutoTokenizer

        tokenizer = AutoTokenizer.from_pretrained(str(paths["tokenizer.json"].parent))

        logger.info(
            f"Loading ONNX model: {model_id} ({config.model_file}) "
            f"with providers: {list(config.providers)}"
        )

        self._ensure_onnxruntime()

        sess_options = self._onnxruntime.SessionOptions()
        sess_options.graph_optimization_level = self._onnxruntime.GraphOptimizationLevel(
            config.optimization_level.value
        )
        sess_options.log_severity_level = config.log_severity_level
        if config.intra_op_num_threads > 0:
            sess_options.intra_op_num_threads = config.intra_op_num_threads
        if config.inter_op_num_threads > 0:
            sess_options.inter_op_num_threads = config.inter_op_num_threads

        session = self._onnxruntime.InferenceSession(
            str(paths[config.model_file]),
            sess_options=sess_options,
            providers=list(config.providers),
        )

        # Log actual providers used
        actual_providers = session.get_providers()
        logger.info(f"Model loaded with providers: {actual_providers}")
        if config.providers and config.providers[0] not in actual_providers:
            logger.warning(
                f"{config.providers[0]} not active for {config.device.value}, "
                f"session runs on {actual_providers}"
            )

        _emit_progress(progress_callback, LoadingStatus.DONE, config.model_file, total, total)

        return SentimentPipeline(
            session=session,
            tokenizer=tokenizer,
            id2label=id2label,
            backend_config=config,
            max_length=self._max_length,
        )
