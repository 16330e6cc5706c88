"""
sentibench - local sentiment analysis with per-device inference benchmarks.

Loads a DistilBERT SST-2 ONNX model, classifies text and compares inference
latency across CPU, WebGL-class and WebGPU-class execution backends.
"""

__version__ = "1.0.0"
