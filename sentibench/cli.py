"""
Command-line interface for sentibench.

Provides:
- System information and GPU capabilities
- One-off sentiment classification
- CPU / WebGL / WebGPU benchmarks
- Startup diagnostics
- LLM-generated test sentences
- The HTTP server
"""

import sys
import argparse
import asyncio
import logging
import json
from typing import List, Optional
from enum import Enum

from sentibench import __version__
from sentibench.config import LOG_FORMAT, SENTIMENT_CONFIG
from sentibench.core.exceptions import InferenceError, ModelLoadError
from sentibench.core.message_types import BenchmarkResult, Device, ModelStatus, StepStatus
from sentibench.core.secrets import get_secrets
from sentibench.services.sentiment_service import SentimentService


class ExitCode(int, Enum):
    """CLI exit codes"""
    SUCCESS = 0
    ERROR = 1
    INVALID_ARGS = 2


class OutputFormat(str, Enum):
    """Output format options"""
    TEXT = "text"
    JSON = "json"


def setup_logging(verbose: int) -> None:
    """
    Setup logging based on verbosity level.

    Args:
        verbose: Verbosity count (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(level=level, format=LOG_FORMAT)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def _print_benchmark_table(results: List[BenchmarkResult]) -> None:
    print(f"{'Device':<10}{'Time (ms)':>12}  {'Speedup':<12}Status")
    for r in results:
        time_str = f"{r.time:.2f}" if r.ok else "-"
        status = r.status.value if r.error is None else f"{r.status.value} ({r.error})"
        print(f"{r.device.value.upper():<10}{time_str:>12}  {r.speedup_label():<12}{status}")


def cmd_info(args, service: SentimentService) -> int:
    """
    Display environment, capabilities and engine information.

    Args:
        args: Parsed command arguments
        service: Sentiment service

    Returns:
        Exit code
    """
    env = service.prober.environment_info()
    caps = service.probe_capabilities()
    engine = service.engine_info()
    gemini_ready = get_secrets().has_gemini_key()

    if args.format == OutputFormat.JSON.value:
        _print_json({
            "version": __version__,
            "environment": env,
            "capabilities": caps.model_dump(),
            "engine": engine.model_dump(mode="json"),
            "gemini_key_configured": gemini_ready,
        })
        return ExitCode.SUCCESS.value

    print("=" * 50)
    print(f"sentibench {__version__}")
    print("=" * 50)
    print(f"Platform: {env.get('platform')}")
    print(f"CPU: {env.get('cores')} cores / {env.get('threads')} threads")
    print(f"ONNX Runtime: {env.get('onnxruntime') or 'not installed'}")
    print(f"Model: {engine.model_id}")
    print(f"Gemini API key: {'configured' if gemini_ready else 'not set (fallback test cases)'}")
    print()
    print("GPU Acceleration:")
    for name, available in (("WebGPU", caps.webgpu), ("WebGL", caps.webgl)):
        status = "✓ Available" if available else "✗ Not available"
        print(f"  {name}: {status}")
    return ExitCode.SUCCESS.value


async def _classify(service: SentimentService, text: str):
    await service.load_default()
    return await service.classify(text)


def cmd_classify(args, service: SentimentService) -> int:
    """Classify one sentence with the CPU model"""
    text = " ".join(args.text)
    if not text.strip():
        print("Error: text must not be empty", file=sys.stderr)
        return ExitCode.INVALID_ARGS.value

    result = asyncio.run(_classify(service, text))

    if args.format == OutputFormat.JSON.value:
        _print_json({"result": result.model_dump(), "stats": service.get_stats()})
    else:
        latency = service.get_stats()["last"].get("elapsed_ms")
        latency_str = f" in {latency:.2f} ms" if latency is not None else ""
        print(f"{result.label} ({result.score:.2%}){latency_str}")
    return ExitCode.SUCCESS.value


def cmd_benchmark(args, service: SentimentService) -> int:
    """Benchmark all devices, or one with --device"""
    on_step = None if args.format == OutputFormat.JSON.value else print

    if args.device:
        results = [asyncio.run(service.run_benchmark(Device(args.device)))]
    else:
        results = asyncio.run(service.run_benchmark_suite(on_step=on_step))

    if args.format == OutputFormat.JSON.value:
        _print_json([r.model_dump(mode="json") for r in results])
    else:
        print()
        _print_benchmark_table(results)
    return ExitCode.SUCCESS.value


def cmd_diagnose(args, service: SentimentService) -> int:
    """Run environment, load and warm-up checks"""
    report = asyncio.run(service.run_diagnostics())

    if args.format == OutputFormat.JSON.value:
        _print_json(report.model_dump(mode="json"))
    else:
        for step in report.steps:
            marker = "✓" if step.status == StepStatus.SUCCESS else "✗"
            duration = f" ({step.duration:.1f} ms)" if step.duration is not None else ""
            print(f"{marker} [{step.step}] {step.message}{duration}")
        print(f"Status: {report.status.value}")

    if report.status == ModelStatus.ERROR:
        return ExitCode.ERROR.value
    return ExitCode.SUCCESS.value


def cmd_generate(args, service: SentimentService) -> int:
    """Generate test sentences with Gemini (fallback list without a key)"""
    cases = asyncio.run(service.generate_test_cases(args.topic, args.count))

    if args.format == OutputFormat.JSON.value:
        _print_json([c.model_dump(mode="json") for c in cases])
    else:
        for case in cases:
            print(f"[{case.expectedSentiment.value}] {case.text}")
    return ExitCode.SUCCESS.value


def cmd_serve(args) -> int:
    """Run the HTTP API with uvicorn"""
    import uvicorn

    uvicorn.run(
        "sentibench.api.main:app",
        host=args.host,
        port=args.port,
        log_level="debug" if args.verbose > 1 else "info",
    )
    return ExitCode.SUCCESS.value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sentibench",
        description="Sentiment analysis benchmark CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s info                         # Show environment and GPU support
  %(prog)s classify "I love this!"      # Classify a sentence
  %(prog)s benchmark                    # CPU vs WebGL vs WebGPU
  %(prog)s benchmark --device webgpu    # Single device
  %(prog)s --format json diagnose       # Diagnostics as JSON
        """
    )

    # Global options
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (can be repeated: -v, -vv)'
    )
    parser.add_argument(
        '--format',
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help='Output format'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('info', help='Show environment and GPU capabilities')

    classify_parser = subparsers.add_parser('classify', help='Classify a sentence')
    classify_parser.add_argument('text', nargs='+', help='Text to classify')

    bench_parser = subparsers.add_parser('benchmark', help='Run latency benchmarks')
    bench_parser.add_argument(
        '--device',
        choices=[d.value for d in Device],
        help='Benchmark a single device instead of the full suite'
    )

    subparsers.add_parser('diagnose', help='Run startup diagnostics')

    gen_parser = subparsers.add_parser('generate', help='Generate test sentences')
    gen_parser.add_argument('--topic', default=SENTIMENT_CONFIG.generator_topic, help='Sentence topic')
    gen_parser.add_argument('--count', type=int, default=SENTIMENT_CONFIG.generator_count, help='Number of sentences')

    serve_parser = subparsers.add_parser('serve', help='Start the HTTP API server')
    serve_parser.add_argument('--host', default=SENTIMENT_CONFIG.server_host)
    serve_parser.add_argument('--port', type=int, default=SENTIMENT_CONFIG.server_port)

    return parser


COMMANDS = {
    'info': cmd_info,
    'classify': cmd_classify,
    'benchmark': cmd_benchmark,
    'diagnose': cmd_diagnose,
    'generate': cmd_generate,
}


def main(argv: Optional[List[str]] = None, service: Optional[SentimentService] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Arguments (defaults to sys.argv)
        service: Pre-built service, mainly for tests

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return ExitCode.SUCCESS.value

    if args.command == 'serve':
        return cmd_serve(args)

    handler = COMMANDS.get(args.command)
    if handler is None:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return ExitCode.INVALID_ARGS.value

    service = service or SentimentService()
    try:
        return handler(args, service)
    except (ModelLoadError, InferenceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR.value
    finally:
        service.shutdown()


if __name__ == '__main__':
    sys.exit(main())
