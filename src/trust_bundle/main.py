"""
Application entry point — wires dependencies and renders the manifests.

Composition root: creates the disk adapters and the asset store, then runs
the pipeline for the target assets inside a LoggingExecutionContext.

This is the ONLY place where concrete adapters are instantiated.

Responsibilities:
  1. Load and validate configuration from environment
  2. Configure structlog for structured logging
  3. Create the file fetcher, writer and asset store
  4. Run the pipeline and map its Result to a process exit code
"""

from __future__ import annotations

import logging
import sys

import structlog
from railway import LoggingExecutionContext
from railway.result import Result

from trust_bundle import __version__
from trust_bundle.adapters.filesystem import DiskFileFetcher, DiskFileWriter
from trust_bundle.assets import AdditionalTrustBundleConfig
from trust_bundle.config import AppSettings
from trust_bundle.domain.ports import Asset
from trust_bundle.pipeline import AssetStore, run_pipeline


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured, human-readable console logging.

    Unknown level names fall back to INFO. The stdlib root logger is set to
    the same level so railway's execution logging follows it.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def default_targets() -> list[Asset]:
    """Assets rendered by a plain invocation."""
    return [AdditionalTrustBundleConfig()]


def generate(settings: AppSettings, targets: list[Asset] | None = None) -> Result[int]:
    """Render `targets` (default: default_targets()) using the directories in `settings`."""
    store = AssetStore(DiskFileFetcher(settings.install_dir))
    writer = DiskFileWriter(settings.get_output_dir())
    ctx = LoggingExecutionContext(operation="GenerateManifests")
    return ctx.execute(
        lambda: run_pipeline(store, targets if targets is not None else default_targets(), writer)
    )


def main() -> None:
    """Load settings, render the manifests and exit non-zero on failure."""
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        install_dir=str(settings.install_dir),
        output_dir=str(settings.get_output_dir()),
    )

    result = generate(settings)
    if result.is_failure():
        failure = result.error()
        log.error("app.generation_failed", code=failure.code.value, error=failure.message)
        sys.exit(1)

    log.info("app.completed", files_written=result.value())


if __name__ == "__main__":
    main()
