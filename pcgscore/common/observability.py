import logging
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

from pcgscore.common.config import ScoringConfig, Settings

logger = logging.getLogger(__name__)

_LOGFIRE_INITIALIZED = False


def init_logfire(settings: Settings) -> bool:
    """Initialize Logfire tracing of scoring runs if a token is configured.

    Args:
        settings: Application settings containing Logfire configuration

    Returns:
        True if Logfire was initialized successfully, False otherwise

    Negative case:
        Invalid token -> logs error, returns False, does not crash the run
    """
    global _LOGFIRE_INITIALIZED

    if _LOGFIRE_INITIALIZED:
        return True

    if not settings.logfire.is_enabled:
        return False

    try:
        import logfire

        logfire.configure(
            token=settings.logfire.token,
            service_name=settings.logfire.service_name,
            environment=settings.logfire.environment,
        )

        _LOGFIRE_INITIALIZED = True
        logger.info(
            f"Logfire initialized: service={settings.logfire.service_name}, "
            f"environment={settings.logfire.environment}"
        )
        return True
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}")
        return False


def is_logfire_enabled() -> bool:
    return _LOGFIRE_INITIALIZED


def scoring_span(
    source: Path, config: ScoringConfig, run_id: str | None
) -> AbstractContextManager[object]:
    """Span around one scoring run, or a no-op when Logfire is off."""
    if not is_logfire_enabled():
        return nullcontext()

    import logfire

    return logfire.span(
        "competition.score",
        source=str(source),
        num_trials=config.num_trials,
        diversity_enabled=config.diversity_enabled,
        run_id=run_id,
    )
