from typing import Any, Dict, Optional
import time

# Composition root (set by dependencies.build_services)
orchestrator: Any = None  # ExtractionOrchestrator
registry: Any = None  # RegistryStore
authenticator: Any = None  # token -> principal

# Extraction Stats (for monitoring)
extraction_stats: Dict[str, Any] = {
    'total_requests': 0,
    'succeeded': 0,
    'failed': {},
    'last_extraction_time': None,
}

# Metrics
REQUEST_COUNT: Any = None
REQUEST_LATENCY: Any = None
EXTRACTIONS_TOTAL: Any = None


def record_extraction(outcome: str, parts: Optional[int] = None) -> None:
    """Update extraction statistics for monitoring."""
    extraction_stats['total_requests'] = int(extraction_stats.get('total_requests') or 0) + 1
    if outcome == 'success':
        extraction_stats['succeeded'] = int(extraction_stats.get('succeeded') or 0) + 1
        extraction_stats['last_extraction_time'] = time.time()
        if parts is not None:
            extraction_stats['last_parts_extracted'] = parts
    else:
        failed = extraction_stats.setdefault('failed', {})
        failed[outcome] = int(failed.get(outcome) or 0) + 1
    try:
        if EXTRACTIONS_TOTAL:
            EXTRACTIONS_TOTAL.labels(outcome).inc()
    except Exception:
        pass
