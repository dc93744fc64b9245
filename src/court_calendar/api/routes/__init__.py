from court_calendar.api.routes.court_reports import court_reports_bp
from court_calendar.api.routes.registry import registry_bp
from court_calendar.api.routes.monitoring import monitoring_bp

__all__ = ['court_reports_bp', 'registry_bp', 'monitoring_bp']
