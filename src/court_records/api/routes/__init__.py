from court_records.api.routes.parse import parse_bp
from court_records.api.routes.tracking import tracking_bp
from court_records.api.routes.monitoring import monitoring_bp

__all__ = ['parse_bp', 'tracking_bp', 'monitoring_bp']
