from .routes_echo import register_echo_routes
from .routes_health import register_health_routes
from .routes_hooks import register_request_hooks


def register_routes(app):
    register_request_hooks(app)
    register_health_routes(app)
    register_echo_routes(app)
