from flask import current_app, jsonify


def register_health_routes(app):
    @app.get("/v1/health")
    def health():
        settings = current_app.extensions["key_gate"].settings
        return jsonify(
            {
                "status": "ok",
                "headerCredential": settings.use_header_credential,
                "bearerCredential": settings.use_bearer_credential,
                "removeHeadersOnSuccess": settings.strip_header_on_success,
            }
        )
