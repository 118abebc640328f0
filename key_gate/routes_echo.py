from flask import g, jsonify, request


def register_echo_routes(app):
    @app.route("/v1/echo", methods=["GET", "POST"])
    def echo():
        # Reports what reached the app after the gate.
        return jsonify(
            {
                "method": request.method,
                "path": request.path,
                "credential": g.credential_source,
                "stripped": g.credential_stripped,
                "headers": dict(request.headers),
            }
        )
