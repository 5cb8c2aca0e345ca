# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from dashlens.container import Container
from dashlens.shared.logging import logger, setup_logging
from dashlens.shared.middleware.error_handler import configure_error_handling
from dashlens.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging(config.log_level, debug_mode=config.debug_logging, log_file=config.log_file)
    container.migrate()

    app = Flask(__name__)
    app.extensions["dashlens"] = container
    configure_error_handling(app)
    configure_request_logging(app)

    app.register_blueprint(container.commands_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def main() -> None:
    container = Container()
    app = create_app(container)
    bridge = container.config.bridge
    logger.info(f"bridge: listening on {bridge.host}:{bridge.port}")
    try:
        app.run(host=bridge.host, port=bridge.port, debug=False, use_reloader=False)
    finally:
        container.database.dispose()


if __name__ == "__main__":
    main()
