#!/usr/bin/env python3
"""
Entry point for the Borga web API.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development, production or testing (default: development)
    PORT: Port to run on (default: 5000)
    LOG_LEVEL: Logging level (default: DEBUG in development, INFO otherwise)
    CATALOG_CLIENT_ID: Client id for the game catalog API
"""
import os
import logging


def run_api():
    """Run the Borga web API."""
    from borga.app import create_app

    app = create_app()
    logging.basicConfig(
        level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    port = int(os.getenv('PORT', 5000))
    debug = app.config.get('DEBUG', False)

    logging.getLogger(__name__).info(f"Starting Borga on port {port}...")
    app.run(host='0.0.0.0', port=port, debug=debug, threaded=True)


if __name__ == '__main__':
    run_api()
