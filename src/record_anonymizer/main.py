"""
Record Anonymizer Server Entry Point

Run with: python -m record_anonymizer.main
Or: uvicorn record_anonymizer.api.routes:app --reload
"""

import os
import sys

import uvicorn

from record_anonymizer import __version__
from record_anonymizer.config.settings import get_settings
from record_anonymizer.logging.setup import get_logger, setup_logging

# Initialize logging early
setup_logging()
logger = get_logger(__name__)


def main():
    """Run the record anonymization server."""
    settings = get_settings()

    validation_errors = settings.validate()
    if validation_errors:
        for error in validation_errors:
            logger.error(error, extra={"event": "config_error"})
        print("\nConfiguration errors detected:", file=sys.stderr)
        for error in validation_errors:
            print(f"  - {error}", file=sys.stderr)
        print("\nPlease fix the above errors and restart.", file=sys.stderr)
        sys.exit(1)

    host = settings.host
    port = int(settings.port)
    reload = os.getenv("ANONYMIZER_RELOAD", "false").lower() == "true"

    banner = f"""
+---------------------------------------------------------------+
|                 Record Anonymizer v{__version__:<22}     |
+---------------------------------------------------------------+
|  Server running at: http://{host}:{port}
|  API Docs: http://{host}:{port}/docs
|  Metrics: http://{host}:{port}/metrics
|  Output directory: {settings.output_dir}
+---------------------------------------------------------------+
    """
    print(banner)

    logger.info(
        "Starting record anonymizer server",
        extra={
            "event": "server_starting",
            "host": host,
            "port": port,
            "version": __version__,
            "output_dir": settings.output_dir,
        },
    )

    uvicorn.run(
        "record_anonymizer.api.routes:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
