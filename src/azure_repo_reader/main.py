from __future__ import annotations
import logging
import uvicorn
from azure_repo_reader.infrastructure.config import get_settings

def main() -> None:
    """Configure logging and serve the reader API with uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    # httpx logs every request at INFO, including the derived API URLs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    uvicorn.run(
        "azure_repo_reader.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
