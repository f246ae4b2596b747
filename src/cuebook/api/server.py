from __future__ import annotations

import uvicorn

from cuebook.infrastructure.config import load_server_settings


def main() -> None:
    settings = load_server_settings()
    # Logging is configured by the app itself; keep uvicorn from replacing it.
    uvicorn.run(
        "cuebook.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
