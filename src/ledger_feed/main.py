import uvicorn

from ledger_feed.app import app
from ledger_feed.logger import get_logging_config

__all__ = ["app", "run"]


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=get_logging_config())


if __name__ == "__main__":
    run()
