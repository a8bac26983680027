import argparse
import logging

import uvicorn

from .api import create_app
from .config import STORAGE_BACKENDS, AppConfig, DbConfig


def main(argv=None) -> None:
    base = AppConfig.from_env()

    parser = argparse.ArgumentParser(prog="cruddemo", description="Run the cruddemo REST service")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--db-url", default=base.db.url, help="SQLAlchemy database URL")
    parser.add_argument("--storage", choices=STORAGE_BACKENDS, default=base.storage)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = AppConfig(
        db=DbConfig(url=args.db_url),
        storage=args.storage,
        api_prefix=base.api_prefix,
        reject_unknown_patch_fields=base.reject_unknown_patch_fields,
        coach=base.coach,
        another_coach=base.another_coach,
    )
    uvicorn.run(create_app(config), host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
