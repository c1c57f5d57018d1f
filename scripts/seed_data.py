import argparse
import logging

from app.config import get_settings
from app.core.logging import setup_logging
from app.database import DatabaseConnector
from app.services.seed_service import seed_catalog

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Seed the sample product catalog.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing products before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    settings = get_settings()

    connector = DatabaseConnector(settings.DATABASE_URL)
    db = connector.session()
    try:
        created = seed_catalog(db, reset=args.reset)
        print("Seed data created: {} products.".format(len(created)))
    finally:
        db.close()
        connector.disconnect()


if __name__ == "__main__":
    main()
