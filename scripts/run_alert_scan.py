"""Run one stock alert scan pass from the shell.

Same pipeline as POST /jobs/check-stock-alerts, including the Redis scan lock.

Usage:
    python scripts/run_alert_scan.py
    python scripts/run_alert_scan.py --dry-run --json
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlmodel import Session

from seedling_prime.infra.database.engine import get_engine
from seedling_prime.infra.finnhub.client import FinnhubClient
from seedling_prime.infra.mail.mailer import SmtpMailer
from seedling_prime.infra.redis.client import get_redis
from seedling_prime.services.alerts.scanner import run_alert_scan

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Evaluate active stock alerts once")
    parser.add_argument("--dry-run", action="store_true", help="evaluate only; send no email, mark nothing")
    parser.add_argument("--json", action="store_true", help="print the scan summary as JSON")
    args = parser.parse_args()

    with FinnhubClient() as finnhub, Session(get_engine()) as session:
        summary = run_alert_scan(session, get_redis(), finnhub, SmtpMailer(), dry_run=args.dry_run)

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        logger.info(summary.message)
        for outcome in summary.results:
            if not outcome.success:
                logger.warning("[%s] alert %s failed: %s", outcome.symbol, outcome.alert_id, outcome.error)

    return 0 if summary.success else 1


if __name__ == "__main__":
    sys.exit(main())
