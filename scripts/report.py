#!/usr/bin/env python
"""Report CLI: create a GDAX report, check its status, or wait until it is ready.

Usage (examples):

python scripts/report.py create --type fills --product-id BTC-USD --start 2017-06-01T00:00:00.000Z --end 2017-06-15T00:00:00.000Z
python scripts/report.py create --type account --account-id <id> --start ... --end ... --format csv
python scripts/report.py get <report_id>
python scripts/report.py wait <report_id> --max-attempts 30
"""
import argparse
import json
import sys
from pathlib import Path as _Path
# Ensure project root is on sys.path so `gdax_api` package is importable when running as a script.
sys.path.insert(0, str(_Path(__file__).resolve().parents[1]))

from gdax_api.client import GDAXClient
from gdax_api.config import ClientConfig
from gdax_api.errors import GDAXError, ValidationError
from gdax_api.logging_setup import setup_logging
from gdax_api.polling import wait_for_report
from gdax_api.secrets import load_credentials


def build_parser():
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", help="Path to YAML client config")
    parser.add_argument("--credentials", help="Path to JSON credentials file")
    parser.add_argument("--sandbox", action="store_true", help="Use the sandbox API")
    sub = parser.add_subparsers(dest="cmd")

    create_p = sub.add_parser("create")
    create_p.add_argument("--type", dest="report_type", choices=["fills", "account"])
    create_p.add_argument("--start", dest="start_date")
    create_p.add_argument("--end", dest="end_date")
    create_p.add_argument("--format", dest="report_format", default="pdf", choices=["pdf", "csv"])
    create_p.add_argument("--product-id")
    create_p.add_argument("--account-id")
    create_p.add_argument("--email")

    get_p = sub.add_parser("get")
    get_p.add_argument("report_id")

    wait_p = sub.add_parser("wait")
    wait_p.add_argument("report_id")
    wait_p.add_argument("--interval", type=float, help="Initial seconds between checks")
    wait_p.add_argument("--max-attempts", type=int, help="Give up after this many checks")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.cmd:
        parser.print_help()
        return 2

    config = ClientConfig.from_yaml(args.config) if args.config else ClientConfig()
    if args.sandbox:
        config.exchange.sandbox = True
    setup_logging(log_file=config.logging.log_file, level=config.logging.log_level)

    try:
        client = GDAXClient.from_config(config, load_credentials(args.credentials))
        if args.cmd == "create":
            report = client.report(
                report_type=args.report_type,
                start_date=args.start_date,
                end_date=args.end_date,
                report_format=args.report_format,
                product_id=args.product_id,
                account_id=args.account_id,
                email=args.email,
            )
            result = report.create()
        elif args.cmd == "get":
            result = client.report().get(args.report_id)
        else:
            result = wait_for_report(
                client.report(),
                args.report_id,
                interval=args.interval or config.polling.interval_seconds,
                max_interval=config.polling.max_interval_seconds,
                max_attempts=args.max_attempts or config.polling.max_attempts,
            )
    except ValidationError as e:
        print(f"Invalid {e.field}: {e.reason}", file=sys.stderr)
        return 2
    except GDAXError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
