#!/usr/bin/env python3
"""
NetProphet odds demo CLI.

Usage:
    python main.py predict --fixtures fixtures.yaml
    python main.py check --fixtures fixtures.yaml
    python main.py backtest --fixtures results.yaml
"""

import sys
import logging
import argparse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("netprophet")


def _engine_config(args):
    from netprophet.core.config import DEFAULT_CONFIG
    from netprophet.utils.config import load_config

    return load_config(args.config) if args.config else DEFAULT_CONFIG


def cmd_predict(args):
    from netprophet.ingestion.fixtures import load_fixtures
    from netprophet.pipeline import predict_fixtures
    from netprophet.reporting.report import format_prediction_card

    results = predict_fixtures(load_fixtures(args.fixtures), _engine_config(args))
    failed = 0
    for entry in results:
        if "error" in entry:
            failed += 1
            log.error(f"Fixture {entry['fixture_id']}: {entry['error']}")
            continue
        fx = entry["fixture"]
        print(format_prediction_card(
            fx.player_a, fx.player_b, fx.context, entry["result"], fx.fixture_id,
        ))
    if failed:
        sys.exit(1)


def cmd_check(args):
    from netprophet.ingestion.fixtures import build_fixture, fixture_key, load_fixtures
    from netprophet.ingestion.validator import FixtureValidator

    fixtures = []
    failed = 0
    for i, raw in enumerate(load_fixtures(args.fixtures)):
        try:
            fixtures.append(build_fixture(raw, default_id=fixture_key(raw, i)))
        except ValueError as e:
            failed += 1
            log.error(f"Fixture {fixture_key(raw, i)}: {e}")
    report = FixtureValidator().validate(fixtures)
    log.info(f"Checked {len(fixtures)} fixtures ({failed} unreadable): {report['stats']}")
    if failed or not report["is_clean"]:
        sys.exit(1)


def cmd_backtest(args):
    from netprophet.evaluation.metrics import evaluate_predictions
    from netprophet.ingestion.fixtures import fixture_key, load_fixtures
    from netprophet.pipeline import predict_fixtures
    from netprophet.reporting.report import format_backtest_summary

    raw = load_fixtures(args.fixtures)
    winners = {
        fixture_key(r, i): r.get("winner") for i, r in enumerate(raw) if isinstance(r, dict)
    }
    priced = [e for e in predict_fixtures(raw, _engine_config(args)) if "result" in e]
    scored = [e for e in priced if str(winners.get(e["fixture_id"])).upper() in ("A", "B")]
    if not scored:
        log.error("No priced fixtures carry a 'winner: A|B' field")
        sys.exit(1)

    report = evaluate_predictions(
        [e["result"] for e in scored],
        [str(winners[e["fixture_id"]]).upper() == "A" for e in scored],
    )
    print(format_backtest_summary(report))


def main(argv=None):
    p = argparse.ArgumentParser(description="NetProphet odds demo CLI")
    p.add_argument("--config", default=None, help="YAML calibration file")
    sub = p.add_subparsers(dest="command")

    for name in ("predict", "check", "backtest"):
        cmd = sub.add_parser(name)
        cmd.add_argument("--fixtures", required=True)

    args = p.parse_args(argv)
    if args.command == "predict":
        cmd_predict(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "backtest":
        cmd_backtest(args)
    else:
        p.print_help()


if __name__ == "__main__":
    main()
