"""Fetch and print the ledger reconciliation report."""

import argparse
import json
import sys

import httpx


def main() -> None:
    """CLI entrypoint for reconciliation checks."""

    parser = argparse.ArgumentParser(description="Check payee totals against the payment ledger.")
    parser.add_argument("--api-url", default="http://localhost:8000")
    parser.add_argument("--api-version", default="v1")
    args = parser.parse_args()

    resp = httpx.get(f"{args.api_url}/{args.api_version}/analytics/reconciliation", timeout=10.0)
    resp.raise_for_status()
    report = resp.json()
    print(json.dumps(report, indent=2))

    if report["mismatched"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
