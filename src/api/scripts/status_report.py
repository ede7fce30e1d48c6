#!/usr/bin/env python
"""
Contract status report against a running API:
1. Fetch the dashboard summary
2. Fetch the derived status of every contract
3. Log contracts with rent due and contracts that could not be classified

Exits with status 1 when the API is unreachable or a contract failed to classify.
"""

import os
import sys
import asyncio
import argparse
import logging
import httpx

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Base URL for API calls
BASE_URL = os.environ.get("API_URL", "http://localhost:3001")

PAYMENT_DUE = "PAYMENT_DUE"


async def make_api_call(client, url, params=None):
    """Make an API call and return the response."""
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP error occurred: {e}")
        logger.error(f"Response content: {e.response.text}")
        return {"error": str(e)}
    except httpx.HTTPError as e:
        logger.error(f"An error occurred: {e}")
        return {"error": str(e)}


def _today_params(today):
    return {"today": today} if today else None


async def fetch_dashboard(client, today=None):
    """Step 1: Dashboard summary"""
    logger.info("Step 1: Fetching dashboard summary")
    return await make_api_call(client, f"{BASE_URL}/api/dashboard", _today_params(today))


async def fetch_contract_statuses(client, today=None):
    """Step 2: Status of every contract"""
    logger.info("Step 2: Fetching contract statuses")
    return await make_api_call(
        client, f"{BASE_URL}/api/contract-statuses", _today_params(today))


def build_report(dashboard, statuses, only_due=False):
    """Combine the dashboard summary and contract statuses into one report."""
    failed = [
        {"contract_id": item["contract_id"], "error": item.get("error")}
        for item in statuses if item.get("error")
    ]
    listed = [
        item for item in statuses
        if not only_due or item["status"]["kind"] == PAYMENT_DUE
    ]
    return {
        "today": dashboard["today"],
        "active_contracts": dashboard["active_contracts"],
        "expiring_contracts": dashboard["expiring_contracts"],
        "payment_due_contract_ids": dashboard["payment_due_contract_ids"],
        "failed": failed,
        "statuses": listed,
    }


def log_report(report):
    """Step 3: Log the report"""
    logger.info(
        f"Report for {report['today']}: {report['active_contracts']} active contracts, "
        f"{len(report['expiring_contracts'])} expiring soon, "
        f"{len(report['payment_due_contract_ids'])} with payment due")
    for contract in report["expiring_contracts"]:
        logger.info(
            f"Expiring: {contract['contract_internal_id']} on {contract['end_date']} "
            f"({contract['days_left']} days left)")
    for item in report["statuses"]:
        logger.info(f"Contract {item['contract_id']}: {item['status']['label']}")
    for item in report["failed"]:
        logger.error(f"Contract {item['contract_id']} could not be classified: {item['error']}")


async def main(today=None, only_due=False, transport=None):
    """Fetch, build and log the report. Returns the process exit code."""
    async with httpx.AsyncClient(timeout=60.0, transport=transport) as client:
        dashboard = await fetch_dashboard(client, today)
        statuses = await fetch_contract_statuses(client, today)

    if "error" in dashboard or isinstance(statuses, dict):
        logger.error("Status report aborted: the API could not be queried")
        return 1

    report = build_report(dashboard, statuses, only_due=only_due)
    log_report(report)
    return 1 if report["failed"] else 0

if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Contract status report.")
    parser.add_argument(
        "--today",
        type=str,
        help="Reference date (YYYY-MM-DD); defaults to the server's current date"
    )
    parser.add_argument(
        "--only-due",
        action="store_true",
        help="Only list contracts with payment due"
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(main(today=args.today, only_due=args.only_due)))
