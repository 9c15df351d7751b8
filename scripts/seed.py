#!/usr/bin/env python3
"""Seed the employee store from a JSON file.

Run from the repository root:

    python3 scripts/seed.py [--file employees.json] [--dry-run] [--verbose]

Each record goes through the same validation, age derivation and email
uniqueness checks as the API. Without ``--file`` a single sample employee is
inserted. ``--dry-run`` validates the records without touching storage.

Writing requires ``STORAGE_BACKEND=cosmos`` with Cosmos DB credentials; the
script refuses to run against the in-memory store or an unconfigured backend.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from employee_api.core.config import Settings  # noqa: E402
from employee_api.core.errors import EmployeeError, RecordValidationError  # noqa: E402
from employee_api.repositories import build_repository  # noqa: E402
from employee_api.repositories.base import EmployeeRepository  # noqa: E402
from employee_api.services.employee_service import EmployeeService, utcnow  # noqa: E402
from employee_api.services.validator import validate_employee  # noqa: E402

logger = logging.getLogger(__name__)

SAMPLE_EMPLOYEE: dict[str, Any] = {
    "name": "Nguyen Van A",
    "email": "nguyenvana@example.com",
    "position": "Staff",
    "department": "Engineering",
    "salary": 1500,
    "gender": "Male",
    "dateOfBirth": "2004-05-20",
    "phone": "0901234567",
}


def load_records(path: Path | None) -> list[dict[str, Any]]:
    if path is None:
        return [dict(SAMPLE_EMPLOYEE)]

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path} must contain a JSON object or an array of objects")
    return data


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed employee records into the configured store")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="JSON file holding an employee object or an array of them (default: one sample employee)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate records without writing them",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def seed_records(
    records: list[dict[str, Any]],
    repository: EmployeeRepository,
    *,
    dry_run: bool = False,
) -> tuple[int, int]:
    """Insert ``records`` one by one; returns (succeeded, failed)."""
    service = EmployeeService(repository)
    succeeded = 0
    failed = 0

    for index, record in enumerate(records, start=1):
        try:
            if dry_run:
                result = validate_employee(record, today=utcnow().date())
                if not result.ok:
                    raise RecordValidationError(result.errors)
                logger.info("[%d/%d] %s is valid", index, len(records), record.get("email"))
            else:
                employee = await service.create_employee(record)
                logger.info("[%d/%d] Created %s (id=%s)", index, len(records), employee.email, employee.id)
            succeeded += 1
        except EmployeeError as e:
            logger.error("[%d/%d] Skipped %s: %s", index, len(records), record.get("email"), e.message)
            failed += 1

    return succeeded, failed


async def seed(args: argparse.Namespace) -> tuple[int, int]:
    settings = Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    records = load_records(args.file)
    logger.info("Loaded %d employee record(s)", len(records))

    repository = build_repository(settings)
    if not args.dry_run:
        if repository.name == "memory":
            logger.error("STORAGE_BACKEND is \"memory\"; records would be lost when the script exits. Aborting.")
            return 0, len(records)

        logger.info("Connecting to %s storage...", repository.name)
        await repository.initialize(settings)
        if not repository.initialized:
            logger.error("%s storage is not configured. Aborting.", repository.name)
            await repository.close()
            return 0, len(records)

    try:
        succeeded, failed = await seed_records(records, repository, dry_run=args.dry_run)
    finally:
        await repository.close()

    logger.info("=" * 50)
    logger.info("Seeding complete!")
    logger.info("Total succeeded: %d", succeeded)
    logger.info("Total failed: %d", failed)
    if args.dry_run:
        logger.info("[DRY RUN] No records were written.")
    return succeeded, failed


def main() -> None:
    args = parse_args()
    _, failed = asyncio.run(seed(args))
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
