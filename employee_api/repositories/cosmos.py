"""Cosmos DB employee store."""

from __future__ import annotations

import logging
from typing import Any

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient
from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from employee_api.core.config import Settings
from employee_api.core.errors import DuplicateEmailError, StorageError
from employee_api.repositories.base import EmployeeRepository
from employee_api.services.query_builder import Predicate

logger = logging.getLogger(__name__)

# Cosmos enforces unique keys per logical partition, so every employee lives in
# one partition to make the email constraint global.
PARTITION_KEY_PATH = "/kind"
PARTITION_VALUE = "employee"
UNIQUE_KEY_POLICY = {"uniqueKeys": [{"paths": ["/email"]}]}

# DateTimePart() only understands the full ISO 8601 form.
_DATE_SUFFIX = "T00:00:00.0000000Z"


def _to_document(document: dict[str, Any]) -> dict[str, Any]:
    body = dict(document)
    body["kind"] = PARTITION_VALUE
    date_of_birth = body.get("dateOfBirth")
    if isinstance(date_of_birth, str) and len(date_of_birth) == 10:
        body["dateOfBirth"] = date_of_birth + _DATE_SUFFIX
    return body


def _from_document(raw: dict[str, Any]) -> dict[str, Any]:
    # Drop Cosmos system properties (_rid, _etag, _ts, ...) and the partition key.
    document = {k: v for k, v in raw.items() if not k.startswith("_") and k != "kind"}
    date_of_birth = document.get("dateOfBirth")
    if isinstance(date_of_birth, str):
        document["dateOfBirth"] = date_of_birth[:10]
    return document


class CosmosEmployeeRepository(EmployeeRepository):
    name = "cosmos"

    def __init__(self) -> None:
        self.client: CosmosClient | None = None
        self.container: Any = None
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        endpoint = settings.COSMOS_DB_ENDPOINT
        key = settings.COSMOS_DB_KEY
        database_name = settings.COSMOS_DB_DATABASE
        container_name = settings.COSMOS_DB_EMPLOYEES_CONTAINER

        if not endpoint or not key:
            logger.warning("Cosmos DB credentials missing, repository not initialized")
            return

        self.client = CosmosClient(endpoint, key)
        db = await self.client.create_database_if_not_exists(id=database_name)
        self.container = await db.create_container_if_not_exists(
            id=container_name,
            partition_key=PartitionKey(path=PARTITION_KEY_PATH),
            unique_key_policy=UNIQUE_KEY_POLICY,
        )
        self.initialized = True
        logger.info("CosmosEmployeeRepository initialized (container=%s)", container_name)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None
            self.container = None
            self.initialized = False

    async def check_connection(self) -> bool:
        if not self.container:
            return False
        try:
            query = "SELECT VALUE COUNT(1) FROM c"
            async for _ in self.container.query_items(query=query, partition_key=PARTITION_VALUE):
                return True
            return True
        except Exception:
            logger.exception("Cosmos DB connection check failed")
            return False

    def _require_container(self) -> Any:
        if not self.container:
            raise StorageError("Cosmos DB container not initialized")
        return self.container

    async def _query(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
        container = self._require_container()
        items: list[dict[str, Any]] = []
        try:
            async for item in container.query_items(
                query=query,
                parameters=parameters or [],
                partition_key=PARTITION_VALUE,
            ):
                items.append(_from_document(item))
        except CosmosHttpResponseError as err:
            raise StorageError(f"Cosmos DB query failed: {err.message}") from err
        return items

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._query("SELECT * FROM c")

    async def find(self, predicate: Predicate) -> list[dict[str, Any]]:
        clause, parameters = predicate.where_clause()
        return await self._query(f"SELECT * FROM c WHERE {clause}", parameters)

    async def get(self, employee_id: str) -> dict[str, Any] | None:
        container = self._require_container()
        try:
            item = await container.read_item(item=employee_id, partition_key=PARTITION_VALUE)
        except CosmosResourceNotFoundError:
            return None
        except CosmosHttpResponseError as err:
            raise StorageError(f"Cosmos DB read failed: {err.message}") from err
        return _from_document(item)

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        container = self._require_container()
        try:
            item = await container.create_item(body=_to_document(document))
        except CosmosResourceExistsError as err:
            raise DuplicateEmailError() from err
        except CosmosHttpResponseError as err:
            raise StorageError(f"Cosmos DB insert failed: {err.message}") from err
        return _from_document(item)

    async def replace(self, document: dict[str, Any]) -> dict[str, Any] | None:
        container = self._require_container()
        try:
            item = await container.replace_item(item=document["id"], body=_to_document(document))
        except CosmosResourceNotFoundError:
            return None
        except CosmosResourceExistsError as err:
            raise DuplicateEmailError() from err
        except CosmosHttpResponseError as err:
            raise StorageError(f"Cosmos DB replace failed: {err.message}") from err
        return _from_document(item)

    async def delete(self, employee_id: str) -> bool:
        container = self._require_container()
        try:
            await container.delete_item(item=employee_id, partition_key=PARTITION_VALUE)
        except CosmosResourceNotFoundError:
            return False
        except CosmosHttpResponseError as err:
            raise StorageError(f"Cosmos DB delete failed: {err.message}") from err
        return True
