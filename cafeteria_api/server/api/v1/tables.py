"""
Dining table endpoints.

Reads are public. Creating, editing, retiring and changing the status of a
table is reserved for sellers and admins.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.core.models.io.dining_tables import (
    DiningTableCreate,
    DiningTableRead,
    DiningTableStatusUpdate,
    DiningTableUpdate,
    DiningTableWithOrderRead,
)
from cafeteria_api.server.services.deps import StaffDep, TableServiceDep

router = APIRouter(tags=["tables"])


@router.get("", response_model=List[DiningTableRead], summary="List Tables", description="Active tables by number.")
async def list_tables(tables: TableServiceDep) -> List[DiningTableRead]:
    return [DiningTableRead.model_validate(t) for t in await tables.list_tables()]


@router.get("/available", response_model=List[DiningTableRead], summary="List Available Tables")
async def list_available_tables(tables: TableServiceDep) -> List[DiningTableRead]:
    return [DiningTableRead.model_validate(t) for t in await tables.list_available()]


@router.get(
    "/with-orders",
    response_model=List[DiningTableWithOrderRead],
    summary="Tables With Active Orders",
    description=(
        "Reconcile table statuses with their orders, then list the tables that have active orders, "
        "each with its most recent active order."
    ),
)
async def list_tables_with_orders(tables: TableServiceDep) -> List[DiningTableWithOrderRead]:
    return await tables.list_with_orders()


@router.get(
    "/{table_id}",
    response_model=DiningTableRead,
    summary="Get Table",
    responses={404: {"model": ErrorResponse, "description": "Table not found"}},
)
async def get_table(table_id: int, tables: TableServiceDep) -> DiningTableRead:
    table = await tables.get_table(table_id)
    if table is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Table {table_id} not found")
    return DiningTableRead.model_validate(table)


@router.post(
    "",
    response_model=DiningTableRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Table",
    responses={409: {"model": ErrorResponse, "description": "Table number already exists"}},
)
async def create_table(data: DiningTableCreate, staff: StaffDep, tables: TableServiceDep) -> DiningTableRead:
    return DiningTableRead.model_validate(await tables.create_table(data))


@router.put(
    "/{table_id}",
    response_model=DiningTableRead,
    summary="Update Table",
    responses={409: {"model": ErrorResponse, "description": "Table number already exists"}},
)
async def update_table(
    table_id: int, data: DiningTableUpdate, staff: StaffDep, tables: TableServiceDep
) -> DiningTableRead:
    return DiningTableRead.model_validate(await tables.update_table(table_id, data))


@router.delete(
    "/{table_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Retire Table",
    description="Soft delete: the table is marked inactive and disappears from listings.",
)
async def delete_table(table_id: int, staff: StaffDep, tables: TableServiceDep) -> None:
    await tables.deactivate_table(table_id)


@router.patch(
    "/{table_id}/status",
    response_model=DiningTableRead,
    summary="Change Table Status",
    description="Set a table's status. Releasing a table to `available` marks its active orders delivered.",
)
async def set_table_status(
    table_id: int, data: DiningTableStatusUpdate, staff: StaffDep, tables: TableServiceDep
) -> DiningTableRead:
    return DiningTableRead.model_validate(await tables.set_status(table_id, data.status))
