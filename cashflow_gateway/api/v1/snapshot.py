"""Shared backend fetch with HTTP error translation for v1 routes"""

import logging
from fastapi import HTTPException

from cashflow_gateway.domain.exceptions import BackendAPIError, BusinessNotFoundError
from cashflow_gateway.domain.models import BusinessSnapshot
from cashflow_gateway.infrastructure.clients.backend import BackendClient
from cashflow_gateway.infrastructure.observability.metrics import backend_fetch_failures_counter


async def load_snapshot(backend_client: BackendClient, business_id: int, request_id: str) -> BusinessSnapshot:
    """
    Fetch every record of a business from the backend.

    Raises:
        HTTPException: 404 for an unknown business, 503 when the backend fails
    """
    try:
        snapshot = await backend_client.get_snapshot(business_id)
    except BusinessNotFoundError as e:
        backend_fetch_failures_counter.labels(reason="not_found").inc()
        logging.warning(f"Business not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=f"Business {business_id} not found")
    except BackendAPIError as e:
        backend_fetch_failures_counter.labels(reason="unavailable").inc()
        logging.error(f"Backend API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Backend service unavailable")

    logging.info(
        "Snapshot fetched",
        extra={
            "request_id": request_id,
            "business_id": business_id,
            "transaction_count": len(snapshot.transactions),
            "category_count": len(snapshot.categories),
            "scenario_count": len(snapshot.scenarios),
        },
    )
    return snapshot
