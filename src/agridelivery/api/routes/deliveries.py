"""Delivery order lifecycle endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ...errors import IllegalTransitionError
from ...models.domain import DeliveryOrder
from ...schemas.delivery import CreateDeliveryRequest, StatusUpdateRequest
from ...services.catalog import get_provider
from ...services.delivery import DeliveryOrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deliveries", tags=["deliveries"])


async def get_delivery_service(request: Request) -> DeliveryOrderService:
    service: DeliveryOrderService = request.app.state.deliveries
    await service.ensure_loaded()
    return service


@router.post("", response_model=DeliveryOrder, status_code=status.HTTP_201_CREATED)
async def create_delivery(
    payload: CreateDeliveryRequest,
    service: DeliveryOrderService = Depends(get_delivery_service),
) -> DeliveryOrder:
    try:
        provider = get_provider(payload.provider_id)
        return await service.create_delivery_order(
            payload.order_id,
            provider,
            payload.pickup_address,
            payload.delivery_address,
            payload.delivery_fee,
            payload.distance_km,
            payload.special_instructions,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error creating delivery for order {payload.order_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create delivery. Please check server logs for details.",
        ) from exc


@router.get("/active", response_model=list[DeliveryOrder], status_code=status.HTTP_200_OK)
async def active_deliveries(service: DeliveryOrderService = Depends(get_delivery_service)) -> list[DeliveryOrder]:
    return service.get_active_deliveries()


@router.get("/by-order/{order_id}", response_model=DeliveryOrder, status_code=status.HTTP_200_OK)
async def delivery_by_order(
    order_id: str,
    service: DeliveryOrderService = Depends(get_delivery_service),
) -> DeliveryOrder:
    delivery = service.get_delivery_by_order_id(order_id)
    if delivery is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No delivery found for order '{order_id}'.",
        )
    return delivery


@router.get("/{delivery_id}", response_model=DeliveryOrder, status_code=status.HTTP_200_OK)
async def delivery_detail(
    delivery_id: str,
    service: DeliveryOrderService = Depends(get_delivery_service),
) -> DeliveryOrder:
    try:
        return service.get_delivery(delivery_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.patch("/{delivery_id}/status", response_model=DeliveryOrder, status_code=status.HTTP_200_OK)
async def update_status(
    delivery_id: str,
    payload: StatusUpdateRequest,
    service: DeliveryOrderService = Depends(get_delivery_service),
) -> DeliveryOrder:
    try:
        return await service.update_delivery_status(delivery_id, payload.status, payload.message, payload.location)
    except IllegalTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error updating delivery {delivery_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update delivery. Please check server logs for details.",
        ) from exc
