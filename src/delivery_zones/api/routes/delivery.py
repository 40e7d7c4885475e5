"""API routes for delivery address validation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...models.errors import ConfigurationError, RepositoryUnavailableError, RestaurantNotFoundError
from ...schemas.delivery import DeliveryValidationRequest, DeliveryValidationResponse
from ...services.delivery import service as delivery_service

router = APIRouter(prefix="/delivery", tags=["delivery"])


@router.post("/validate", response_model=DeliveryValidationResponse, status_code=status.HTTP_200_OK)
def validate_delivery(payload: DeliveryValidationRequest) -> DeliveryValidationResponse:
    """Check whether a geocoded address can be served and quote fee and ETA.

    An address outside every zone or an order below the zone minimum is a
    normal ``200`` response with ``valid=false``; ``error_code`` tells the two
    apart.
    """
    try:
        result = delivery_service.validate_delivery_address(payload.to_domain())
        return DeliveryValidationResponse.from_result(result)
    except RestaurantNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error: {exc}. Please try again.",
        ) from exc
    except Exception as exc:
        logging.exception(f"Error validating delivery address: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to validate delivery address: {exc}",
        ) from exc
