"""Pydantic request/response models for delivery validation endpoints."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..models.domain import (
    Coordinate,
    DeliveryZone,
    FeeRule,
    FixedFee,
    PerKmFee,
    TieredFee,
    ValidationRequest,
    ValidationResult,
)


class CoordinateModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class DeliveryValidationRequest(BaseModel):
    restaurant_id: str = Field(..., min_length=1)
    destination: CoordinateModel = Field(..., description="Already geocoded delivery address.")
    order_amount: Optional[float] = Field(default=None, ge=0, description="Cart total, used for minimum order checks.")

    def to_domain(self) -> ValidationRequest:
        return ValidationRequest(
            restaurant_id=self.restaurant_id,
            destination=Coordinate(lat=self.destination.lat, lng=self.destination.lng),
            order_amount=self.order_amount,
        )


class FixedFeeModel(BaseModel):
    type: Literal["fixed"] = "fixed"
    amount: float


class PerKmFeeModel(BaseModel):
    type: Literal["per_km"] = "per_km"
    amount_per_km: float


class FeeTierModel(BaseModel):
    max_distance_km: float
    fee: float


class TieredFeeModel(BaseModel):
    type: Literal["tiered"] = "tiered"
    tiers: List[FeeTierModel]


FeeRuleModel = Annotated[
    Union[FixedFeeModel, PerKmFeeModel, TieredFeeModel],
    Field(discriminator="type"),
]


def fee_rule_to_model(rule: FeeRule) -> FixedFeeModel | PerKmFeeModel | TieredFeeModel:
    match rule:
        case FixedFee(amount=amount):
            return FixedFeeModel(amount=amount)
        case PerKmFee(amount_per_km=rate):
            return PerKmFeeModel(amount_per_km=rate)
        case TieredFee(tiers=tiers):
            return TieredFeeModel(
                tiers=[FeeTierModel(max_distance_km=tier.max_distance_km, fee=tier.fee) for tier in tiers]
            )
        case _:
            raise ValueError(f"Unsupported fee rule: {type(rule).__name__}")


class ZoneSummaryModel(BaseModel):
    id: str
    name: str
    fee_rule: FeeRuleModel
    min_order_amount: Optional[float] = None
    max_delivery_time_minutes: Optional[int] = None
    priority: int

    @classmethod
    def from_zone(cls, zone: DeliveryZone) -> "ZoneSummaryModel":
        return cls(
            id=zone.id,
            name=zone.name,
            fee_rule=fee_rule_to_model(zone.fee_rule),
            min_order_amount=zone.min_order_amount,
            max_delivery_time_minutes=zone.max_delivery_time_minutes,
            priority=zone.priority,
        )


class DeliveryValidationResponse(BaseModel):
    valid: bool
    zone: Optional[ZoneSummaryModel] = None
    delivery_fee: float = Field(..., description="Delivery fee, 2 decimal places.")
    estimated_time_minutes: int
    distance_km: float = Field(..., description="Great-circle distance from the restaurant, 2 decimal places.")
    error: Optional[str] = None
    error_code: Optional[Literal["out_of_area", "minimum_order_not_met"]] = None

    @classmethod
    def from_result(cls, result: ValidationResult) -> "DeliveryValidationResponse":
        return cls(
            valid=result.valid,
            zone=ZoneSummaryModel.from_zone(result.matched_zone) if result.matched_zone else None,
            delivery_fee=result.delivery_fee,
            estimated_time_minutes=result.estimated_time_minutes,
            distance_km=result.distance_km,
            error=result.error,
            error_code=result.error_code,
        )
