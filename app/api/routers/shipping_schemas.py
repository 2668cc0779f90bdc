# app/api/routers/shipping_schemas.py
from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from app.services.shipping_fee.types import AddressUnit, FeeBreakdown, FeeRequest, ServiceOption

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every /api/shipping endpoint."""

    success: bool
    message: str
    data: Optional[T] = None


class FeeCalcIn(BaseModel):
    # bounds are enforced by validate_fee_request so every violation is reported at once;
    # the model only checks types (ward codes may arrive as numbers)
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    from_district_id: Optional[int] = None
    from_ward_code: Optional[str] = None

    to_district_id: Optional[int] = None
    to_ward_code: Optional[str] = None

    service_id: Optional[int] = None
    service_type_id: Optional[int] = None

    weight: Optional[int] = Field(default=None, description="grams")
    length: Optional[int] = Field(default=None, description="cm")
    width: Optional[int] = Field(default=None, description="cm")
    height: Optional[int] = Field(default=None, description="cm")

    insurance_value: Optional[int] = Field(default=None, description="VND")
    cod_value: Optional[int] = Field(default=None, description="VND")
    cod_failed_amount: Optional[int] = Field(default=None, description="VND")
    coupon: Optional[str] = None

    # name-addressed providers (GHTK)
    from_province_name: Optional[str] = None
    from_district_name: Optional[str] = None
    to_province_name: Optional[str] = None
    to_district_name: Optional[str] = None

    def to_fee_request(self) -> FeeRequest:
        return FeeRequest(**self.model_dump())


class FieldErrorOut(BaseModel):
    field: str
    message: str


class FeeBreakdownOut(BaseModel):
    success: bool
    message: str
    errors: List[FieldErrorOut] = Field(default_factory=list)
    source: Optional[str] = None

    total: int = 0
    service_fee: int = 0
    insurance_fee: int = 0
    pick_station_fee: int = 0
    coupon_value: int = 0
    r2s_fee: int = 0
    document_return: int = 0
    double_check: int = 0
    cod_fee: int = 0
    pick_remote_areas_fee: int = 0
    deliver_remote_areas_fee: int = 0
    cod_failed_fee: int = 0

    @classmethod
    def from_breakdown(cls, b: FeeBreakdown) -> "FeeBreakdownOut":
        return cls.model_validate(b.to_dict())


# address DTOs keep the camelCase keys the frontend already consumes


class ProvinceOut(BaseModel):
    provinceId: int
    provinceName: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def from_unit(cls, u: AddressUnit) -> "ProvinceOut":
        return cls(provinceId=int(u.id), provinceName=u.name, code=u.code)


class DistrictOut(BaseModel):
    id: int
    name: Optional[str] = None
    provinceId: Optional[int] = None

    @classmethod
    def from_unit(cls, u: AddressUnit) -> "DistrictOut":
        return cls(id=int(u.id), name=u.name, provinceId=u.parent_id)


class WardOut(BaseModel):
    wardCode: str
    name: Optional[str] = None
    districtId: Optional[int] = None

    @classmethod
    def from_unit(cls, u: AddressUnit) -> "WardOut":
        return cls(wardCode=str(u.id), name=u.name, districtId=u.parent_id)


class ServiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    service_id: int
    short_name: Optional[str] = None
    service_type_id: int

    @classmethod
    def from_option(cls, s: ServiceOption) -> "ServiceOut":
        return cls.model_validate(s)
