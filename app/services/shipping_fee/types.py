# app/services/shipping_fee/types.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

# fee keys shared by the provider envelope and FeeBreakdown (1:1 by name)
FEE_FIELDS = (
    "total",
    "service_fee",
    "insurance_fee",
    "pick_station_fee",
    "coupon_value",
    "r2s_fee",
    "document_return",
    "double_check",
    "cod_fee",
    "pick_remote_areas_fee",
    "deliver_remote_areas_fee",
    "cod_failed_fee",
)


@dataclass(frozen=True)
class AddressUnit:
    """
    Province / District / Ward.

    - province: id=ProvinceID, code=short code, parent_id=None
    - district: id=DistrictID, parent_id=province id
    - ward:     id=WardCode (str), parent_id=district id
    """

    id: Union[int, str]
    name: Optional[str]
    parent_id: Optional[int] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class ServiceOption:
    service_id: int
    short_name: Optional[str]
    service_type_id: int


@dataclass
class FeeRequest:
    # destination (required, checked by the validator)
    to_district_id: Optional[int] = None
    to_ward_code: Optional[str] = None

    # origin: provider falls back to the shop address when absent
    from_district_id: Optional[int] = None
    from_ward_code: Optional[str] = None

    # parcel
    weight: Optional[int] = None
    length: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None

    # service
    service_id: Optional[int] = None
    service_type_id: Optional[int] = None

    # money (VND)
    insurance_value: Optional[int] = None
    cod_value: Optional[int] = None
    cod_failed_amount: Optional[int] = None
    coupon: Optional[str] = None

    # names, for providers that address by name instead of id
    from_province_name: Optional[str] = None
    from_district_name: Optional[str] = None
    to_province_name: Optional[str] = None
    to_district_name: Optional[str] = None

    def is_same_district(self) -> bool:
        return self.from_district_id is not None and self.from_district_id == self.to_district_id


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class FeeBreakdown:
    success: bool
    message: str
    errors: List[FieldError] = field(default_factory=list)
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
    def failure(
        cls,
        message: str,
        *,
        errors: Optional[List[FieldError]] = None,
        source: Optional[str] = None,
    ) -> "FeeBreakdown":
        return cls(success=False, message=message, errors=list(errors or []), source=source)

    def fees(self) -> Dict[str, int]:
        return {k: int(getattr(self, k)) for k in FEE_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            if f.name == "errors":
                v = [{"field": e.field, "message": e.message} for e in v]
            out[f.name] = v
        return out
