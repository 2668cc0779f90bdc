# app/geo/vn_registry.py
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from app.services.shipping_fee.types import AddressUnit


def _norm(s: Optional[str]) -> str:
    return (s or "").strip()


def _resources_dir() -> Path:
    # app/geo/vn_registry.py -> app/geo -> app
    return Path(__file__).resolve().parents[1] / "resources" / "geo"


@lru_cache(maxsize=1)
def load_vn_provinces() -> List[AddressUnit]:
    raw = json.loads((_resources_dir() / "vn_provinces.json").read_text(encoding="utf-8"))

    provinces: List[AddressUnit] = []
    for x in raw:
        name = _norm(x.get("name"))
        if x.get("id") is None or not name:
            continue
        provinces.append(AddressUnit(id=int(x["id"]), name=name, code=_norm(x.get("code")) or None))
    return provinces


@lru_cache(maxsize=1)
def load_vn_district_samples() -> Dict[int, List[AddressUnit]]:
    raw = json.loads((_resources_dir() / "vn_districts_sample.json").read_text(encoding="utf-8"))

    out: Dict[int, List[AddressUnit]] = {}
    for prov_id, arr in raw.items():
        pid = int(prov_id)
        out[pid] = [
            AddressUnit(id=int(x["id"]), name=_norm(x.get("name")), parent_id=pid)
            for x in arr
            if isinstance(x, dict) and x.get("id") is not None
        ]
    return out


def list_provinces() -> List[AddressUnit]:
    return list(load_vn_provinces())


def list_districts(province_id: int) -> List[AddressUnit]:
    """
    Hà Nội (1) and Hồ Chí Minh (2) have a fixed sample; every other
    province gets three synthetic districts with ids 100/200/300 + province_id.
    """
    samples = load_vn_district_samples()
    if province_id in samples:
        return list(samples[province_id])

    return [
        AddressUnit(id=100 + province_id, name=f"Thành phố/Thị xã {province_id}", parent_id=province_id),
        AddressUnit(id=200 + province_id, name="Huyện A", parent_id=province_id),
        AddressUnit(id=300 + province_id, name="Huyện B", parent_id=province_id),
    ]


_WARD_NAMES = ("Phường 1", "Phường 2", "Phường 3", "Xã A", "Xã B")


def list_wards(district_id: int) -> List[AddressUnit]:
    # ward codes are strings: "1000+id" .. "5000+id"
    return [
        AddressUnit(id=str((i + 1) * 1000 + district_id), name=name, parent_id=district_id)
        for i, name in enumerate(_WARD_NAMES)
    ]
