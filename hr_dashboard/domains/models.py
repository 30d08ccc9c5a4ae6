"""
Company profile and the user view derived from it.

Wire format is the backend's camelCase JSON; attribute names are snake_case.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any

# attribute -> wire key
_COMPANY_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "email": "email",
    "phone": "phone",
    "address": "address",
    "website": "website",
    "industry": "industry",
    "size": "size",
    "registration_date": "registrationDate",
    "tax_id": "taxId",
}
_OPTIONAL = tuple(k for k in _COMPANY_FIELDS if k not in ("id", "name", "email"))


def _parse_id(raw: Any) -> int:
    """Integer id from an int, an integral finite float, or a numeric string."""
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            raise ValueError(f"Company id is not an integer: {raw!r}")
        return int(raw)
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Company id is not numeric: {raw!r}") from e


@dataclass
class Company:
    id: int
    name: str
    email: str = ""
    phone: str | None = None
    address: str | None = None
    website: str | None = None
    industry: str | None = None
    size: str | None = None
    registration_date: str | None = None
    tax_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Company":
        """
        Build from a wire dict. Unknown keys are kept in `extra`.

        Raises:
            ValueError: If data is not a dict or has no usable id.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Company record must be an object, got {type(data).__name__}")
        raw_id = data.get("id")
        if raw_id is None or isinstance(raw_id, bool):
            raise ValueError("Company record has no id")
        company_id = _parse_id(raw_id)

        known = set(_COMPANY_FIELDS.values())
        kwargs: dict[str, Any] = {
            "id": company_id,
            "name": str(data.get("name") or ""),
            "email": str(data.get("email") or ""),
        }
        for attr in _OPTIONAL:
            val = data.get(_COMPANY_FIELDS[attr])
            kwargs[attr] = None if val is None else str(val)
        kwargs["extra"] = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs)

    @classmethod
    def from_json(cls, text: str) -> "Company":
        """Parse the persisted form. Raises ValueError on bad JSON or a bad record."""
        try:
            data = json.loads(text)
        except RecursionError as e:
            raise ValueError("Company record is nested too deeply") from e
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        for attr, key in _COMPANY_FIELDS.items():
            val = getattr(self, attr)
            if val is None and attr in _OPTIONAL:
                continue
            out[key] = val
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass(frozen=True)
class User:
    id: int
    email: str
    name: str
    company_id: int
    company_name: str

    @classmethod
    def from_company(cls, company: Company) -> "User":
        return cls(
            id=company.id,
            email=company.email or "",
            name=company.name,
            company_id=company.id,
            company_name=company.name,
        )
