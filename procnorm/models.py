from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """Base for emitted records: only the fields an adapter actually set are serialized."""

    model_config = ConfigDict(extra="allow")

    # Top-level fields that are emitted as null instead of being left out.
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def to_record(self) -> Dict[str, Any]:
        record = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in record.items()
            if value is not None or key in self.nullable_fields
        }


class PartyReference(CanonicalModel):
    id: str
    name: str
    country: Optional[str] = None


class Address(CanonicalModel):
    street: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class ContactPoint(CanonicalModel):
    name: Optional[str] = None
    email: Optional[str] = None
    telephone: Optional[str] = None
    url: Optional[str] = None


class Contract(CanonicalModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"publish_date", "award_date", "contract_date"})

    id: str
    country: str = ""
    title: Optional[str] = None
    description: Optional[str] = None
    publish_date: Optional[str] = None
    award_date: Optional[str] = None
    contract_date: Optional[str] = None
    buyer: Optional[PartyReference] = None
    procuring_entity: Optional[PartyReference] = None
    other_buyers: Optional[List[PartyReference]] = None
    supplier: Optional[PartyReference] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    method: Optional[str] = None
    method_details: Optional[str] = None
    category: Optional[str] = None
    categories: Optional[List[str]] = None
    status: Optional[str] = None
    url: Optional[str] = None
    source: str


class Entity(CanonicalModel):
    id: str
    name: str
    other_names: Optional[List[str]] = None
    identifier: str = ""
    country: str = ""
    address: Optional[Address] = None
    contactPoint: Optional[ContactPoint] = None
    classification: Optional[str] = None
    member_of: Optional[PartyReference] = None
    source: str
    updated_date: Optional[str] = None


class ReportSummary(BaseModel):
    input_records: int = 0
    output_records: int = 0
    dropped: int = 0
    failed: int = 0


class TransformReport(BaseModel):
    transform: str
    summary: ReportSummary
    encoding: Optional[str] = Field(default=None, examples=["utf-8"])
    failures: List[Dict[str, Any]] = Field(default_factory=list)


class TransformResponse(BaseModel):
    records: List[Any] = Field(default_factory=list)
    report: TransformReport


class HealthResponse(BaseModel):
    ok: bool = True
