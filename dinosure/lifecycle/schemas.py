from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

T = TypeVar("T")


def _from_mapping(cls: Type[T], data: Union[T, Mapping[str, Any]]) -> T:
    """
    Build a record from a host read model, ignoring keys the core does not use
    (ids, timestamps, currency, ...).
    """
    if isinstance(data, cls):
        return data
    known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    return cls(**{k: v for k, v in dict(data).items() if k in known})


def read_field(record: Any, name: str, default: Any = None) -> Any:
    """Field access that works for both records and raw host mappings."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


@dataclass(frozen=True)
class QuotePackage:
    package_name: str
    sum_assured: int
    base_premium: int
    suggested_premium: int
    module: Dict[str, Any]
    billing_frequency: str = "monthly"
    input_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Union["QuotePackage", Mapping[str, Any]]) -> "QuotePackage":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class Application:
    package_name: str
    sum_assured: int
    base_premium: int
    monthly_premium: int
    module: Dict[str, Any]
    billing_frequency: str = "monthly"
    input_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Union["Application", Mapping[str, Any]]) -> "Application":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class Policy:
    sum_assured: int
    monthly_premium: int
    module: Dict[str, Any]
    package_name: Optional[str] = None
    base_premium: Optional[int] = None
    start_date: Union[date, datetime, str, None] = None
    end_date: Union[date, datetime, str, None] = None
    # Host read-model fields; never set by the core.
    status: Optional[str] = None
    charges: Optional[List[Dict[str, Any]]] = None
    policy_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Union["Policy", Mapping[str, Any]]) -> "Policy":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class AlterationPackage:
    sum_assured: int
    monthly_premium: int
    change_description: str
    billing_frequency: str
    module: Dict[str, Any]
    input_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Union["AlterationPackage", Mapping[str, Any]]) -> "AlterationPackage":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class AlteredPolicy:
    package_name: Optional[str]
    sum_assured: int
    base_premium: int
    monthly_premium: int
    start_date: Union[date, datetime, str, None]
    end_date: Union[date, datetime, str, None]
    charges: Optional[List[Dict[str, Any]]]
    module: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductModuleAction:
    """
    Declarative effect returned by a hook. The platform applies it; the core
    never mutates a policy itself.
    """

    name: str
    data: Dict[str, Any]

    @classmethod
    def update_policy(cls, module: Dict[str, Any]) -> "ProductModuleAction":
        return cls(name="update_policy", data={"module": module})

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "data": self.data}


@dataclass(frozen=True)
class AlterationContext:
    alteration_hook_key: str
    policy: Union[Policy, Mapping[str, Any]]
    policyholder: Optional[Mapping[str, Any]] = None
    alteration_package: Union[AlterationPackage, Mapping[str, Any], None] = None

    @classmethod
    def from_dict(cls, data: Union["AlterationContext", Mapping[str, Any]]) -> "AlterationContext":
        return _from_mapping(cls, data)
