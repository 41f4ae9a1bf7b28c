from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple

from utils.helpers import (
    safe_int_conversion,
    safe_number_conversion,
    safe_optional_str,
    safe_str_tuple,
)


class InvalidWorkOrderError(ValueError):
    """Raised when a payload cannot be loaded as a work order."""


@dataclass(frozen=True)
class WorkOrderCustomer:
    customer_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    address_line_1: Optional[str] = None
    address_line_2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    home_phone: Optional[str] = None
    work_phone: Optional[str] = None
    extension_text: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        """Build a customer from the API shape. Missing keys become None."""
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise InvalidWorkOrderError("customer must be a JSON object")
        return cls(
            customer_id=safe_int_conversion(data.get("customer_id"), default=None),
            first_name=safe_optional_str(data.get("first_name")),
            last_name=safe_optional_str(data.get("last_name")),
            email=safe_optional_str(data.get("email")),
            address_line_1=safe_optional_str(data.get("address_line_1")),
            address_line_2=safe_optional_str(data.get("address_line_2")),
            city=safe_optional_str(data.get("city")),
            province=safe_optional_str(data.get("province")),
            home_phone=safe_optional_str(data.get("home_phone")),
            work_phone=safe_optional_str(data.get("work_phone")),
            extension_text=safe_optional_str(data.get("extension_text")),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class WorkOrderLineItem:
    line_item_id: Optional[int] = None
    item_name: Optional[str] = None
    unit_price: Optional[float] = None
    # quantity and line total arrive pre-formatted and are printed as-is
    quantity_text: Optional[str] = None
    line_total_text: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            line_item_id=safe_int_conversion(data.get("line_item_id"), default=None),
            item_name=safe_optional_str(data.get("item_name")),
            unit_price=safe_number_conversion(data.get("unit_price")),
            quantity_text=safe_optional_str(data.get("quantity_text")),
            line_total_text=safe_optional_str(data.get("line_total_text")),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class WorkOrderDetail:
    """
    Read-only snapshot of a work order as returned by the API.

    Only ``reference_id`` and ``deposit`` are guaranteed; every other field
    may be missing and the form renderers fall back to "-" or "$0.00".
    """

    reference_id: int
    original_job_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    status_key: Optional[str] = None
    status_name: Optional[str] = None
    job_type_key: Optional[str] = None
    job_type_name: Optional[str] = None
    customer: WorkOrderCustomer = field(default_factory=WorkOrderCustomer)
    item_id: Optional[int] = None
    item_name: Optional[str] = None
    brand_names: Tuple[str, ...] = ()
    model_number: Optional[str] = None
    serial_number: Optional[str] = None
    remote_control_qty: int = 0
    cable_qty: int = 0
    cord_qty: int = 0
    album_cd_cassette_qty: int = 0
    problem_description: Optional[str] = None
    worker_names: Tuple[str, ...] = ()
    work_done: Optional[str] = None
    payment_method_names: Tuple[str, ...] = ()
    parts_total: Optional[float] = None
    delivery_total: Optional[float] = None
    labour_total: Optional[float] = None
    deposit: float = 0.0
    line_items: Tuple[WorkOrderLineItem, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkOrderDetail":
        """
        Load a work order from the JSON payload of the work order detail API.

        Raises:
            InvalidWorkOrderError: if the payload is not an object or has no
                usable ``reference_id``.
        """
        if not isinstance(data, dict):
            raise InvalidWorkOrderError("Work order payload must be a JSON object")

        reference_id = data.get("reference_id")
        if reference_id is None or isinstance(reference_id, bool):
            raise InvalidWorkOrderError("reference_id is required")
        if isinstance(reference_id, float) and reference_id.is_integer():
            # JSON numbers such as 12.0 from spreadsheet exports
            reference_id = int(reference_id)
        try:
            reference_id = int(str(reference_id).strip())
        except ValueError as e:
            raise InvalidWorkOrderError(
                f"Invalid reference_id: {data.get('reference_id')!r}"
            ) from e

        line_items = data.get("line_items") or []
        if not isinstance(line_items, (list, tuple)):
            raise InvalidWorkOrderError("line_items must be a list")
        if not all(isinstance(line, dict) for line in line_items):
            raise InvalidWorkOrderError("line_items entries must be JSON objects")

        return cls(
            reference_id=reference_id,
            original_job_id=safe_int_conversion(data.get("original_job_id"), default=None),
            created_at=safe_optional_str(data.get("created_at")),
            updated_at=safe_optional_str(data.get("updated_at")),
            status_key=safe_optional_str(data.get("status_key")),
            status_name=safe_optional_str(data.get("status_name")),
            job_type_key=safe_optional_str(data.get("job_type_key")),
            job_type_name=safe_optional_str(data.get("job_type_name")),
            customer=WorkOrderCustomer.from_dict(data.get("customer")),
            item_id=safe_int_conversion(data.get("item_id"), default=None),
            item_name=safe_optional_str(data.get("item_name")),
            brand_names=safe_str_tuple(data.get("brand_names")),
            model_number=safe_optional_str(data.get("model_number")),
            serial_number=safe_optional_str(data.get("serial_number")),
            remote_control_qty=safe_int_conversion(data.get("remote_control_qty")),
            cable_qty=safe_int_conversion(data.get("cable_qty")),
            cord_qty=safe_int_conversion(data.get("cord_qty")),
            album_cd_cassette_qty=safe_int_conversion(data.get("album_cd_cassette_qty")),
            problem_description=safe_optional_str(data.get("problem_description")),
            worker_names=safe_str_tuple(data.get("worker_names")),
            work_done=safe_optional_str(data.get("work_done")),
            payment_method_names=safe_str_tuple(data.get("payment_method_names")),
            parts_total=safe_number_conversion(data.get("parts_total")),
            delivery_total=safe_number_conversion(data.get("delivery_total")),
            labour_total=safe_number_conversion(data.get("labour_total")),
            deposit=safe_number_conversion(data.get("deposit"), default=0.0),
            line_items=tuple(WorkOrderLineItem.from_dict(line) for line in line_items),
        )

    def to_dict(self):
        """Convert the record back to the API's JSON shape"""
        data = asdict(self)
        for key in ("brand_names", "worker_names", "payment_method_names", "line_items"):
            data[key] = list(data[key])
        return data
