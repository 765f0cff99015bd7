import math
from typing import Any, Dict, List, Optional, Type

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request bodies: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(BaseModel):
    """
    Response records read straight from ORM objects.

    Attributes are read by their Python names and written out in camelCase;
    every record carries its identifier as `_id`.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str = Field(serialization_alias="_id")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class LocationAddress(CamelModel):
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    zip_code: str
    country: str = "USA"


def dump(schema: Type[RecordModel], obj) -> Dict[str, Any]:
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def dump_all(schema: Type[RecordModel], objs) -> List[Dict[str, Any]]:
    return [dump(schema, obj) for obj in objs]


def pagination(page: int, limit: int, total: int) -> Dict[str, int]:
    return Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)).model_dump()


def envelope(data: Optional[Dict[str, Any]] = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
