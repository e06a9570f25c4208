from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def dump(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, mode="json", **kwargs)


class Pagination(CamelModel):
    total: int
    page: int
    pages: int
    limit: int


def pagination(total: int, page: int, limit: int) -> dict:
    pages = (total + limit - 1) // limit if limit else 0
    return Pagination(total=total, page=page, pages=pages, limit=limit).dump()


def dump_list(model: type[CamelModel], rows) -> list[dict[str, Any]]:
    return [model.model_validate(row).dump() for row in rows]


def dump_one(model: type[CamelModel], row) -> Optional[dict[str, Any]]:
    if row is None:
        return None
    return model.model_validate(row).dump()
