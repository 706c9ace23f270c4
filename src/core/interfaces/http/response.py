"""Standard API response models."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    """Standard list envelope: ``{code, message, list}``."""

    model_config = ConfigDict(populate_by_name=True)

    code: int = 200
    message: str = "获取成功"
    items: list[T] = Field(default_factory=list, alias="list")

    @classmethod
    def success(
        cls,
        items: list[T],
        message: str = "获取成功",
        code: int = 200,
    ) -> "ListResponse[T]":
        return cls(code=code, message=message, items=items)

    @classmethod
    def error(
        cls,
        message: Any = "操作失败",
        code: int = 500,
    ) -> "ListResponse[T]":
        if isinstance(message, Exception):
            message = str(message)
        return cls(code=code, message=message, items=[])

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
