"""Source domain entities."""

from pydantic import BaseModel, ConfigDict, Field


class SourceDescriptor(BaseModel):
    """视频源描述 - 由外部配置提供，聚合流程只读不写。"""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="源唯一标识")
    name: str = Field(..., description="源显示名称")
    api: str = Field(..., description="源 API 基础地址")
    search_path: str = Field(..., description="搜索路径模板")
    search_headers: dict[str, str] = Field(
        default_factory=dict, description="搜索请求头"
    )
    detail: str | None = Field(default=None, description="详情页地址")
    is_adult: bool = Field(default=False, description="是否成人内容源")
    disabled: bool = Field(default=False, description="是否停用")

    # api_site config schema:
    # {"api": str, "name": str, "detail"?: str, "is_adult"?: bool,
    #  "disabled"?: bool, "search_path"?: str, "search_headers"?: {str: str}}

    def build_search_url(self, escaped_keyword: str) -> str:
        """拼接搜索地址，路径模板中有 ``{keyword}`` 时原位替换。"""
        if "{keyword}" in self.search_path:
            return f"{self.api}{self.search_path.replace('{keyword}', escaped_keyword)}"
        return f"{self.api}{self.search_path}{escaped_keyword}"

    @property
    def available(self) -> bool:
        return not self.disabled
