"""Video API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from src.modules.videos.domain.entities import VideoRecord


class VideoResponse(BaseModel):
    """Video response."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="视频ID")
    title: str = Field(..., description="标题")
    poster: str = Field(..., description="封面地址")
    episodes: list[str] = Field(default_factory=list, description="剧集播放地址")
    source: str = Field(..., description="来源源标识")
    source_name: str = Field(..., description="来源源名称")
    class_: str = Field("", alias="class", description="分类标签")
    year: str = Field(..., description="年份，未知时为 unknown")
    desc: str = Field("", description="简介")
    type_name: str = Field("", description="类型名称")

    @classmethod
    def from_record(cls, record: VideoRecord) -> "VideoResponse":
        return cls(
            id=record.id,
            title=record.title,
            poster=record.poster,
            episodes=list(record.episodes),
            source=record.source_key,
            source_name=record.source_name,
            class_=record.class_,
            year=record.year,
            desc=record.description,
            type_name=record.type_name,
        )
