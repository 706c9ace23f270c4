"""后端条目归一化单元测试。

测试覆盖：
- 字段映射与默认值
- 年份提取
- 拒绝规则（缺少标题或封面）
- HTML 清理
"""

from src.core.domain.text import clean_html_tags, collapse_whitespace
from src.modules.videos.domain.entities import UNKNOWN_YEAR
from src.modules.videos.domain.normalizer import normalize_record


class TestNormalizeRecord:
    """normalize_record 测试。"""

    def test_maps_all_fields(self, sample_raw_item, source_factory):
        source = source_factory("ffzy", name="非凡资源")
        record = normalize_record(sample_raw_item, source)

        assert record is not None
        assert record.id == "42"
        assert record.title == "流浪地球 2"
        assert record.poster == "https://img.example.com/wandering.jpg"
        assert record.episodes == [
            "https://cdn-b.example.com/1.m3u8",
            "https://cdn-b.example.com/2.m3u8",
        ]
        assert record.source_key == "ffzy"
        assert record.source_name == "非凡资源"
        assert record.class_ == "科幻,电影"
        assert record.year == "2023"
        assert record.type_name == "科幻片"
        assert "<p>" not in record.description
        assert "人类 开启\"流浪地球\"计划。" in record.description

    def test_missing_id_gets_source_prefixed_token(self, sample_raw_item, source_factory):
        sample_raw_item.pop("vod_id")
        record = normalize_record(
            sample_raw_item, source_factory("ffzy"), token_factory=lambda: "abc123xyz"
        )
        assert record is not None
        assert record.id == "ffzy-abc123xyz"

    def test_generated_ids_differ_within_batch(self, sample_raw_item, source_factory):
        sample_raw_item["vod_id"] = ""
        source = source_factory("ffzy")
        first = normalize_record(sample_raw_item, source)
        second = normalize_record(sample_raw_item, source)
        assert first is not None and second is not None
        assert first.id.startswith("ffzy-")
        assert len(first.id) == len("ffzy-") + 9
        assert first.id != second.id

    def test_zero_id_is_kept(self, sample_raw_item, source_factory):
        sample_raw_item["vod_id"] = 0
        record = normalize_record(sample_raw_item, source_factory())
        assert record is not None
        assert record.id == "0"

    def test_whole_float_id_renders_as_integer(self, sample_raw_item, source_factory):
        sample_raw_item["vod_id"] = 12.0
        assert normalize_record(sample_raw_item, source_factory()).id == "12"

        sample_raw_item["vod_id"] = 12.5
        assert normalize_record(sample_raw_item, source_factory()).id == "12.5"

    def test_year_defaults_to_unknown(self, sample_raw_item, source_factory):
        source = source_factory()

        sample_raw_item.pop("vod_year")
        assert normalize_record(sample_raw_item, source).year == UNKNOWN_YEAR

        sample_raw_item["vod_year"] = "未知"
        assert normalize_record(sample_raw_item, source).year == UNKNOWN_YEAR

        sample_raw_item["vod_year"] = 2021
        assert normalize_record(sample_raw_item, source).year == "2021"

    def test_optional_fields_degrade_to_empty(self, source_factory):
        record = normalize_record(
            {"vod_id": "1", "vod_name": "Title", "vod_pic": "https://p/1.jpg"},
            source_factory(),
        )
        assert record is not None
        assert record.episodes == []
        assert record.class_ == ""
        assert record.type_name == ""
        assert record.description == ""
        assert record.year == UNKNOWN_YEAR

    def test_rejects_missing_title(self, sample_raw_item, source_factory):
        sample_raw_item.pop("vod_name")
        assert normalize_record(sample_raw_item, source_factory()) is None

    def test_rejects_blank_title(self, sample_raw_item, source_factory):
        sample_raw_item["vod_name"] = "   \t "
        assert normalize_record(sample_raw_item, source_factory()) is None

    def test_rejects_missing_poster(self, sample_raw_item, source_factory):
        sample_raw_item.pop("vod_pic")
        assert normalize_record(sample_raw_item, source_factory()) is None

        sample_raw_item["vod_pic"] = ""
        assert normalize_record(sample_raw_item, source_factory()) is None


class TestTextHelpers:
    """文本辅助函数测试。"""

    def test_clean_html_tags(self):
        assert clean_html_tags("<p>Hello</p><p>World</p>") == "Hello\nWorld"

    def test_clean_html_entities(self):
        assert clean_html_tags("A &amp; B&nbsp;&nbsp;C") == "A & B C"

    def test_clean_html_empty(self):
        assert clean_html_tags(None) == ""
        assert clean_html_tags("") == ""
        assert clean_html_tags("<br/><br/>") == ""

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  a \n\t b  ") == "a b"
        assert collapse_whitespace(None) == ""
