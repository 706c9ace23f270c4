"""播放地址解析单元测试。"""

from src.modules.videos.domain.episodes import extract_episodes


class TestExtractEpisodes:
    """extract_episodes 测试。"""

    def test_picks_group_with_most_matches(self):
        raw = (
            "$https://a.com/1.m3u8(CDN1)"
            "$$$"
            "$https://a.com/1.m3u8(CDN1)$https://a.com/2.m3u8(CDN2)"
        )
        assert extract_episodes(raw) == [
            "https://a.com/1.m3u8",
            "https://a.com/2.m3u8",
        ]

    def test_tie_keeps_first_group(self):
        raw = "第1集$https://a.com/1.m3u8$$$第1集$https://b.com/1.m3u8"
        assert extract_episodes(raw) == ["https://a.com/1.m3u8"]

    def test_smaller_earlier_group_is_discarded_not_merged(self):
        raw = (
            "第1集$https://only-a.com/1.m3u8"
            "$$$"
            "第1集$https://b.com/1.m3u8#第2集$https://b.com/2.m3u8"
        )
        result = extract_episodes(raw)
        assert result == ["https://b.com/1.m3u8", "https://b.com/2.m3u8"]
        assert "https://only-a.com/1.m3u8" not in result

    def test_dedup_preserves_first_seen_order(self):
        raw = (
            "第2集$https://a.com/2.m3u8#第1集$https://a.com/1.m3u8"
            "#重复$https://a.com/2.m3u8"
        )
        assert extract_episodes(raw) == [
            "https://a.com/2.m3u8",
            "https://a.com/1.m3u8",
        ]

    def test_parenthetical_annotation_is_truncated(self):
        raw = "高清$https://a.com/path(hd).m3u8"
        assert extract_episodes(raw) == ["https://a.com/path"]

    def test_non_m3u8_links_are_ignored(self):
        raw = "第1集$https://a.com/play/1.html#第2集$https://a.com/2.mp4"
        assert extract_episodes(raw) == []

    def test_http_scheme_supported(self):
        assert extract_episodes("第1集$http://a.com/1.m3u8") == ["http://a.com/1.m3u8"]

    def test_match_stops_at_whitespace_and_quotes(self):
        raw = "第1集$https://a.com/x y.m3u8#第2集$https://a.com/'q.m3u8"
        assert extract_episodes(raw) == []

    def test_empty_and_malformed_input(self):
        assert extract_episodes(None) == []
        assert extract_episodes("") == []
        assert extract_episodes("$$$") == []
        assert extract_episodes("no links at all") == []
        assert extract_episodes(12345) == []  # type: ignore[arg-type]

    def test_reextracting_own_output_is_stable(self):
        raw = (
            "第1集$https://a.com/1.m3u8(CDN1)#第2集$https://a.com/2.m3u8(CDN1)"
            "#第2集$https://a.com/2.m3u8(CDN1)"
        )
        first = extract_episodes(raw)
        rebuilt = "".join(f"${url}" for url in first)
        alternate = f"${first[0]}$$${rebuilt}"

        assert extract_episodes(rebuilt) == first
        assert extract_episodes(alternate) == first
