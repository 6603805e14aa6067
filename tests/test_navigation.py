"""Tests for channel navigation: key parsing, listing and media resolution."""

from datetime import date

import httpx
import pytest

from conftest import FakeProbe, FakeScheduleSource, FakeStreamSource, make_game
from lazyman.consumers.navigation import (
    NavigationResolver,
    NavLevel,
    find_game,
    parse_key,
    rewrite_stream_url,
)
from lazyman.consumers.schedule_cache import ScheduleCache
from lazyman.consumers.stream_resolver import StreamResolver
from lazyman.core import FEED_QUALITIES, ContentType, Feed, ItemKind, MediaType, StreamResponseError
from lazyman.core.leagues import PING_TEST_HOSTS
from lazyman.utilities.cache import TTLCache

TODAY = date(2024, 1, 5)
READY_URL = "http://host/hls/2024/01/01/nhl/master_tablet.m3u8?exp=9999999999~hmac=ab"

HOME_FEED = Feed(id="1234", feed_type="NHLTV - HOME", call_letters="NESN")
AWAY_FEED = Feed(id="5678", feed_type="NHLTV - AWAY", call_letters="")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_navigator(
    games=None,
    stream_response: str = READY_URL,
    probe: FakeProbe | None = None,
    clock=None,
):
    schedule_source = FakeScheduleSource(games=games or [])
    stream_source = FakeStreamSource(stream_response)
    schedule = ScheduleCache(
        schedule_source,
        cache=TTLCache(clock=clock) if clock else TTLCache(),
        ttl_seconds=60,
    )
    navigator = NavigationResolver(
        schedule_cache=schedule,
        stream_resolver=StreamResolver(stream_source, cdn="l3c", clock=lambda: 1_700_000_000),
        host_probe=probe if probe is not None else FakeProbe(),
        today=lambda: TODAY,
        days_back=5,
    )
    return navigator, schedule_source, stream_source


@pytest.fixture
def live_game():
    return make_game(662, state="Live", feeds=(HOME_FEED, AWAY_FEED))


# ---------------------------------------------------------------------------
# Key parsing
# ---------------------------------------------------------------------------


class TestParseKey:
    @pytest.mark.parametrize(
        "key,level",
        [
            ("", NavLevel.ROOT),
            (None, NavLevel.ROOT),
            ("nhl", NavLevel.LEAGUE),
            ("nhl_20240101", NavLevel.DATE),
            ("nhl_20240101_662", NavLevel.GAME),
            ("nhl_20240101_662_1234", NavLevel.FEED),
            ("nhl_20240101_662_1234_450", NavLevel.QUALITY),
        ],
    )
    def test_segment_count_selects_level(self, key, level):
        assert parse_key(key).level == level

    def test_empty_segments_dropped(self):
        nav = parse_key("_nhl__20240101_")
        assert nav.level == NavLevel.DATE
        assert nav.segments == ("nhl", "20240101")

    def test_too_deep_is_invalid(self):
        assert parse_key("nhl_20240101_662_1234_null_null") is None

    def test_fields(self):
        nav = parse_key("MLB_20240101_662_1234_800")
        assert nav.league == "MLB"
        assert nav.game_date == date(2024, 1, 1)
        assert nav.game_id == 662
        assert nav.feed_id == "1234"
        assert nav.quality_key == "800"

    def test_bad_date_and_game_id(self):
        nav = parse_key("nhl_2024-1-1_abc")
        assert nav.game_date is None
        assert nav.game_id is None


class TestFindGame:
    def test_first_match_wins_on_duplicates(self, caplog):
        first = make_game(1, home="First")
        second = make_game(1, home="Second")

        assert find_game([first, second], 1) is first
        assert "share id" in caplog.text

    def test_missing(self):
        assert find_game([make_game(1)], 2) is None
        assert find_game(None, 1) is None


# ---------------------------------------------------------------------------
# Root / league levels
# ---------------------------------------------------------------------------


class TestRoot:
    def test_leagues_only_when_hosts_match(self):
        navigator, _, _ = _make_navigator()
        items = navigator.list_children("")

        assert [(i.id, i.name) for i in items] == [("nhl", "NHL"), ("MLB", "MLB")]
        assert all(i.kind == ItemKind.FOLDER for i in items)

    def test_failed_hosts_prepended(self):
        probe = FakeProbe(failing={"mf.svc.nhl.com", "playback.svcs.mlb.com"})
        navigator, _, _ = _make_navigator(probe=probe)

        items = navigator.list_children("")

        assert [i.id for i in items] == [
            "mf.svc.nhl.com",
            "playback.svcs.mlb.com",
            "nhl",
            "MLB",
        ]
        assert items[0].name == "mf.svc.nhl.com IP ERROR"
        assert probe.checked == list(PING_TEST_HOSTS)

    def test_no_probe_configured(self):
        navigator = NavigationResolver(
            schedule_cache=ScheduleCache(FakeScheduleSource()),
            stream_resolver=StreamResolver(FakeStreamSource()),
        )
        assert [i.id for i in navigator.list_children("")] == ["nhl", "MLB"]


class TestLeague:
    def test_five_days_back_from_today(self):
        navigator, _, _ = _make_navigator()
        items = navigator.list_children("nhl")

        assert [i.id for i in items] == [
            "nhl_20240105",
            "nhl_20240104",
            "nhl_20240103",
            "nhl_20240102",
            "nhl_20240101",
        ]
        assert items[0].name == "2024-01-05"

    def test_keeps_league_casing(self):
        navigator, _, _ = _make_navigator()
        assert navigator.list_children("MLB")[0].id == "MLB_20240105"

    def test_unknown_league_is_empty(self):
        navigator, _, _ = _make_navigator()
        assert navigator.list_children("nba") == []


# ---------------------------------------------------------------------------
# Date / game levels
# ---------------------------------------------------------------------------


class TestDate:
    def test_lists_games(self, live_game):
        other = make_game(663, home="New York Rangers", away="Boston Bruins")
        navigator, source, _ = _make_navigator(games=[live_game, other])

        items = navigator.list_children("nhl_20240101")

        assert [(i.id, i.name) for i in items] == [
            ("nhl_20240101_662", "Boston Bruins vs Toronto Maple Leafs"),
            ("nhl_20240101_663", "New York Rangers vs Boston Bruins"),
        ]
        assert source.calls == [("nhl", date(2024, 1, 1))]

    def test_no_games(self):
        navigator, _, _ = _make_navigator(games=[])
        assert navigator.list_children("nhl_20240101") == []

    def test_bad_date_is_empty_without_upstream_call(self):
        navigator, source, _ = _make_navigator(games=[make_game()])
        assert navigator.list_children("nhl_2024011") == []
        assert navigator.list_children("nhl_20241301") == []
        assert source.calls == []

    def test_unknown_league_is_empty(self):
        navigator, source, _ = _make_navigator(games=[make_game()])
        assert navigator.list_children("nba_20240101") == []
        assert source.calls == []

    def test_upstream_errors_propagate(self):
        navigator = NavigationResolver(
            schedule_cache=ScheduleCache(FakeScheduleSource(error=httpx.ConnectError("down"))),
            stream_resolver=StreamResolver(FakeStreamSource()),
            today=lambda: TODAY,
        )
        with pytest.raises(httpx.ConnectError):
            navigator.list_children("nhl_20240101")


class TestGame:
    def test_lists_feeds(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game])

        items = navigator.list_children("nhl_20240101_662")

        assert [(i.id, i.name) for i in items] == [
            ("nhl_20240101_662_1234", "NESN (NHLTV - HOME)"),
            ("nhl_20240101_662_5678", "NHLTV - AWAY"),
        ]
        assert all(i.kind == ItemKind.FOLDER for i in items)

    def test_game_without_feeds_gets_nofeed(self):
        navigator, _, _ = _make_navigator(games=[make_game(662)])

        items = navigator.list_children("nhl_20240101_662")

        assert len(items) == 1
        assert items[0].id.endswith("_nofeed")
        assert items[0].name == "No Feed Available"

    def test_unknown_game_gives_placeholder(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game])

        items = navigator.list_children("nhl_20240101_999")

        assert len(items) == 1
        assert items[0].id is None
        assert items[0].name == "No feeds found"
        assert items[0].kind == ItemKind.MEDIA

    def test_non_numeric_game_gives_placeholder(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game])
        assert navigator.list_children("nhl_20240101_abc")[0].name == "No feeds found"

    def test_reuses_cached_schedule(self, live_game):
        navigator, source, _ = _make_navigator(games=[live_game])
        navigator.list_children("nhl_20240101")
        navigator.list_children("nhl_20240101_662")

        assert len(source.calls) == 1


# ---------------------------------------------------------------------------
# Feed level (quality listing)
# ---------------------------------------------------------------------------


class TestFeed:
    def test_ready_lists_all_qualities(self, live_game):
        navigator, _, streams = _make_navigator(games=[live_game])

        items = navigator.list_children("nhl_20240101_662_1234")

        assert [i.id for i in items] == [
            f"nhl_20240101_662_1234_{key}" for key in FEED_QUALITIES
        ]
        assert [i.name for i in items] == [q.title for q in FEED_QUALITIES.values()]
        assert len(items) == 7
        for item in items:
            assert item.kind == ItemKind.MEDIA
            assert item.media_type == MediaType.VIDEO
            assert item.is_live_stream is True
        assert streams.calls == [("nhl", date(2024, 1, 1), "1234", "l3c")]

    def test_pending_gives_single_clip(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game], stream_response="Not Available")

        items = navigator.list_children("nhl_20240101_662_1234")

        assert len(items) == 1
        assert items[0].id == "nhl_20240101_662_1234_null_null"
        assert items[0].name == "Not Available"
        assert items[0].content_type == ContentType.CLIP
        assert items[0].is_live_stream is False

    def test_expired_gives_single_clip(self, live_game):
        navigator, _, _ = _make_navigator(
            games=[live_game], stream_response="http://h/m.m3u8?exp=1~x"
        )

        items = navigator.list_children("nhl_20240101_662_1234")

        assert [i.name for i in items] == ["Stream URL is expired"]

    def test_unknown_game_or_feed_is_empty(self, live_game):
        navigator, _, streams = _make_navigator(games=[live_game])

        assert navigator.list_children("nhl_20240101_999_1234") == []
        assert navigator.list_children("nhl_20240101_662_0000") == []
        assert streams.calls == []

    def test_quality_key_has_no_children(self, live_game):
        navigator, _, streams = _make_navigator(games=[live_game])
        assert navigator.list_children("nhl_20240101_662_1234_450") == []
        assert streams.calls == []

    def test_too_deep_is_empty(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game])
        assert navigator.list_children("nhl_20240101_662_1234_null_null") == []


# ---------------------------------------------------------------------------
# Media resolution
# ---------------------------------------------------------------------------


class TestRewriteStreamUrl:
    def test_replaces_last_path_segment(self):
        url = rewrite_stream_url(
            "http://host/a/b/master.m3u8?exp=1~x", FEED_QUALITIES["450"], is_final=False
        )
        assert url == "http://host/a/b/450K/450_slide.m3u8"

    def test_final_uses_complete_trimmed(self):
        url = rewrite_stream_url("http://host/a/master.m3u8", FEED_QUALITIES["800"], True)
        assert url == "http://host/a/800k/800_complete-trimmed.m3u8"

    def test_no_slash_raises(self):
        with pytest.raises(StreamResponseError):
            rewrite_stream_url("garbage", FEED_QUALITIES["450"], False)


class TestResolveMedia:
    def test_live_game_uses_slide(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game])
        key = "nhl_20240101_662_1234_3500"

        sources = navigator.resolve_media(key)

        assert len(sources) == 1
        source = sources[0]
        assert source.path == "http://host/hls/2024/01/01/nhl/3500K/3500_slide.m3u8"
        assert source.id == key
        assert source.protocol == "http"
        assert source.bitrate == 3_500_000
        assert source.supports_probing is False

    def test_final_game_uses_complete_trimmed(self):
        game = make_game(662, state="Final", feeds=(HOME_FEED,))
        navigator, _, _ = _make_navigator(games=[game])

        source = navigator.resolve_media("nhl_20240101_662_1234_5600")[0]

        assert source.path.endswith("/5600K/5600_complete-trimmed.m3u8")

    @pytest.mark.parametrize("quality_key", list(FEED_QUALITIES))
    def test_bitrate_matches_table(self, live_game, quality_key):
        navigator, _, _ = _make_navigator(games=[live_game])

        source = navigator.resolve_media(f"nhl_20240101_662_1234_{quality_key}")[0]

        assert source.bitrate == FEED_QUALITIES[quality_key].bitrate

    def test_reresolves_stream_each_time(self, live_game):
        navigator, schedule_source, streams = _make_navigator(games=[live_game])
        navigator.list_children("nhl_20240101_662_1234")
        navigator.resolve_media("nhl_20240101_662_1234_450")

        assert len(streams.calls) == 2
        assert len(schedule_source.calls) == 1

    def test_not_ready_at_resolution_is_empty(self, live_game):
        navigator, _, _ = _make_navigator(games=[live_game], stream_response="Not Available")
        assert navigator.resolve_media("nhl_20240101_662_1234_450") == []

    @pytest.mark.parametrize(
        "key",
        [
            "",
            "nhl_20240101_662_1234",
            "nhl_20240101_662_1234_999",
            "nhl_20240101_999_1234_450",
            "nhl_20240101_662_0000_450",
            "nba_20240101_662_1234_450",
            "nhl_20240101_662_1234_null_null",
        ],
    )
    def test_unresolvable_keys_are_empty(self, live_game, key):
        navigator, _, _ = _make_navigator(games=[live_game])
        assert navigator.resolve_media(key) == []

    def test_game_gone_after_refresh_is_empty(self, live_game, clock):
        navigator, schedule_source, _ = _make_navigator(games=[live_game], clock=clock)
        navigator.list_children("nhl_20240101_662_1234")

        schedule_source.games = []
        clock.advance(61)

        assert navigator.resolve_media("nhl_20240101_662_1234_450") == []
        assert len(schedule_source.calls) == 2
