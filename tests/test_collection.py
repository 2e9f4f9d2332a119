"""Tests for the collection log notifier."""

import pytest

from osrs_notifier.events import GameState
from osrs_notifier.message import item_image_url
from osrs_notifier.notifiers.collection import COMPLETED_VARP, TOTAL_VARP, CollectionNotifier

DWH_LINE = "New item added to your collection log: Dragon warhammer"


@pytest.fixture
def notifier(ctx):
    return CollectionNotifier(ctx)


@pytest.fixture
def seeded(notifier, client):
    client.varps[COMPLETED_VARP] = 41
    client.varps[TOTAL_VARP] = 120
    notifier.on_tick()
    assert notifier.completed == 41
    return notifier


class TestCounter:
    def test_seeded_from_varp_on_tick(self, notifier, client):
        client.varps[COMPLETED_VARP] = 41
        notifier.on_tick()
        assert notifier.completed == 41

    def test_varp_change_seeds_stale_counter(self, notifier):
        notifier.on_varp_changed(COMPLETED_VARP, 41)
        assert notifier.completed == 41

    def test_varp_change_ignored_once_counting(self, seeded, ctx):
        seeded.on_chat_message(DWH_LINE)
        ctx.deferred.drain()
        # The varp catches up later with the old value
        seeded.on_varp_changed(COMPLETED_VARP, 41)
        assert seeded.completed == 42

    def test_other_varp_ignored(self, notifier):
        notifier.on_varp_changed(TOTAL_VARP, 120)
        assert notifier.completed == -1

    def test_logout_marks_stale(self, seeded, client):
        client.state = GameState.LOGIN_SCREEN
        seeded.on_tick()
        assert seeded.completed == -1

    def test_game_state_marks_stale(self, seeded):
        seeded.on_game_state(GameState.HOPPING)
        assert seeded.completed == -1


class TestNotify:
    def test_new_item(self, seeded, ctx, items, dispatcher):
        items.add(13576, "Dragon warhammer", 40_000_000)
        seeded.on_chat_message(DWH_LINE)
        assert dispatcher.sent == []

        ctx.deferred.drain()
        assert dispatcher.texts == ["Zanik has added Dragon warhammer to their collection"]
        notification = dispatcher.notifications[0]
        assert notification.extra.completed_entries == 42
        assert notification.extra.total_entries == 120
        assert notification.extra.item_id == 13576
        assert notification.extra.price == 40_000_000
        assert notification.thumbnail_url == item_image_url(13576)

    def test_several_items_in_one_tick(self, seeded, ctx, dispatcher):
        seeded.on_chat_message(DWH_LINE)
        seeded.on_chat_message("New item added to your collection log: Bandos hilt")
        ctx.deferred.drain()
        assert [n.extra.completed_entries for n in dispatcher.notifications] == [42, 43]

    def test_unknown_item(self, seeded, ctx, dispatcher):
        seeded.on_chat_message(DWH_LINE)
        ctx.deferred.drain()
        extra = dispatcher.notifications[0].extra
        assert extra.item_id is None
        assert extra.price is None
        assert dispatcher.notifications[0].thumbnail_url is None

    def test_invalid_progress(self, notifier, ctx, dispatcher):
        notifier.on_chat_message(DWH_LINE)
        ctx.deferred.drain()
        extra = dispatcher.notifications[0].extra
        assert extra.completed_entries is None
        assert extra.total_entries is None

    def test_unrelated_message(self, seeded, ctx, dispatcher):
        seeded.on_chat_message("You feel something weird sneaking into your backpack.")
        assert ctx.deferred.drain() == 0
        assert seeded.completed == 41

    def test_disabled(self, seeded, config, ctx, dispatcher):
        config.notify_collection_log = False
        seeded.on_chat_message(DWH_LINE)
        ctx.deferred.drain()
        assert dispatcher.sent == []
