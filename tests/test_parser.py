"""Tests for game message classifiers."""

from datetime import timedelta

from osrs_notifier.parser import (
    BossKill,
    parse_boss,
    parse_collection_item,
    parse_diary_completion,
    parse_fight_time,
    parse_number,
    parse_quest_widget,
    parse_slayer_boss,
    parse_slayer_completion,
    parse_slayer_task,
)


class TestParseBoss:
    """Test kill/chest/completion count lines."""

    def test_kill_count(self):
        assert parse_boss("Your Zulrah kill count is: 5") == BossKill("Zulrah", 5)

    def test_kill_count_with_period(self):
        assert parse_boss("Your Vorkath kill count is: 1024.") == BossKill("Vorkath", 1024)

    def test_barrows_chest(self):
        assert parse_boss("Your Barrows chest count is: 120.") == BossKill("Barrows", 120)

    def test_other_chest_ignored(self):
        assert parse_boss("Your Lunar chest count is: 3.") is None

    def test_gauntlet_completion(self):
        assert parse_boss("Your Gauntlet completion count is: 7.") == BossKill("Crystalline Hunllef", 7)

    def test_corrupted_gauntlet_completion(self):
        kill = parse_boss("Your Corrupted Gauntlet completion count is: 40.")
        assert kill == BossKill("Corrupted Hunllef", 40)

    def test_other_completion_ignored(self):
        assert parse_boss("Your Agility course completion count is: 3.") is None

    def test_raid_secondary(self):
        kill = parse_boss("Your completed Theatre of Blood: Hard Mode count is: 3.")
        assert kill == BossKill("Theatre of Blood: Hard Mode", 3)

    def test_chambers_secondary(self):
        kill = parse_boss("Your completed Chambers of Xeric count is: 51.")
        assert kill == BossKill("Chambers of Xeric", 51)

    def test_wintertodt(self):
        assert parse_boss("Your subdued Wintertodt count is: 500.") == BossKill("Wintertodt", 500)

    def test_unknown_secondary_ignored(self):
        assert parse_boss("Your completed Sorceress's Garden count is: 8.") is None

    def test_unrelated(self):
        assert parse_boss("Welcome to Old School RuneScape.") is None


class TestParseFightTime:
    def test_duration(self):
        fight = parse_fight_time("Duration: 1:23.40")
        assert fight is not None
        assert fight.duration == timedelta(minutes=1, seconds=23.4)
        assert fight.personal_best is False

    def test_personal_best(self):
        fight = parse_fight_time("Fight duration: 0:58.20 (new personal best)")
        assert fight is not None
        assert fight.duration == timedelta(seconds=58.2)
        assert fight.personal_best is True

    def test_raid_duration(self):
        msg = "Congratulations - your raid is complete! Team size: Solo Duration: 28:31.40"
        fight = parse_fight_time(msg)
        assert fight is not None
        assert fight.duration == timedelta(minutes=28, seconds=31.4)

    def test_subdued(self):
        fight = parse_fight_time("You have subdued the Wintertodt! Subdued in 3:05.")
        assert fight is not None
        assert fight.duration == timedelta(minutes=3, seconds=5)

    def test_case_insensitive(self):
        assert parse_fight_time("Fight DURATION: 2:00") is not None

    def test_no_time(self):
        assert parse_fight_time("Your Zulrah kill count is: 5") is None


class TestParseDiary:
    def test_completion(self):
        msg = "Congratulations! You have completed all of the medium tasks in the Varrock area."
        diary = parse_diary_completion(msg)
        assert diary is not None
        assert diary.difficulty == "medium"
        assert diary.area == "Varrock"

    def test_other_message(self):
        assert parse_diary_completion("Well done! You have completed a medium task.") is None


class TestParseCollection:
    def test_item(self):
        msg = "New item added to your collection log: Dragon warhammer"
        assert parse_collection_item(msg) == "Dragon warhammer"

    def test_other_message(self):
        assert parse_collection_item("You have a funny feeling like you're being followed.") is None


class TestParseSlayer:
    def test_task(self):
        msg = "You have completed your task! You killed 130 Hillfiends. You gained 4,550 xp."
        assert parse_slayer_task(msg) == "130 Hillfiends"

    def test_task_with_comma(self):
        msg = "You have completed your task! You killed 1,200 Cave crawlers."
        assert parse_slayer_task(msg) == "1,200 Cave crawlers"

    def test_boss_xp_line(self):
        msg = "You are granted 5,000 Slayer XP for completing your boss task against the Kraken boss."
        assert parse_slayer_boss(msg) == "Kraken"

    def test_boss_xp_line_without_article(self):
        msg = "You are granted 5,000 Slayer XP for completing your boss task against Vorkath."
        assert parse_slayer_boss(msg) == "Vorkath"

    def test_completion_with_points(self):
        msg = "You've completed 50 tasks and received 15 points, giving you a total of 215"
        done = parse_slayer_completion(msg)
        assert done is not None
        assert done.task_count == "50"
        assert done.points == "15"

    def test_completion_with_commas(self):
        msg = "You've completed 1,234 tasks and received 1,000 points, giving you a total of 5,420"
        done = parse_slayer_completion(msg)
        assert done is not None
        assert done.task_count == "1,234"
        assert done.points == "1,000"

    def test_completion_without_points(self):
        msg = (
            "You've completed 3 tasks.You'll be eligible to earn reward points if you "
            "complete tasks from a more advanced Slayer Master."
        )
        done = parse_slayer_completion(msg)
        assert done is not None
        assert done.task_count == "3"
        assert done.points == "0"

    def test_completion_points_capped(self):
        msg = "You've completed 900 tasks and reached the maximum amount of Slayer points (64,000)"
        done = parse_slayer_completion(msg)
        assert done is not None
        assert done.points == "64,000"

    def test_wilderness_completion(self):
        msg = "You've completed 12 Wilderness tasks and received 25 points, giving you a total of 300"
        done = parse_slayer_completion(msg)
        assert done is not None
        assert done.task_count == "12"

    def test_parse_number(self):
        assert parse_number("64,000") == 64000
        assert parse_number("abc") is None


class TestParseQuest:
    def test_have_completed(self):
        assert parse_quest_widget("You have completed Cook's Assistant!") == "Cook's Assistant"

    def test_the_quest_suffix(self):
        assert parse_quest_widget("You have completed the Restless Ghost Quest!") == "Restless Ghost"

    def test_quoted(self):
        text = "You have successfully completed the 'Fairytale I - Growing Pains' quest!"
        assert parse_quest_widget(text) == "Fairytale I - Growing Pains"

    def test_contraction(self):
        assert parse_quest_widget("You've completed Dragon Slayer II!") == "Dragon Slayer II"

    def test_unrelated(self):
        assert parse_quest_widget("Quest complete") is None
