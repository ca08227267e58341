import pytest

from elementfall.progression import (
    ChapterManager,
    GameState,
    PlayerExperience,
    PortalManager,
    next_state_after_portal,
)


def test_chapter_defaults_and_color():
    manager = ChapterManager()
    assert (manager.current_chapter, manager.current_level) == (1, 1)
    assert manager.current_color() == (57 / 255, 42 / 255, 28 / 255)


def test_boss_chapter_color():
    manager = ChapterManager(current_chapter=4)
    assert manager.current_color() == (69 / 255, 35 / 255, 13 / 255)


def test_chapter_progression_cycle():
    manager = ChapterManager()
    visited = [(manager.current_chapter, manager.current_level)]
    for _ in range(7):
        manager.advance()
        visited.append((manager.current_chapter, manager.current_level))
    assert visited == [
        (1, 1), (1, 2), (2, 1), (2, 2), (3, 1), (3, 2), (4, 1), (1, 1),
    ]


def test_advance_returns_new_color():
    manager = ChapterManager()
    manager.advance()
    color = manager.advance()
    assert color == manager.current_color()
    assert manager.current_chapter == 2


def test_experience_below_threshold():
    exp = PlayerExperience()
    exp.give(5)
    assert exp.current == 5
    assert exp.lv == 1
    assert exp.take_popup() is False


def test_experience_level_up():
    exp = PlayerExperience()
    exp.give(105)
    assert exp.lv == 2
    assert exp.current == 5
    assert exp.to_lv_up == 140
    assert exp.take_popup() is True
    assert exp.take_popup() is False


def test_experience_threshold_grows():
    exp = PlayerExperience()
    previous = exp.to_lv_up
    for _ in range(5):
        exp.give(exp.to_lv_up)
        assert exp.to_lv_up > previous
        previous = exp.to_lv_up


def test_experience_max_level_accumulates():
    exp = PlayerExperience(lv=9)
    exp.give(1000)
    assert exp.lv == 9
    assert exp.current == 1000
    assert exp.take_popup() is False


def test_portal_mob_counting():
    portal = PortalManager()
    assert portal.no_mobs_on_level() is True
    portal.push_mob()
    portal.push_mob()
    assert portal.no_mobs_on_level() is False
    portal.pop_mob()
    portal.pop_mob()
    assert portal.no_mobs_on_level() is True


def test_portal_pop_empty_raises():
    with pytest.raises(ValueError):
        PortalManager().pop_mob()


def test_portal_set_mob():
    portal = PortalManager()
    portal.set_mob(3)
    assert portal.mobs == 3
    with pytest.raises(ValueError):
        portal.set_mob(-1)


def test_portal_from_game_goes_to_hub():
    assert next_state_after_portal(GameState.IN_GAME, ChapterManager()) is GameState.HUB


def test_portal_from_hub_loads_level():
    assert next_state_after_portal(GameState.HUB, ChapterManager()) is GameState.LOADING


def test_portal_from_hub_loads_boss():
    manager = ChapterManager(current_level=2, current_chapter=3)
    assert next_state_after_portal(GameState.HUB, manager) is GameState.LOADING_BOSS


def test_portal_elsewhere_does_nothing():
    assert next_state_after_portal(GameState.MAIN_MENU, ChapterManager()) is None