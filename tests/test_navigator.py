"""Tests for HistoryNavigator, the selected-index state machine."""

import pytest

from conftest import FakeRunner, log_lines, make_result
from git_scrub.core.coordinator import CheckoutCoordinator
from git_scrub.core.errors import CheckoutError, ToolFailure
from git_scrub.core.log_reader import CommitLogReader
from git_scrub.core.navigator import HistoryNavigator
from git_scrub.models.settings import ScrubSettings

DATE = "Tue Dec 3 14:00:00 2024 +0000"
LOG = log_lines(
    ("aaa111", "Ada", DATE, "Add parser"),
    ("bbb222", "Grace", DATE, "Fix typo"),
    ("ccc333", "Linus", DATE, "Initial commit"),
)


def make_navigator(runner, settings=None):
    settings = settings or ScrubSettings()
    return HistoryNavigator(
        "/work/repo",
        CommitLogReader(settings, runner),
        CheckoutCoordinator(settings, runner),
    )


def checkouts(runner):
    return [call[-1] for call in runner.calls if "checkout" in call]


@pytest.fixture
def runner():
    return FakeRunner([make_result(LOG)])


@pytest.fixture
def navigator(runner):
    nav = make_navigator(runner)
    nav.load()
    return nav


class TestLoad:
    def test_selects_tip_without_checkout(self, navigator, runner):
        assert navigator.selected_index == 0
        assert navigator.selected_commit.id == "aaa111"
        assert len(navigator.history) == 3
        assert checkouts(runner) == []

    def test_empty_history_has_no_selection(self):
        nav = make_navigator(FakeRunner([make_result("")]))
        nav.load()
        assert nav.selected_index is None
        assert nav.selected_commit is None
        assert nav.title == "Commits"

    def test_reload_replaces_history(self, navigator, runner):
        navigator.set_index(2)
        runner.results.append(make_result(log_lines(("zzz999", "Ada", DATE, "New"))))

        navigator.load()

        assert [c.id for c in navigator.history] == ["zzz999"]
        assert navigator.selected_index == 0

    def test_failed_fetch_leaves_empty_history(self, navigator, runner):
        runner.results.append(make_result(returncode=128, stderr="fatal: bad"))

        with pytest.raises(ToolFailure):
            navigator.load()

        assert len(navigator.history) == 0
        assert navigator.selected_index is None
        assert "fatal: bad" in navigator.last_error


class TestSetIndex:
    def test_change_triggers_checkout(self, navigator, runner):
        assert navigator.set_index(1) is True
        assert navigator.selected_index == 1
        assert checkouts(runner) == ["bbb222"]

    def test_unchanged_index_is_skipped(self, navigator, runner):
        assert navigator.set_index(0) is False
        navigator.set_index(2)
        assert navigator.set_index(2) is False
        assert checkouts(runner) == ["ccc333"]

    def test_back_to_tip_uses_branch(self, navigator, runner):
        navigator.set_index(2)
        navigator.set_index(0)
        assert checkouts(runner) == ["ccc333", "main"]

    def test_clamps_low(self, navigator, runner):
        navigator.set_index(2)
        navigator.set_index(-5)
        assert navigator.selected_index == 0
        assert checkouts(runner) == ["ccc333", "main"]

    def test_clamps_high(self, navigator, runner):
        navigator.set_index(len(navigator.history) + 10)
        assert navigator.selected_index == 2
        assert checkouts(runner) == ["ccc333"]

    def test_failed_checkout_keeps_previous_index(self, navigator, runner):
        runner.results.append(make_result(returncode=1, stderr="error: local changes"))

        with pytest.raises(CheckoutError):
            navigator.set_index(1)

        assert navigator.selected_index == 0
        assert "local changes" in navigator.last_error

        navigator.set_index(1)
        assert navigator.selected_index == 1
        assert navigator.last_error is None

    def test_no_history_is_noop(self):
        runner = FakeRunner([make_result("")])
        nav = make_navigator(runner)
        nav.load()
        assert nav.set_index(3) is False
        assert checkouts(runner) == []


class TestSliderAndSelection:
    @pytest.mark.parametrize(
        "position, expected", [(0.4, 0), (1.0, 1), (1.99, 1), (2.0, 2), (7.5, 2), (-3.2, 0)]
    )
    def test_position_maps_to_index(self, runner, position, expected):
        nav = make_navigator(runner)
        nav.load()
        nav.set_position(position)
        assert nav.selected_index == expected

    def test_position_within_same_index_does_not_checkout(self, navigator, runner):
        navigator.set_position(1.1)
        navigator.set_position(1.6)
        navigator.set_position(1.9)
        assert checkouts(runner) == ["bbb222"]

    def test_nan_position_ignored(self, navigator, runner):
        assert navigator.set_position(float("nan")) is False
        assert navigator.selected_index == 0

    def test_step(self, navigator, runner):
        navigator.step(1)
        navigator.step(1)
        navigator.step(1)
        navigator.step(-1)
        assert navigator.selected_index == 1
        assert checkouts(runner) == ["bbb222", "ccc333", "bbb222"]

    def test_select_commit_by_prefix(self, navigator, runner):
        assert navigator.select_commit("ccc") is True
        assert navigator.selected_index == 2
        assert navigator.title == "Commit: Initial commit"

    def test_select_unknown_commit(self, navigator, runner):
        assert navigator.select_commit("fff") is False
        assert navigator.selected_index == 0
        assert checkouts(runner) == []
