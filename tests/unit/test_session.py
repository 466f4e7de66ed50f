"""
Unit tests for the Game session.

Tests lazy generation on the first click, restart and input gating.
"""
import random

import pytest
import numpy as np
from game import BoardConfig, Game, GamePhase, GameState, OutOfBoundsError


def mine_layout(game: Game):
    return {(x, y) for x, y, cell in game.minefield.cells() if cell.is_mine}


def lose(game: Game) -> None:
    """Click a hidden mine."""
    x, y = next(
        (x, y) for x, y, cell in game.minefield.cells()
        if cell.is_mine and cell.is_hidden
    )
    game.handle_click(x, y)


# ============================================================================
# New Game Tests
# ============================================================================

class TestNewGame:
    """Test the state before the first click."""

    def test_new_game_is_uninitialized(self, small_game: Game) -> None:
        """No mines are placed until the first click."""
        assert small_game.phase == GamePhase.UNINITIALIZED
        assert small_game.minefield.mine_count == 0
        assert small_game.game_state == GameState.PLAYING

    def test_new_game_reports_full_flag_budget(self, small_game: Game) -> None:
        """The flag counter shows the configured mine count."""
        assert small_game.remaining_flag_count == 10

    def test_new_game_observation_all_hidden(self, small_game: Game) -> None:
        """Every cell starts hidden."""
        obs = small_game.get_observation()
        assert obs.shape == (9, 9)
        assert np.all(obs == -1)

    def test_flag_before_first_click_is_refused(self, small_game: Game) -> None:
        """There is nothing to flag yet."""
        assert small_game.toggle_flag(0, 0) is False
        assert small_game.phase == GamePhase.UNINITIALIZED

    def test_default_config(self) -> None:
        """Default game is 16x16 with 64 mines."""
        game = Game()
        assert game.config.size == 16
        assert game.remaining_flag_count == 64


# ============================================================================
# First Click Tests
# ============================================================================

class TestFirstClick:
    """Test generation on the first click."""

    def test_first_click_places_mines(self, small_game: Game) -> None:
        """First click generates the configured number of mines."""
        small_game.handle_click(4, 4)
        assert small_game.phase == GamePhase.ACTIVE
        assert small_game.minefield.mine_count == 10
        assert len(mine_layout(small_game)) == 10

    def test_first_click_opens_empty_region(self) -> None:
        """The clicked cell is Clear(0) and never loses."""
        for seed in range(25):
            game = Game(BoardConfig(9, 10), rng=random.Random(seed))
            game.handle_click(0, 8)
            cell = game.minefield.get_cell(0, 8)
            assert cell.is_revealed is True
            assert cell.is_mine is False
            assert cell.adjacent_mines == 0
            assert game.game_state == GameState.PLAYING

    def test_second_click_keeps_field(self, small_game: Game) -> None:
        """Generation happens exactly once."""
        small_game.handle_click(4, 4)
        field = small_game.minefield
        hidden = field.get_valid_actions()[0]
        small_game.toggle_flag(*hidden)
        small_game.handle_click(4, 4)
        assert small_game.minefield is field

    def test_seeded_games_are_reproducible(self) -> None:
        """Same seed and first click give the same layout."""
        first = Game(BoardConfig(9, 10), rng=random.Random(42))
        second = Game(BoardConfig(9, 10), rng=random.Random(42))
        first.handle_click(3, 3)
        second.handle_click(3, 3)
        assert mine_layout(first) == mine_layout(second)

    def test_first_click_on_mine_free_board_wins(
        self, mine_free_game: Game
    ) -> None:
        """With no mines the first click opens everything."""
        assert mine_free_game.handle_click(1, 2) is True
        assert mine_free_game.has_won is True
        assert mine_free_game.is_game_over is True


# ============================================================================
# Input Gating Tests
# ============================================================================

class TestInputGating:
    """Test input suppression and bounds."""

    def test_flag_after_first_click(self, small_game: Game) -> None:
        """Flags work once mines are placed."""
        small_game.handle_click(4, 4)
        x, y = small_game.minefield.get_valid_actions()[0]
        assert small_game.toggle_flag(x, y) is True
        assert small_game.remaining_flag_count == 9

    def test_input_ignored_after_loss(self, small_game: Game) -> None:
        """Clicks and flags are refused once the game is lost."""
        small_game.handle_click(4, 4)
        lose(small_game)
        assert small_game.game_state == GameState.LOST

        x, y = small_game.minefield.get_valid_actions()[0]
        assert small_game.handle_click(x, y) is False
        assert small_game.toggle_flag(x, y) is False

    def test_out_of_bounds_click_raises(self, small_game: Game) -> None:
        """Bad coordinates are a caller error, even before generation."""
        with pytest.raises(OutOfBoundsError):
            small_game.handle_click(9, 0)
        assert small_game.phase == GamePhase.UNINITIALIZED

    def test_out_of_bounds_flag_raises(self, small_game: Game) -> None:
        """Bad coordinates are a caller error for flags too."""
        with pytest.raises(OutOfBoundsError):
            small_game.toggle_flag(0, -1)


# ============================================================================
# Restart Tests
# ============================================================================

class TestRestart:
    """Test restarting a game."""

    def test_restart_replaces_field(self, small_game: Game) -> None:
        """Restart discards the old field and waits for a new first click."""
        small_game.handle_click(4, 4)
        old_field = small_game.minefield

        small_game.restart()

        assert small_game.minefield is not old_field
        assert small_game.phase == GamePhase.UNINITIALIZED
        assert small_game.remaining_flag_count == 10
        assert np.all(small_game.get_observation() == -1)

    def test_restart_after_loss_allows_play(self, small_game: Game) -> None:
        """A lost game can be started over."""
        small_game.handle_click(4, 4)
        lose(small_game)
        small_game.restart()
        assert small_game.handle_click(4, 4) is True
        assert small_game.game_state == GameState.PLAYING
