"""
env.py - Gymnasium environment wrapping the Connect Four engine

Lets agents and test harnesses drive a ConnectFourGame through the standard
reset/step interface. Both seats are played through the same environment;
rewards are given from the point of view of the player who just moved.
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Optional, Tuple, Union

from connect4_engine.debug import debug
from connect4_engine.game.rules import ConnectFourGame, MoveResult
from connect4_engine.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, MoveOutcome


class ConnectFourEnv(gym.Env):
    """Connect Four environment following the Gymnasium interface."""

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 height: int = DEFAULT_HEIGHT,
                 width: int = DEFAULT_WIDTH,
                 player1_color: str = 'red',
                 player2_color: str = 'yellow'):
        """
        Initialize the environment.

        Args:
            render_mode: None, "ascii" (render returns text) or "human" (render prints)
            height: Number of rows
            width: Number of columns
            player1_color: Color of the player who moves first
            player2_color: Color of the second player
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        self.game = ConnectFourGame(player1_color, player2_color, height=height, width=width)

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(low=0, high=2, shape=(height, width), dtype=np.int8)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """Start a new game and return the initial observation and info."""
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the player whose turn it is.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        result = self.game.apply_move(int(action))
        info = self._get_info(result)

        if result.outcome == MoveOutcome.REJECTED:
            debug.warning(f"Invalid action: {action} ({result.reason.name})", "env")
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward, terminated = self.reward_step, False
        if result.outcome == MoveOutcome.WIN:
            reward, terminated = self.reward_win, True
        elif result.outcome == MoveOutcome.TIE:
            reward, terminated = self.reward_draw, True

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, info

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self, result: Optional[MoveResult] = None) -> Dict:
        valid_moves = self.game.get_valid_moves()
        info = {
            'valid_moves': valid_moves,
            'current_player': self.game.current_player.player_id.value,
            'phase': self.game.phase.name,
            'moves_made': self.game.move_count,
            'winning_line': list(self.game.winning_run),
        }
        if result is not None:
            info['outcome'] = result.outcome.name
            info['invalid_move'] = result.outcome == MoveOutcome.REJECTED
        return info
