import random

import gymnasium as gym
from gymnasium import spaces
import numpy as np

import board_engine


class Game2048Env(gym.Env):
    """
    gymnasium environment for the 2048 board engine

    headless driver for scripted and automated play:
    - actions are the four move directions
    - observations are the raw 4x4 tile values (0 = empty)
    - reward is the merge points earned by the step
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, render_mode=None):
        super().__init__()

        self.render_mode = render_mode

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # observation space -> 4x4 grid of raw tile values
        self.observation_space = spaces.Box(
            low=0,
            high=131072,  # largest tile reachable on a 4x4 board
            shape=(board_engine.GRID_SIZE, board_engine.GRID_SIZE),
            dtype=np.int32
        )

        # map actions to game directions
        self.action_to_direction = {
            0: 'up',
            1: 'down',
            2: 'left',
            3: 'right'
        }

        self.rng = random.Random()
        self.session = board_engine.reset(self.rng)

    def _get_observation(self):
        """convert the session's board to an observation"""
        return np.array(board_engine.board_values(self.session.board), dtype=np.int32)

    def get_afterstate(self, action):
        """
        get the afterstate: board after the slide/merge but before the random tile

        leaves the environment untouched.

        returns:
            afterstate_board: board after move (None if the move is rejected)
            reward: points earned from merging
            valid: if the move was valid
        """
        direction = self.action_to_direction[int(action)]
        if self.session.is_game_over:
            return None, 0, False

        board, moved, points, _ = board_engine.slide_board(self.session.board, direction)
        if not moved:
            return None, 0, False

        afterstate_board = np.array(board_engine.board_values(board), dtype=np.int32)
        return afterstate_board, points, True

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        # derive the engine's rng from gymnasium's seeded generator
        self.rng = random.Random(int(self.np_random.integers(0, 2 ** 32)))
        self.session = board_engine.reset(self.rng)

        observation = self._get_observation()

        # return observation and info (required by Gymnasium)
        info = {"score": self.session.score}

        return observation, info

    def step(self, action):
        """take one step in the environment"""
        direction = self.action_to_direction[int(action)]

        result = board_engine.move(self.session, direction, self.rng)
        self.session = result.session

        reward = float(result.points)
        observation = self._get_observation()

        terminated = self.session.is_game_over
        truncated = False

        info = {
            "score": self.session.score,
            "moved": result.moved,
            "points_gained": result.points,
            "max_tile": int(np.max(observation)),
            "won": self.session.is_won,
            "spawned_id": result.spawned_id,
        }

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def render(self):
        """display the game state"""
        text = board_engine.format_board(self.session)
        if self.render_mode == "ansi":
            return text
        print(text)

    def close(self):
        """clean up resources"""
        pass
