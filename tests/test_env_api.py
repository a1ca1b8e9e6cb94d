"""
Tests for Gymnasium environment API.
"""

import dataclasses

import pytest
import numpy as np

from fruit_catcher.catcher_core.config_loader import load_config
from fruit_catcher.catcher_core.env_gym import LaneCatcherEnv


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = LaneCatcherEnv()
    yield env
    env.close()


class TestLaneCatcherEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["delta_score"] == 0
        assert info["lives"] == 3

    def test_observation_structure(self, env):
        """Observation should have expected keys and shapes."""
        obs, _ = env.reset(seed=42)

        for key in ("player_lane", "score", "level", "lives", "multiplier",
                    "multiplier_remaining", "missed_count", "items_count"):
            assert key in obs
            assert obs[key].shape == ()

        max_items = env.config.env.max_items
        for key in ("item_kind", "item_lane", "item_position", "item_mask"):
            assert obs[key].shape == (max_items,)

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        for _ in range(50):
            obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            if terminated or truncated:
                break

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(1)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert isinstance(info, dict)

    def test_reward_is_always_zero(self, env):
        env.reset(seed=42)

        for i in range(100):
            _, reward, terminated, truncated, _ = env.step(i % 3)
            assert reward == 0.0
            if terminated or truncated:
                env.reset()

    def test_step_advances_frames(self, env):
        env.reset(seed=42)
        _, _, _, _, info = env.step(0)

        assert info["frame"] == env.config.env.frames_per_step
        assert info["frames_run"] == env.config.env.frames_per_step

    def test_action_selects_lane(self, env):
        env.reset(seed=42)

        obs, *_ = env.step(0)
        assert int(obs["player_lane"]) == 0

        obs, *_ = env.step(np.array(2))
        assert int(obs["player_lane"]) == 2

    def test_invalid_action(self, env):
        env.reset(seed=42)
        with pytest.raises(ValueError):
            env.step(3)

    def test_truncation_at_frame_cap(self, config):
        caps = dataclasses.replace(config.caps, max_frames=40)
        env = LaneCatcherEnv(config=dataclasses.replace(config, caps=caps))
        env.reset(seed=42)

        truncated = False
        steps = 0
        while not truncated:
            _, _, terminated, truncated, info = env.step(1)
            assert not terminated
            steps += 1

        assert steps == 10
        assert info["frame"] == 40
        env.close()

    def test_terminates_on_game_over(self, env):
        env.reset(seed=42)
        game = env.game
        game.state.lives = 1
        game.force_spawn("BOMB", position=89.0)

        _, _, terminated, truncated, info = env.step(1)

        assert terminated
        assert not truncated
        assert info["game_over"]
        assert info["lives"] == 0

    def test_deterministic_with_seed(self):
        """Same seed and actions should produce identical episodes."""
        env1 = LaneCatcherEnv()
        env2 = LaneCatcherEnv()

        obs1, _ = env1.reset(seed=123)
        obs2, _ = env2.reset(seed=123)

        for i in range(200):
            action = (i // 7) % 3
            obs1, _, term1, trunc1, _ = env1.step(action)
            obs2, _, term2, trunc2, _ = env2.step(action)
            for key in obs1:
                np.testing.assert_array_equal(obs1[key], obs2[key])
            assert term1 == term2
            if term1 or trunc1:
                break

        env1.close()
        env2.close()

    def test_render_ansi(self, config):
        env = LaneCatcherEnv(render_mode="ansi")
        env.reset(seed=1)
        for _ in range(20):
            env.step(1)

        frame = env.render()

        assert isinstance(frame, str)
        assert "score=" in frame
        assert "\\_/" in frame
        env.close()

    def test_render_none_headless(self, env):
        env.reset(seed=1)
        assert env.render() is None

    def test_unsupported_render_mode(self):
        with pytest.raises(ValueError):
            LaneCatcherEnv(render_mode="human")
