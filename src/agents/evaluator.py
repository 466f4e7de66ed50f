"""
Agent evaluation for Minesweeper.

Plays a number of games in the environment and reports aggregate
results.
"""
from typing import Any, Dict, Iterator, NamedTuple, Optional

from game import BoardConfig, MinesweeperEnv

from .base_agent import BaseAgent


class EpisodeStep(NamedTuple):
    """One move of a game and what it led to."""

    action: int
    reward: float
    done: bool
    info: Dict[str, Any]


def play_episode(
    env: MinesweeperEnv, agent: BaseAgent, seed: Optional[int] = None
) -> Iterator[EpisodeStep]:
    """
    Play one game, yielding after every move.

    The environment is reset first, so callers can render it between
    moves. The last step yielded has done set.
    """
    observation, _ = env.reset(seed=seed)
    agent.reset()
    done = False

    while not done:
        action = agent.select_action(observation, env.get_action_mask())
        observation, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated
        yield EpisodeStep(action, float(reward), done, info)


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare multiple agents.

    Provides standardized evaluation across different agent types.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (environment default
                if omitted).
            seed: Seed for the first episode's mine layouts.
        """
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.board_config, max_steps=self.max_steps)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            seed = self.seed if episode == 0 else None
            for step in play_episode(env, agent, seed=seed):
                total_reward += step.reward
                total_steps += 1

            if step.info.get("game_state") == "WON":
                wins += 1
            total_revealed += step.info.get("revealed", 0)

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            print(f"Evaluating {name}...")
            results[name] = self.evaluate(agent)
        return results
