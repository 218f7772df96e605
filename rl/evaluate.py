"""
Evaluation script for trained arena agents
"""

import time
import argparse
from typing import Optional

import numpy as np

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from arena import ArenaEnv
from rl.configs.arena_config import make_env_kwargs


def evaluate_model(
    model_path: str,
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained PPO model

    Args:
        model_path: Path to the saved model
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats
    """
    model = PPO.load(model_path)

    render_mode = "human" if render else None
    base_env = ArenaEnv(**make_env_kwargs(render_mode))
    env = DummyVecEnv([lambda: base_env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    if seed is not None:
        env.seed(seed)

    episode_rewards = []
    episode_scores = []

    for episode in range(n_episodes):
        obs = env.reset()
        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1

            if render:
                time.sleep(1 / 30)

            if done[0]:
                break

        score = info[0].get("score", 0)
        episode_rewards.append(total_reward)
        episode_scores.append(score)
        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {score}, Length = {steps}")

    env.close()
    return _report("Evaluation Results", episode_rewards, episode_scores)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = ArenaEnv(**make_env_kwargs(None))
    env.action_space.seed(seed)

    episode_rewards = []
    episode_scores = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward

        episode_rewards.append(total_reward)
        episode_scores.append(info["score"])

    env.close()
    return _report("Random Policy Results", episode_rewards, episode_scores)


def _report(title, episode_rewards, episode_scores):
    mean_reward = float(np.mean(episode_rewards))
    std_reward = float(np.std(episode_rewards))
    mean_score = float(np.mean(episode_scores))

    print("\n" + "="*50)
    print(f"{title} ({len(episode_rewards)} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Score: {mean_score:.1f}")
    print(f"Max Score: {max(episode_scores)}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_score": mean_score,
        "episode_rewards": episode_rewards,
        "episode_scores": episode_scores,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained arena agent")
    parser.add_argument(
        "model_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the trained model (omit to only run the random baseline)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    if args.model_path is None:
        compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        return

    results = evaluate_model(
        model_path=args.model_path,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
        )

        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
