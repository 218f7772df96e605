"""
Training script for the arena environment using Stable-Baselines3 PPO
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from arena import ArenaEnv
from rl.configs.arena_config import PPO_CONFIG, TRAINING_CONFIG, make_env_kwargs
from rl.metrics_callback import MetricsCallback


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None):
    """Factory function to create the environment"""
    def _init():
        env = ArenaEnv(**make_env_kwargs(render_mode))
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train_ppo(
    total_timesteps: int = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: Optional[str] = "./tensorboard_logs/ppo",
    n_envs: int = None,
):
    """Train PPO agent on the arena environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    if n_envs is None:
        n_envs = TRAINING_CONFIG["n_envs"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments")
    print(f"{'='*60}\n")

    # Vectorized training envs with normalized observations and rewards
    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix="ppo_arena",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name="ppo",
        verbose=1,
    )

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback],
    )

    final_path = os.path.join(save_dir, "ppo_arena_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"PPO Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train a PPO agent on the arena shooter")
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total training timesteps (default: {TRAINING_CONFIG['total_timesteps']:,})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=None,
        help=f"Number of parallel environments (default: {TRAINING_CONFIG['n_envs']})",
    )
    parser.add_argument(
        "--save-dir",
        type=str,
        default=os.path.join(TRAINING_CONFIG["model_dir"], "ppo"),
        help="Directory for checkpoints and the final model",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=os.path.join(TRAINING_CONFIG["log_dir"], "ppo"),
        help="Directory for evaluation logs and the metrics CSV",
    )
    parser.add_argument(
        "--no-tensorboard",
        action="store_true",
        help="Disable TensorBoard logging",
    )

    args = parser.parse_args()

    train_ppo(
        total_timesteps=args.timesteps,
        save_dir=args.save_dir,
        log_dir=args.log_dir,
        tensorboard_log=None if args.no_tensorboard else os.path.join(TRAINING_CONFIG["tensorboard_log"], "ppo"),
        n_envs=args.n_envs,
    )


if __name__ == "__main__":
    main()
