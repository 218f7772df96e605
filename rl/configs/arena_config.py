"""
Training configuration for the arena environment
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "dt": 1/30,
    "max_steps": 1800,  # 60 seconds at 30 FPS
    "k_enemies": 5,
}

# Game tunables forwarded to GameConfig (empty = defaults from arena.config)
GAME_OVERRIDES = {}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_KILL": 1.0,       # Reward for killing an enemy (score +10)
    "R_HIT": 0.2,        # Reward for landing a bullet
    "R_DAMAGE": 0.05,    # Penalty per health point lost (contact = 12)
    "R_SHOT": 0.01,      # Penalty for shooting (encourage accuracy)
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 5.0,      # Death penalty
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "n_envs": 4,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def make_env_kwargs(render_mode=None):
    """Keyword arguments for ArenaEnv built from the dictionaries above"""
    kwargs = dict(ENV_CONFIG)
    kwargs["render_mode"] = render_mode
    kwargs["game_config"] = dict(GAME_OVERRIDES)
    kwargs["reward_config"] = dict(REWARD_CONFIG)
    return kwargs
