"""
Training configuration for the Space Defender environment
Reward shaping variants, algorithm hyperparameters and experiment settings
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "frame_skip": 2,       # 30 decisions/s on the 60 Hz engine
    "max_steps": 1800,     # 60 seconds of play
    "k_enemies": 5,
    "m_power_ups": 2,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# BASELINE: score-proportional rewards, life loss hurts
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Rewards mirror the in-game score, lives cost more than a kill",
    "R_KILL": 1.0,        # enemy shot down (+10 score)
    "R_POWER_UP": 1.0,    # power-up collected (+20 score, +1 life)
    "R_LIFE_LOST": 2.0,   # ram or no-hit penalty
    "R_SHOT": 0.01,       # bullet fired
    "R_TIME": 0.001,      # per step
    "R_DEATH": 5.0,       # game over
}

# SURVIVAL: dodge first, shoot second
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Heavier life/death penalties, smaller combat rewards",
    "R_KILL": 0.5,
    "R_POWER_UP": 2.0,    # extra lives matter most
    "R_LIFE_LOST": 4.0,
    "R_SHOT": 0.005,
    "R_TIME": 0.0,
    "R_DEATH": 10.0,
}

# AGGRESSIVE: the no-hit penalty makes kills the main source of survival
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "High kill reward, cheap shots",
    "R_KILL": 2.0,
    "R_POWER_UP": 1.0,
    "R_LIFE_LOST": 1.0,
    "R_SHOT": 0.0,
    "R_TIME": 0.002,
    "R_DEATH": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
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

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def make_env_kwargs(reward_name: str = "baseline") -> dict:
    """ENV_CONFIG plus the chosen reward shaping"""
    if reward_name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_name}")
    return {**ENV_CONFIG, "reward_config": REWARD_CONFIGS[reward_name]}
