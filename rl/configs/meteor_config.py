"""
Training configuration for the meteor environment
"""

# Game parameters (GameConfig fields)
GAME_CONFIG = {
    "viewport_width": 400,
    "viewport_height": 800,
    "projectile_speed": 12.0,
    "hazard_speed": 6.0,
    "tilt_sensitivity": 20.0,
    "tick_interval": 0.016,
    "spawn_interval": 0.9,
}

# Environment parameters (MeteorEnv kwargs other than config)
ENV_CONFIG = {
    "max_steps": 3600,  # 60 seconds at ~60 ticks/s
    "k_hazards": 5,
    "fire_cooldown_steps": 6,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "reward_hit": 1.0,         # Meteor destroyed
    "reward_alive": 0.001,     # Per tick survived
    "reward_shot": 0.01,       # Per fireball (encourage aiming)
    "reward_game_over": 5.0,   # Meteor landed or hit the cannon
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
