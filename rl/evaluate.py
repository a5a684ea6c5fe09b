"""
Evaluation script for trained Space Defender agents
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.defender import DefenderEnv
from rl.configs.defender_config import make_env_kwargs
from rl.train import MultiDiscreteToDiscreteWrapper


def _summarize(label: str, rewards, lengths, scores) -> dict:
    results = {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "episode_rewards": list(rewards),
        "episode_lengths": list(lengths),
        "episode_scores": list(scores),
    }
    print("\n" + "="*50)
    print(f"{label} ({len(rewards)} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Mean Score: {results['mean_score']:.1f}  Best: {max(scores)}")
    print("="*50)
    return results


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
    reward_name: str = "baseline",
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the game window
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
        reward_name: Reward config the model was trained with
    """

    if algo == "ppo":
        model = PPO.load(model_path)
    elif algo == "dqn":
        model = DQN.load(model_path)
    else:
        raise ValueError(f"Unknown algorithm: {algo}")

    base_env = DefenderEnv(render_mode="human" if render else None, **make_env_kwargs(reward_name))
    wrapped = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env
    env = DummyVecEnv([lambda: wrapped])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards, episode_lengths, episode_scores = [], [], []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0
        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            if render:
                time.sleep(1 / base_env.metadata["render_fps"])
            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info[0].get("score", 0))

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, "
              f"Score = {info[0].get('score', 0)}, Level = {info[0].get('level', 1)}")

    env.close()
    return _summarize("Evaluation Results", episode_rewards, episode_lengths, episode_scores)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None, reward_name: str = "baseline"):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = DefenderEnv(render_mode=None, **make_env_kwargs(reward_name))
    env.action_space.seed(seed)

    episode_rewards, episode_lengths, episode_scores = [], [], []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])

    env.close()
    return _summarize("Random Policy Results", episode_rewards, episode_lengths, episode_scores)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained Space Defender agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn"],
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="baseline",
        choices=["baseline", "survival", "aggressive"],
        help="Reward config used during training (default: baseline)",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
        reward_name=args.reward,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
            reward_name=args.reward,
        )
        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
