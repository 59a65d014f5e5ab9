"""Reinforcement-learning entry points built on the gymnasium environment."""
