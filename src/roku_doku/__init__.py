"""Roku Doku: a 9x9 block-placement puzzle with an exhaustive move planner."""

__version__ = "0.1.0"
