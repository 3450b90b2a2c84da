"""
CLI for the classroom grader.
"""

from classroom_grader.cli.main import cli

__all__ = ["cli"]
