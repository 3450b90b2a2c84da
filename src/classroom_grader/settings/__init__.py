"""
Settings for the classroom grader.

Example:
    ```python
    from classroom_grader.settings import GraderSettings

    settings = GraderSettings.load()
    print(settings.github_classroom_org)
    ```
"""

from classroom_grader.settings.config import GraderSettings

__all__ = [
    "GraderSettings",
]
