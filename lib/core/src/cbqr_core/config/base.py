# region Docstring
"""
cbqr_core.config.base

Environment detection and application root resolution.

Overview:
- Provides a utility class for detecting the current application environment
    (production, Docker, or development) based on environment variables or
    path-based heuristics.
- Exposes module-level constants for the application root directory and the
    detected environment, used by the settings factory to locate YAML files
    and by settings classes to build default paths.

Contents:
- Classes:
    - AppEnv:
        Class methods to determine the current environment and the application
        root directory.

- Module-level Constants:
    - APP_ROOT (Path): The resolved root directory of the application.
    - APP_ENV (Literal["prod", "docker", "dev"]): The detected application environment.

Environment Detection Logic:
- Priority 1: Checks the ENVIRONMENT environment variable for explicit configuration.
- Priority 2: Falls back to path-based detection:
    - Paths starting with "/app" indicate Docker environment.
    - Paths starting with "/srv" indicate production environment.
    - All other paths default to development environment.
- CBQR_ROOT, when set, overrides the working directory as the application root.
"""
# endregion
# region Imports
import os
from pathlib import Path
from typing import Literal

# endregion
# region AppEnv Class


class AppEnv:
    """
    Application environment detection utility.

    Attributes:
        PROD (Literal["prod"]): Constant representing the production environment.
        DOCKER (Literal["docker"]): Constant representing the Docker environment.
        DEV (Literal["dev"]): Constant representing the development environment.
    """

    PROD: Literal["prod"] = "prod"
    DOCKER: Literal["docker"] = "docker"
    DEV: Literal["dev"] = "dev"

    @classmethod
    def environment(cls) -> Literal["prod", "docker", "dev"]:
        """Determine the current application environment."""
        if os.getenv("ENVIRONMENT") in {cls.PROD, cls.DOCKER, cls.DEV}:
            return os.getenv("ENVIRONMENT")

        calling_path = Path.cwd().as_posix()
        if calling_path.startswith("/app"):
            return cls.DOCKER
        elif calling_path.startswith("/srv"):
            return cls.PROD
        else:
            return cls.DEV

    @classmethod
    def app_root(cls) -> Path:
        """Get the application root directory."""
        override = os.getenv("CBQR_ROOT")
        if override:
            return Path(override).expanduser().resolve()
        return Path.cwd().resolve()


# endregion
# region Module-level Constants

APP_ROOT: Path = AppEnv.app_root()
"""[Path] Root directory of the application."""
APP_ENV: Literal["prod", "docker", "dev"] = AppEnv.environment()
"""[Literal] Environment type."""
# endregion


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "AppEnv",
]
