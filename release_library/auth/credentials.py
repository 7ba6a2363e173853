"""GitHub credential resolution.

Looks for a token in a local file first, then in an environment variable.
When neither yields a token the API is used anonymously.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolves an optional GitHub token."""

    def __init__(self, token_file: str | Path, env_var: str = "GITHUB_TOKEN") -> None:
        self.token_file = Path(token_file)
        self.env_var = env_var

    def resolve(self) -> str | None:
        """Return the first token found, or None for anonymous access."""
        try:
            if self.token_file.exists():
                logger.info(f"Using GitHub token from file: {self.token_file}")
                token = self.token_file.read_text(encoding="ascii").strip()
                if token:
                    return token
                logger.warning(f"Token file {self.token_file} is empty")

            token = os.environ.get(self.env_var)
            if token:
                logger.info(f"Using GitHub token from {self.env_var} env var")
                return token

            logger.warning("No GitHub creds found. API calls will be anonymous.")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading GitHub creds: {e}. API calls will be anonymous.")

        return None
