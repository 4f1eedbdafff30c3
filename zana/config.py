"""Configuration management."""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from zana.params import EnvParamStore, ParamStore

# Load environment variables
load_dotenv()

GOOGLE_BOOKS_API_KEY_PARAM = "/zana/googlebooks/api_key"


@dataclass(frozen=True)
class GoogleBooksConfig:
    """Settings for the Google Books client."""
    api_key: str
    api_url: str = "https://www.googleapis.com"
    timeout: float = 30.0
    connect_timeout: float = 30.0


@dataclass(frozen=True)
class OpenLibraryConfig:
    """Settings for the Open Library client. No API key is required."""
    api_url: str = "https://openlibrary.org"
    timeout: float = 30.0
    connect_timeout: float = 30.0


@dataclass(frozen=True)
class Config:
    """Application configuration."""
    googlebooks: GoogleBooksConfig
    openlibrary: OpenLibraryConfig

    @classmethod
    def from_env(cls, param_store: Optional[ParamStore] = None) -> "Config":
        """
        Build configuration from environment variables.

        Args:
            param_store: Used for the Google Books API key when it is not
                set in the environment, defaults to the environment only

        Returns:
            Config instance
        """
        timeout = float(os.getenv("DEFAULT_TIMEOUT", "30"))
        connect_timeout = float(os.getenv("DEFAULT_CONNECT_TIMEOUT", "30"))

        param_store = param_store or EnvParamStore()
        api_key = param_store.parameter_from_env(
            "GOOGLE_BOOKS_API_KEY", GOOGLE_BOOKS_API_KEY_PARAM, with_decryption=True
        )

        return cls(
            googlebooks=GoogleBooksConfig(
                api_key=api_key,
                api_url=os.getenv("GOOGLE_BOOKS_API_URL", "https://www.googleapis.com"),
                timeout=timeout,
                connect_timeout=connect_timeout,
            ),
            openlibrary=OpenLibraryConfig(
                api_url=os.getenv("OPENLIBRARY_API_URL", "https://openlibrary.org"),
                timeout=timeout,
                connect_timeout=connect_timeout,
            ),
        )
