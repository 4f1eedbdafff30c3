"""
Retrieval of parameters and secrets needed to configure clients.

Values are read from environment variables first. When running as a Lambda,
missing values are fetched from AWS Parameter Store through the AWS
Parameters and Secrets Lambda extension, which listens on localhost.
"""
import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

import requests

logger = logging.getLogger(__name__)

AWS_TOKEN_HEADER = "X-Aws-Parameters-Secrets-Token"


class ParameterError(Exception):
    """Parameter could not be retrieved."""


class ParamStore(ABC):
    """Source of configuration parameters."""

    @abstractmethod
    def parameter(self, name: str, with_decryption: bool = False) -> str:
        """Return the parameter with the given name."""

    def parameter_from_env(self, env_variable: str, name: str, with_decryption: bool = False) -> str:
        """
        Return the environment variable if set, otherwise the stored parameter.

        Args:
            env_variable: Environment variable checked first
            name: Parameter name used as fallback
            with_decryption: Whether a secure parameter should be decrypted

        Returns:
            Parameter value
        """
        value = os.getenv(env_variable)
        if value is not None:
            return value

        logger.debug(
            f"{env_variable} not set, retrieving {name} from parameter store (decryption: {with_decryption})"
        )
        return self.parameter(name, with_decryption)


class EnvParamStore(ParamStore):
    """Parameter store backed only by environment variables."""

    def parameter(self, name: str, with_decryption: bool = False) -> str:
        value = os.getenv(name)
        if value is None:
            raise ParameterError(f"Parameter {name} is not set")
        return value


class AWSParamStore(ParamStore):
    """AWS Parameter Store, reached through the Lambda extension."""

    def __init__(
        self,
        param_store_url: str,
        token: str,
        env: str,
        timeout: int = 10,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize parameter store client.

        Args:
            param_store_url: Extension GET endpoint
            token: AWS session token used to authenticate with the extension
            env: Label separating parameters of different environments
            timeout: Request timeout in seconds
            session: Optional session (connection pooling)
        """
        self.param_store_url = param_store_url
        self.token = token
        self.env = env
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "AWSParamStore":
        """Create a store from the variables the Lambda runtime provides."""
        port = os.getenv("PARAMETERS_SECRETS_EXTENSION_HTTP_PORT", "2773")
        return cls(
            param_store_url=f"http://localhost:{port}/systemsmanager/parameters/get",
            token=os.getenv("AWS_SESSION_TOKEN", ""),
            env=os.getenv("ZANA_ENV", "dev"),
        )

    def parameter(self, name: str, with_decryption: bool = False) -> str:
        params = {
            "name": name,
            "label": self.env,
            "withDecryption": str(with_decryption).lower(),
        }

        try:
            response = self.session.get(
                self.param_store_url,
                params=params,
                headers={AWS_TOKEN_HEADER: self.token},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Could not send request to parameter store: {e}")
            raise ParameterError(f"Could not retrieve parameter {name}") from e

        if response.status_code != 200:
            logger.error(
                f"Received response with {response.status_code} from parameter store: {response.text}"
            )
            raise ParameterError(f"Could not retrieve parameter {name}")

        try:
            return response.json()["Parameter"]["Value"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Could not read parameter response: {e}")
            raise ParameterError(f"Could not retrieve parameter {name}") from e
