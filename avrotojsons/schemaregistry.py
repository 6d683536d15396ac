"""
Client for fetching Avro schemas from a Confluent-compatible schema registry.
"""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from avrotojsons.errors import AvroToJsonsError

logger = logging.getLogger(__name__)

LATEST_VERSION = 'latest'


class SchemaRegistryError(AvroToJsonsError):
    """
    Raised when a schema cannot be fetched from the registry.
    """


class SchemaRegistryClient:
    """
    Fetches the raw schema text of a subject version from a schema registry.
    """

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url[:-1] if base_url.endswith('/') else base_url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def schema_url(self, subject: str, version: str | int = LATEST_VERSION) -> str:
        """
        Build the URL of the schema of a subject version.

        Args:
            subject (str): The subject name; it is URL-encoded.
            version (str | int): A positive version number or 'latest'.

        Raises:
            ValueError: If the version is neither 'latest' nor a positive integer.
        """
        version = str(version)
        if version != LATEST_VERSION and not (version.isdigit() and int(version) > 0):
            raise ValueError(f"Schema version must be a positive integer or '{LATEST_VERSION}', not '{version}'")
        return f"{self.base_url}/subjects/{quote(subject, safe='')}/versions/{version}/schema"

    def fetch_schema(self, subject: str, version: str | int = LATEST_VERSION) -> str:
        """
        Fetch the schema text of a subject version.

        Args:
            subject (str): The subject name.
            version (str | int): A positive version number or 'latest'.

        Returns:
            str: The schema text as returned by the registry.

        Raises:
            SchemaRegistryError: If the request fails or the registry does not answer with HTTP 200.
        """
        url = self.schema_url(subject, version)
        logger.info("Fetching schema for subject '%s' version '%s' from %s", subject, version, self.base_url)
        try:
            response = self.session.get(url, headers={'Accept': 'application/json'}, timeout=self.timeout)
        except requests.RequestException as e:
            raise SchemaRegistryError(f"Failed to reach schema registry at {self.base_url}",
                                      context=f"subject '{subject}' version '{version}'", cause=e) from e
        if response.status_code != 200:
            raise SchemaRegistryError(
                f"Schema Registry returned HTTP {response.status_code} for subject '{subject}' version '{version}'")
        return response.text
