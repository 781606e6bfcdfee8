"""HTTP client for the cluster API server.

This module provides:
- APIError and subclasses: Errors raised by the resource store
- ClusterClient: Protocol of the resource store used by the metadata engine
- HTTPClusterClient: httpx implementation for data.fluid.io/v1alpha1 datasets
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import httpx

from datasetsync.core.types import Dataset

if TYPE_CHECKING:
    from datasetsync.core.config import ClusterConfig
    from datasetsync.core.types import NamespacedName

logger = logging.getLogger(__name__)

DATASET_GROUP = "data.fluid.io"
DATASET_VERSION = "v1alpha1"
DATASET_PLURAL = "datasets"


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(APIError):
    """Authentication failed."""


class FetchError(APIError):
    """Resource could not be fetched."""


class NotFoundError(FetchError):
    """Resource not found."""


class ConflictError(APIError):
    """Resource version changed since it was fetched."""


class ClusterClient(Protocol):
    """Resource store used by the metadata engine."""

    def get(self, key: NamespacedName) -> Dataset:
        """Fetch a dataset by key.

        Raises:
            NotFoundError: If the dataset does not exist.
            FetchError: If the store could not be reached.
        """
        ...

    def update_status(self, dataset: Dataset) -> Dataset:
        """Submit the status of a previously fetched dataset.

        Raises:
            ConflictError: If the stored resource version changed.
        """
        ...


class HTTPClusterClient:
    """httpx client for Dataset resources on a Kubernetes-style API server."""

    def __init__(self, config: ClusterConfig) -> None:
        """Initialize the cluster client.

        Args:
            config: API server configuration.
        """
        self._config = config
        self._client = httpx.Client(
            base_url=config.api_url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            headers={"Authorization": f"Bearer {config.token}"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> HTTPClusterClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()

    def _dataset_path(self, key: NamespacedName) -> str:
        return (
            f"/apis/{DATASET_GROUP}/{DATASET_VERSION}"
            f"/namespaces/{key.namespace}/{DATASET_PLURAL}/{key.name}"
        )

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Handle API response and raise appropriate exceptions."""
        if response.status_code in (401, 403):
            raise AuthenticationError("Invalid or unauthorized token", response.status_code)
        if response.status_code == 404:
            raise NotFoundError("Resource not found", 404)
        if response.status_code == 409:
            raise ConflictError(self._error_message(response, "Conflict"), 409)
        if response.status_code >= 400:
            raise APIError(
                self._error_message(response, "Unknown error"), response.status_code
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        try:
            return str(response.json().get("message", default))
        except ValueError:
            return default

    def get(self, key: NamespacedName) -> Dataset:
        """Fetch a dataset by key.

        Args:
            key: Namespace and name of the dataset.

        Returns:
            The dataset resource.

        Raises:
            NotFoundError: If the dataset does not exist.
            FetchError: If the API server could not be reached or failed
                (5xx, 429).
        """
        try:
            response = self._client.get(self._dataset_path(key))
        except httpx.RequestError as e:
            raise FetchError(f"Failed to fetch dataset {key}: {e}") from e

        try:
            response = self._handle_response(response)
        except (AuthenticationError, FetchError, ConflictError):
            raise
        except APIError as e:
            if e.status_code is not None and (e.status_code >= 500 or e.status_code == 429):
                raise FetchError(f"Failed to fetch dataset {key}: {e}", e.status_code) from e
            raise
        return Dataset.from_dict(response.json())

    def update_status(self, dataset: Dataset) -> Dataset:
        """Replace the status subresource of a dataset.

        The resource version of ``dataset`` is sent along, so the API server
        rejects the update when the dataset changed since it was fetched.

        Args:
            dataset: Dataset carrying the new status.

        Returns:
            The updated dataset as stored by the server.

        Raises:
            ConflictError: If the resource version is stale.
            NotFoundError: If the dataset was deleted.
            APIError: If the API server could not be reached.
        """
        try:
            response = self._client.put(
                f"{self._dataset_path(dataset.key)}/status",
                json=dataset.to_dict(),
            )
        except httpx.RequestError as e:
            raise APIError(f"Failed to update dataset {dataset.key}: {e}") from e
        response = self._handle_response(response)
        logger.debug(f"Updated status of dataset {dataset.key}")
        return Dataset.from_dict(response.json())
