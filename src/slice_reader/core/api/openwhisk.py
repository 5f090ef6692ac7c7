"""
Async client for the OpenWhisk action invocation API.
Submits non-blocking invocations and polls for their activation records.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

from ...config import DEFAULT_ACTIVATION_TIMEOUT, DEFAULT_POLL_INTERVAL
from ..exceptions import InvocationError
from ..models import Activation, Credentials
from ..utils.backoff import BackoffStrategy, get_backoff_delay
from ..utils.http import get_openwhisk_httpx_client

log = logging.getLogger(__name__)

API_PREFIX = "/api/v1/namespaces"


class OpenWhiskClient:
    """
    OpenWhisk client for invoking actions and awaiting their activations.

    Invocations are always non-blocking: ``invoke`` returns an activation id
    as soon as the controller accepts the request, and ``wait_for_activation``
    polls until the activation record exists or the wait budget runs out.
    An abandoned activation keeps running on the backend.
    """

    def __init__(
        self,
        credentials: Credentials,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        backoff_strategy: BackoffStrategy = BackoffStrategy.FIXED,
        timeout: Optional[float] = None,
    ):
        self.credentials = credentials
        self.poll_interval = poll_interval
        self.backoff_strategy = backoff_strategy
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the authenticated HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = get_openwhisk_httpx_client(
                self.credentials, timeout=self.timeout
            )
        return self._client

    def _split_action_name(self, action_name: str) -> Tuple[str, str]:
        """Split a possibly fully-qualified action name into namespace and path."""
        if action_name.startswith("/"):
            namespace, _, action = action_name.lstrip("/").partition("/")
            if not action:
                raise ValueError(f"Invalid action name: {action_name}")
            return namespace, action
        return self.credentials.namespace or "_", action_name

    async def invoke(
        self, action_name: str, params: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Submit a non-blocking invocation and return its activation id.
        """
        namespace, action = self._split_action_name(action_name)
        url = f"{API_PREFIX}/{quote(namespace)}/actions/{quote(action)}"

        log.debug(f"Invoking {action_name} with params {params}")

        client = await self._get_client()
        try:
            response = await client.post(
                url,
                params={"blocking": "false"},
                json=params or {},
            )
        except httpx.HTTPError as e:
            raise InvocationError(f"Failed to invoke {action_name}: {e}") from e

        if response.status_code >= 400:
            raise InvocationError(
                f"Invocation of {action_name} failed: "
                f"{response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            activation_id = response.json().get("activationId")
        except (ValueError, AttributeError) as e:
            raise InvocationError(
                f"Malformed invocation response for {action_name}: {response.text[:200]}"
            ) from e
        if not activation_id:
            raise InvocationError(
                f"No activation id in response for {action_name}: {response.text[:200]}"
            )

        log.debug(f"{action_name} | Activation:{activation_id}")
        return activation_id

    async def get_activation(self, activation_id: str) -> Optional[Activation]:
        """
        Fetch an activation record; None while it is not available yet.
        """
        namespace = quote(self.credentials.namespace or "_")
        url = f"{API_PREFIX}/{namespace}/activations/{quote(activation_id)}"

        client = await self._get_client()
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise InvocationError(
                f"Failed to fetch activation {activation_id}: {e}"
            ) from e

        if response.status_code == 404:
            return None

        if response.status_code >= 400:
            raise InvocationError(
                f"Activation {activation_id} lookup failed: "
                f"{response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return Activation.model_validate(response.json())
        except ValueError as e:
            raise InvocationError(
                f"Malformed activation record for {activation_id}: {e}"
            ) from e

    async def _poll_activation(self, activation_id: str) -> Activation:
        attempt = 0
        while True:
            activation = await self.get_activation(activation_id)
            if activation is not None:
                return activation

            await asyncio.sleep(
                get_backoff_delay(
                    attempt,
                    base=self.poll_interval,
                    strategy=self.backoff_strategy,
                )
            )
            attempt += 1

    async def wait_for_activation(
        self,
        activation_id: str,
        on_progress: Optional[Callable[[], None]] = None,
        timeout: float = DEFAULT_ACTIVATION_TIMEOUT,
    ) -> Optional[Activation]:
        """
        Wait for an activation to complete.

        Args:
            activation_id: Id returned by ``invoke``.
            on_progress: Called once before polling begins.
            timeout: Wait budget in seconds.

        Returns:
            The activation record, or None if it did not complete in time.

        Raises:
            InvocationError: If a lookup fails with anything other than 404.
        """
        if on_progress is not None:
            on_progress()

        try:
            return await asyncio.wait_for(
                self._poll_activation(activation_id), timeout=timeout
            )
        except asyncio.TimeoutError:
            log.debug(f"Activation:{activation_id} | not complete after {timeout}s")
            return None

    async def invoke_and_wait(
        self,
        action_name: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: float = DEFAULT_ACTIVATION_TIMEOUT,
        on_progress: Optional[Callable[[], None]] = None,
    ) -> Optional[Activation]:
        """Invoke an action and wait for its activation."""
        activation_id = await self.invoke(action_name, params)
        return await self.wait_for_activation(
            activation_id, on_progress=on_progress, timeout=timeout
        )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
