"""
Test configuration and fixtures for slice-reader tests.

Provides shared fixtures for:
- OpenWhisk credentials
- In-memory zip archives with Unix permission bits
- Isolated cache roots
- A fake OpenWhisk client for orchestrator tests
"""

import io
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from slice_reader.core.models import Activation, Credentials
from slice_reader.runtime.cache import SliceCache


def build_zip(entries: List[Tuple[str, bytes, int]]) -> bytes:
    """Build a zip buffer from (name, data, mode) tuples.

    Names ending in "/" become directory entries.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data, mode in entries:
            info = zipfile.ZipInfo(name)
            if name.endswith("/"):
                info.external_attr = (0o40000 | mode) << 16 | 0x10
            else:
                info.external_attr = (0o100000 | mode) << 16
            zf.writestr(info, data)
    return buffer.getvalue()


def make_activation(
    success: bool = True,
    result: Optional[Dict[str, Any]] = None,
    activation_id: str = "act-123",
) -> Activation:
    return Activation.model_validate(
        {
            "activationId": activation_id,
            "response": {
                "status": "success" if success else "application error",
                "success": success,
                "result": result or {},
            },
        }
    )


class FakeOpenWhiskClient:
    """Stands in for OpenWhiskClient; records every invocation."""

    def __init__(
        self,
        activation: Optional[Activation] = None,
        invoke_error: Optional[Exception] = None,
        wait_error: Optional[Exception] = None,
    ):
        self.activation = activation
        self.invoke_error = invoke_error
        self.wait_error = wait_error
        self.invocations: List[Tuple[str, Dict[str, Any]]] = []
        self.progress_calls = 0
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    async def invoke(self, action_name: str, params: Dict[str, Any]) -> str:
        self.invocations.append((action_name, params))
        if self.invoke_error:
            raise self.invoke_error
        return "act-123"

    async def wait_for_activation(
        self,
        activation_id: str,
        on_progress: Optional[Callable[[], None]] = None,
        timeout: float = 60,
    ) -> Optional[Activation]:
        if on_progress:
            on_progress()
            self.progress_calls += 1
        if self.wait_error:
            raise self.wait_error
        return self.activation

    async def invoke_and_wait(
        self,
        action_name: str,
        params: Dict[str, Any],
        timeout: float = 60,
        on_progress: Optional[Callable[[], None]] = None,
    ) -> Optional[Activation]:
        activation_id = await self.invoke(action_name, params)
        return await self.wait_for_activation(activation_id, on_progress, timeout)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        apihost="https://ow.example.com",
        api_key="user-id:secret",
        namespace="my-namespace",
    )


@pytest.fixture
def cache(tmp_path: Path) -> SliceCache:
    """Provide a SliceCache rooted in a temporary directory."""
    return SliceCache(tmp_path / "slices")


@pytest.fixture
def sample_archive() -> bytes:
    return build_zip(
        [
            ("index.js", b"module.exports = {}\n", 0o644),
            ("lib/", b"", 0o755),
            ("lib/util.js", b"#!/usr/bin/env node\n", 0o755),
        ]
    )


@pytest.fixture
def zip_builder() -> Callable[[List[Tuple[str, bytes, int]]], bytes]:
    return build_zip


@pytest.fixture
def activation_factory() -> Callable[..., Activation]:
    return make_activation


@pytest.fixture
def fake_openwhisk() -> Callable[..., FakeOpenWhiskClient]:
    return FakeOpenWhiskClient
