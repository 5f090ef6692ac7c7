from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """OpenWhisk credentials for the invoking namespace."""

    apihost: str
    api_key: str = Field(repr=False)
    namespace: str


class ActivationResponse(BaseModel):
    status: Optional[str] = None
    statusCode: Optional[int] = None
    success: bool = False
    result: Optional[Dict[str, Any]] = None


class Activation(BaseModel):
    """Activation record returned by OpenWhisk once an invocation completes."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    activation_id: str = Field(alias="activationId")
    name: Optional[str] = None
    namespace: Optional[str] = None
    response: Optional[ActivationResponse] = None

    @property
    def succeeded(self) -> bool:
        return bool(self.response and self.response.success)

    def result_field(self, key: str) -> Optional[Any]:
        if not self.response or not self.response.result:
            return None
        return self.response.result.get(key)


class Slice(BaseModel):
    """A named build artifact, optionally cached at local_path."""

    name: str
    local_path: Optional[Path] = None

    def __str__(self) -> str:
        return f"Slice:{self.name}"
