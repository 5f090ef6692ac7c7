from __future__ import annotations

import os
from typing import Mapping, Optional

from .exceptions import CredentialsError
from .models import Credentials

APIHOST_ENV = "__OW_API_HOST"
API_KEY_ENV = "__OW_API_KEY"
NAMESPACE_ENV = "__OW_NAMESPACE"


def get_credentials_from_environment(
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    env = os.environ if environ is None else environ

    values = {
        "apihost": env.get(APIHOST_ENV, "").strip(),
        "api_key": env.get(API_KEY_ENV, "").strip(),
        "namespace": env.get(NAMESPACE_ENV, "").strip(),
    }
    names = {"apihost": APIHOST_ENV, "api_key": API_KEY_ENV, "namespace": NAMESPACE_ENV}
    missing = [names[key] for key, value in values.items() if not value]
    if missing:
        raise CredentialsError(missing)

    return Credentials(**values)
