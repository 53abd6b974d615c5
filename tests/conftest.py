"""Root test configuration: isolate config lookup and share a function registry"""

import pytest

from promptmd.core.models import FunctionSpec
from promptmd.registry import FunctionRegistry


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Run each test in an empty directory with no PROMPTMD_* env vars set."""
    monkeypatch.chdir(tmp_path)
    for name in ("APP_NAME", "REGISTRY_PATH", "ID_GRAMMAR", "LOG_LEVEL", "JSON_INDENT"):
        monkeypatch.delenv(f"PROMPTMD_{name}", raising=False)


@pytest.fixture(name="registry")
def registry_fixture():
    return FunctionRegistry.of([
        FunctionSpec(
            id="xyz98765-wxyz-4321-lmno-pqrstuvwxyza",
            internal_id="fn_send_email",
            description="Send Email - Sends a follow-up email to the client",
        ),
        FunctionSpec(
            id="abc12345-def6-7890-ghij-klmnopqrstuv",
            internal_id="fn_schedule",
            description="Schedule Meeting - Books a meeting slot",
        ),
        FunctionSpec(
            id="3f2b8c1e-9a4d-4e6f-8b2a-1c5d7e9f0a3b",
            internal_id="fn_lookup",
            description="lookup customer",
        ),
    ])
