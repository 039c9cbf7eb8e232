import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client() -> TestClient:
    from webdotmd.main import app

    return TestClient(app)


@pytest.fixture(autouse=True)
def _clear_in_memory_stores():
    # Ensure deterministic tests across runs.
    from webdotmd.services import site_builder

    site_builder._task_store.clear()
    yield


@pytest.fixture()
def parser():
    from webdotmd.document import DocumentParser

    return DocumentParser(sentinel=":content:", list_indent=4)
