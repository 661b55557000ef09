import pytest
from main import app_state


@pytest.fixture(autouse=True)
def reset_app_state():
    """Reset all shared state before each test to prevent cross-test contamination."""
    app_state["list_configs"] = {}
    app_state["priority_lists"] = {}

    yield

    app_state["priority_lists"] = {}
