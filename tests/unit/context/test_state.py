"""Tests for versioning context management.

Verifies that the ContextVar-based versioning context provides proper
isolation between concurrent async requests.
"""

import asyncio
from uuid import uuid4

import pytest

from versionable.core.context import (
    bind_versioning_user,
    clear_versioning_context,
    get_auth_user_id,
    get_versioning_context,
    running_in_console,
    set_versioning_context,
)


class TestVersioningContextBasic:
    """Basic tests for versioning context functions."""

    def test_get_context_returns_empty_dict_when_not_set(self):
        """Test that get_versioning_context returns empty dict when not set."""
        assert get_versioning_context() == {}
        assert running_in_console() is True
        assert get_auth_user_id() is None

    def test_set_and_get_context(self):
        """Test setting and getting a request context."""
        user_id = uuid4()

        set_versioning_context(
            user_id=user_id,
            url="http://test/articles?page=2",
            ip_address="192.168.1.1",
            user_agent="Test Agent",
            request_id="req-123",
        )

        context = get_versioning_context()

        assert context["in_request"] is True
        assert context["user_id"] == user_id
        assert context["url"] == "http://test/articles?page=2"
        assert context["ip_address"] == "192.168.1.1"
        assert context["user_agent"] == "Test Agent"
        assert context["request_id"] == "req-123"
        assert running_in_console() is False

    def test_clear_context(self):
        """Test clearing the context returns to console mode."""
        set_versioning_context(user_id=uuid4(), url="http://test/")

        clear_versioning_context()

        assert get_versioning_context() == {}
        assert running_in_console() is True

    def test_get_context_returns_copy(self):
        """Test that get_versioning_context returns a copy, not the original."""
        set_versioning_context(url="http://test/")

        context1 = get_versioning_context()
        context1["modified"] = True

        assert "modified" not in get_versioning_context()

    def test_set_context_overwrites_previous(self):
        """Test that set_versioning_context completely replaces previous context."""
        set_versioning_context(user_id=uuid4(), url="http://test/first")
        set_versioning_context(url="http://test/second")

        context = get_versioning_context()
        assert context["url"] == "http://test/second"
        assert context["user_id"] is None


class TestBindVersioningUser:
    """Tests for bind_versioning_user."""

    def test_bind_user_in_console(self):
        """Test binding a user without a request keeps console mode."""
        bind_versioning_user(7)

        assert get_auth_user_id() == 7
        assert running_in_console() is True

    def test_bind_user_in_request_keeps_request_data(self):
        """Test binding a user preserves the request metadata."""
        set_versioning_context(url="http://test/", ip_address="10.0.0.1")

        bind_versioning_user("user-1")

        context = get_versioning_context()
        assert context["user_id"] == "user-1"
        assert context["url"] == "http://test/"
        assert context["ip_address"] == "10.0.0.1"

    def test_unbind_user(self):
        """Test binding None removes the acting user."""
        bind_versioning_user(7)
        bind_versioning_user(None)

        assert get_auth_user_id() is None


class TestVersioningContextAsyncIsolation:
    """Tests verifying async context isolation."""

    @pytest.mark.asyncio
    async def test_context_isolated_between_tasks(self):
        """Test that context is isolated between concurrent async tasks."""
        results: dict[str, dict] = {}

        async def request(name: str):
            set_versioning_context(url=f"http://test/{name}", request_id=name)
            await asyncio.sleep(0.01)  # Yield control
            results[name] = get_versioning_context()
            clear_versioning_context()

        await asyncio.gather(request("task1"), request("task2"))

        assert results["task1"]["url"] == "http://test/task1"
        assert results["task2"]["url"] == "http://test/task2"

    @pytest.mark.asyncio
    async def test_child_bind_is_visible_to_parent_request(self):
        """Test that binding a user in a child task updates the shared request."""
        set_versioning_context(url="http://test/parent")

        async def auth_dependency():
            bind_versioning_user("user-9")

        await asyncio.create_task(auth_dependency())

        assert get_auth_user_id() == "user-9"

    @pytest.mark.asyncio
    async def test_child_set_does_not_propagate_back(self):
        """Test that a child task's new context does not replace the parent's."""
        set_versioning_context(url="http://test/parent")

        async def child_task():
            set_versioning_context(url="http://test/child")
            return get_versioning_context()

        child_ctx = await asyncio.create_task(child_task())

        assert child_ctx["url"] == "http://test/child"
        assert get_versioning_context()["url"] == "http://test/parent"
