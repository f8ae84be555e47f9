"""Tests for the hook registry."""

import pytest

from modelgen.runtime.errors import MissingHookError
from modelgen.runtime.hooks import HookRegistry


class TestHookRegistry:
    def test_register_directly(self):
        hooks = HookRegistry()
        hooks.register("before_create_post", print)

        assert "before_create_post" in hooks
        assert hooks.get("before_create_post") is print

    def test_register_as_decorator(self):
        hooks = HookRegistry()

        @hooks.register("generate_post_created_at_on_create")
        def now(repo, record):
            return "2024-01-01T00:00:00Z"

        assert hooks.get("generate_post_created_at_on_create") is now

    def test_get_missing(self):
        with pytest.raises(MissingHookError) as exc_info:
            HookRegistry().get("after_delete_post")

        assert exc_info.value.functions == ["after_delete_post"]

    def test_missing_for_synthesis(self, blog_synthesis):
        hooks = HookRegistry({"before_create_post": print})

        assert hooks.missing(blog_synthesis) == [
            "generate_post_created_at_on_create",
            "generate_post_updated_at_on_create",
            "after_create_post",
            "generate_post_created_at_on_update",
            "generate_post_updated_at_on_update",
            "after_delete_post",
        ]

    def test_check(self, blog_synthesis, organizations_synthesis):
        HookRegistry().check(organizations_synthesis)

        with pytest.raises(MissingHookError) as exc_info:
            HookRegistry().check(blog_synthesis)
        assert "after_delete_post" in str(exc_info.value)
