"""Tests for policy/_decorator.py: @rule decorator."""

from __future__ import annotations

import logging

import pytest

from resource_authz._types import Action, Decision
from resource_authz.config._config import configure
from resource_authz.exceptions import DuplicateRuleError
from resource_authz.policy._decorator import rule
from resource_authz.policy._predicate import has_role
from resource_authz.policy._registry import PolicyRegistry, get_default_registry
from resource_authz.testing import make_admin, make_user


class TestRuleDecorator:
    def test_registers_function(self):
        registry = PolicyRegistry()

        @rule("Terrain", Action.UPDATE, registry=registry)
        def terrain_update(subject, terrain):
            """Only the owner may edit a terrain."""
            return Decision.from_bool(terrain.get("owner_id") == subject.id)

        found = registry.lookup("Terrain", "update")
        assert found is not None
        assert found.fn is terrain_update
        assert found.name == "terrain_update"
        assert found.description == "Only the owner may edit a terrain."

    def test_returns_function_unchanged(self):
        registry = PolicyRegistry()

        def terrain_view(subject, terrain):
            return Decision.ALLOW

        assert rule("Terrain", "view", registry=registry)(terrain_view) is terrain_view

    def test_predicate_replaces_body(self):
        registry = PolicyRegistry()

        @rule("Terrain", "delete", predicate=has_role("admin"), registry=registry)
        def terrain_delete(subject, terrain):
            """Admins only."""
            raise AssertionError("body is not the rule")

        found = registry.lookup("Terrain", "delete")
        assert found.name == "terrain_delete"
        assert found(make_admin(), None) is Decision.ALLOW
        assert found(make_user(), None) is Decision.DENY

    def test_duplicate_and_replace(self):
        registry = PolicyRegistry()

        @rule("Terrain", "view", registry=registry)
        def first(subject, terrain):
            return Decision.DENY

        with pytest.raises(DuplicateRuleError):

            @rule("Terrain", "view", registry=registry)
            def second(subject, terrain):
                return Decision.ALLOW

        @rule("Terrain", "view", replace=True, registry=registry)
        def third(subject, terrain):
            return Decision.ALLOW

        assert registry.lookup("Terrain", "view").name == "third"

    def test_default_registry(self, isolated_authz_state):
        @rule("Terrain", "restore")
        def terrain_restore(subject, terrain):
            return Decision.DENY

        assert get_default_registry().has_rule("Terrain", "restore")


class TestRuleDecoratorReplacement:
    """@rule resolves duplicates the same way PolicyEngine.register does."""

    def test_follows_configured_replace(self, isolated_authz_state):
        registry = PolicyRegistry()
        configure(on_duplicate_rule="replace")

        @rule("Terrain", "view", registry=registry)
        def first(subject, terrain):
            return Decision.DENY

        @rule("Terrain", "view", registry=registry)
        def second(subject, terrain):
            return Decision.ALLOW

        assert registry.lookup("Terrain", "view").name == "second"

    def test_explicit_false_overrides_configured_replace(self, isolated_authz_state):
        registry = PolicyRegistry()
        configure(on_duplicate_rule="replace")

        @rule("Terrain", "view", registry=registry)
        def first(subject, terrain):
            return Decision.DENY

        with pytest.raises(DuplicateRuleError):

            @rule("Terrain", "view", replace=False, registry=registry)
            def second(subject, terrain):
                return Decision.ALLOW

    def test_replacement_logged_at_debug(self, caplog):
        registry = PolicyRegistry()

        @rule("Terrain", "view", registry=registry)
        def first(subject, terrain):
            return Decision.DENY

        with caplog.at_level(logging.DEBUG, logger="resource_authz"):

            @rule("Terrain", "view", replace=True, registry=registry)
            def second(subject, terrain):
                return Decision.ALLOW

        assert any("Replacing rule 'first'" in r.message for r in caplog.records)
