"""Concurrent evaluation from threads and coroutines."""

from __future__ import annotations

import asyncio
import threading

import pytest

from resource_authz._engine import PolicyEngine
from resource_authz._models import Resource, Subject
from resource_authz._types import Decision
from resource_authz.config._config import AuthzConfig
from resource_authz.policy._predicate import is_owner
from resource_authz.policy._registry import PolicyRegistry


@pytest.fixture()
def engine() -> PolicyEngine:
    registry = PolicyRegistry()
    registry.register("Terrain", "update", is_owner())
    return PolicyEngine(registry, config=AuthzConfig())


class TestThreads:
    def test_concurrent_registration_distinct_keys(self):
        """Concurrent registrations on distinct keys all land."""
        registry = PolicyRegistry()
        num_threads = 20
        barrier = threading.Barrier(num_threads)
        errors: list[Exception] = []

        def register_rule(i: int) -> None:
            try:
                barrier.wait(timeout=5)
                registry.register("Terrain", f"action_{i}", lambda s, r: Decision.ALLOW)
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=register_rule, args=(i,)) for i in range(num_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert not errors, f"Errors during concurrent registration: {errors}"
        assert len(registry) == num_threads

    def test_concurrent_duplicate_registration_keeps_one(self):
        """Racing registrations for one key: exactly one wins, the rest fail."""
        registry = PolicyRegistry()
        num_threads = 10
        barrier = threading.Barrier(num_threads)
        failures: list[Exception] = []

        def register_rule() -> None:
            barrier.wait(timeout=5)
            try:
                registry.register("Terrain", "view", lambda s, r: Decision.ALLOW)
            except Exception as exc:
                failures.append(exc)

        threads = [threading.Thread(target=register_rule) for _ in range(num_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert len(failures) == num_threads - 1
        assert len(registry) == 1

    def test_evaluation_during_registration(self, engine):
        """Evaluators never see a partial registry while rules are added."""
        owner = Subject(id=1)
        terrain = Resource(id=1, attributes={"owner_id": 1})
        stop = threading.Event()
        observed: list[Decision] = []

        def evaluate_loop() -> None:
            while not stop.is_set():
                observed.append(engine.evaluate(owner, "Terrain", "update", terrain))

        readers = [threading.Thread(target=evaluate_loop) for _ in range(4)]
        for t in readers:
            t.start()
        for i in range(200):
            engine.register("Other", f"action_{i}", lambda s, r: Decision.DENY)
        stop.set()
        for t in readers:
            t.join(timeout=10)

        assert observed
        assert set(observed) == {Decision.ALLOW}


class TestCoroutines:
    @pytest.mark.asyncio
    async def test_gathered_evaluations(self, engine):
        owner = Subject(id=1)
        stranger = Subject(id=2)
        terrain = Resource(id=1, attributes={"owner_id": 1})

        async def check(subject: Subject) -> bool:
            await asyncio.sleep(0)
            return engine.authorize(subject, "Terrain", "update", terrain)

        results = await asyncio.gather(*(check(s) for s in [owner, stranger] * 25))
        assert results == [True, False] * 25
