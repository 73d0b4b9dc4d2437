from __future__ import annotations

import asyncio

import pytest

from learnloop.llms import (
    AggregateFailureError,
    AIConfigurationError,
    AIOrchestrator,
    ConversationMessage,
    InMemoryResponseCache,
    ProviderName,
    ProviderUnavailableError,
    RequestConfig,
    RequestConfigOverride,
)

PRIMARY = ProviderName.PRIMARY
SECONDARY = ProviderName.SECONDARY


def run_async(coro):
    return asyncio.run(coro)


class _FakeProvider:
    """Scripted provider: returns `text`, or raises when `fail` is set."""

    def __init__(
        self,
        name: ProviderName,
        *,
        text: str = "ok",
        fail: bool = False,
        healthy: bool = True,
        probe_error: Exception | None = None,
    ) -> None:
        self._name = name
        self.text = text
        self.fail = fail
        self.healthy = healthy
        self.probe_error = probe_error
        self.calls: list[tuple[str, int, object]] = []
        self.probes = 0
        self.closed = False

    @property
    def provider(self) -> ProviderName:
        return self._name

    async def generate(self, prompt, timeout_ms, *, context=None):
        self.calls.append((prompt, timeout_ms, context))
        if self.fail:
            raise ProviderUnavailableError(f"{self._name.value} down", provider=self._name)
        return self.text

    async def probe(self) -> bool:
        self.probes += 1
        if self.probe_error is not None:
            raise self.probe_error
        return self.healthy

    async def aclose(self) -> None:
        self.closed = True


class _RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class _Clock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _orchestrator(
    primary: _FakeProvider | None = None,
    secondary: _FakeProvider | None = None,
    *,
    config: RequestConfig | None = None,
    cache=None,
    sleep: _RecordingSleep | None = None,
) -> AIOrchestrator:
    return AIOrchestrator(
        providers={
            PRIMARY: primary or _FakeProvider(PRIMARY, text="from primary"),
            SECONDARY: secondary or _FakeProvider(SECONDARY, text="from secondary"),
        },
        cache=cache,
        config=config,
        sleep=sleep or _RecordingSleep(),
    )


def test_fallback_after_primary_exhausts_retries():
    primary = _FakeProvider(PRIMARY, fail=True)
    secondary = _FakeProvider(SECONDARY, text="Course X recommended")
    sleep = _RecordingSleep()
    orch = _orchestrator(
        primary,
        secondary,
        config=RequestConfig(
            preferred_provider=PRIMARY,
            enable_fallback=True,
            max_retries=2,
            cache_responses=True,
        ),
        sleep=sleep,
    )

    async def scenario() -> None:
        result = await orch.fetch_ai("Recommend a course")
        assert result == "Course X recommended"
        cached = await orch.cache.get("Recommend a course")
        assert cached is not None and cached.text == "Course X recommended"

    run_async(scenario())
    assert len(primary.calls) == 3
    assert len(secondary.calls) == 1
    assert sleep.delays == pytest.approx([1.0, 1.5])


def test_no_fallback_raises_aggregate_failure_without_touching_secondary():
    primary = _FakeProvider(PRIMARY, fail=True)
    secondary = _FakeProvider(SECONDARY)
    orch = _orchestrator(
        primary,
        secondary,
        config=RequestConfig(enable_fallback=False, max_retries=1),
    )

    async def scenario() -> None:
        with pytest.raises(AggregateFailureError) as info:
            await orch.fetch_ai("hello")
        assert [name for name, _ in info.value.errors] == [PRIMARY]
        assert isinstance(info.value.last_error, ProviderUnavailableError)

    run_async(scenario())
    assert len(primary.calls) == 2
    assert secondary.calls == []


def test_aggregate_failure_lists_errors_in_attempt_order():
    primary = _FakeProvider(PRIMARY, fail=True)
    secondary = _FakeProvider(SECONDARY, fail=True)
    orch = _orchestrator(
        primary,
        secondary,
        config=RequestConfig(preferred_provider=SECONDARY, max_retries=0),
    )

    async def scenario() -> None:
        with pytest.raises(AggregateFailureError) as info:
            await orch.fetch_ai("hello")
        assert [name for name, _ in info.value.errors] == [SECONDARY, PRIMARY]
        message = str(info.value)
        assert "secondary: secondary down" in message
        assert "primary: primary down" in message
        assert message.index("secondary down") < message.index("primary down")

    run_async(scenario())
    assert len(secondary.calls) == 1
    assert len(primary.calls) == 1


def test_second_call_within_ttl_is_served_from_cache():
    primary = _FakeProvider(PRIMARY, text="first answer")
    secondary = _FakeProvider(SECONDARY)
    orch = _orchestrator(primary, secondary)

    async def scenario() -> None:
        first = await orch.fetch_ai("What is recursion?")
        primary.text = "changed upstream"
        second = await orch.fetch_ai("  What is recursion?  ")
        assert first == second == "first answer"

    run_async(scenario())
    assert len(primary.calls) == 1
    assert secondary.calls == []


def test_expired_cache_entry_triggers_network_call():
    clock = _Clock()
    primary = _FakeProvider(PRIMARY, text="answer")
    orch = _orchestrator(primary, cache=InMemoryResponseCache(ttl_s=3600, clock=clock))

    async def scenario() -> None:
        await orch.fetch_ai("prompt")
        clock.now = 3601
        await orch.fetch_ai("prompt")

    run_async(scenario())
    assert len(primary.calls) == 2


def test_clear_cache_forces_fresh_call_within_ttl():
    primary = _FakeProvider(PRIMARY, text="answer")
    orch = _orchestrator(primary)

    async def scenario() -> None:
        await orch.fetch_ai("prompt")
        await orch.clear_cache()
        await orch.fetch_ai("prompt")

    run_async(scenario())
    assert len(primary.calls) == 2


def test_caching_disabled_skips_lookup_and_store():
    primary = _FakeProvider(PRIMARY, text="answer")
    orch = _orchestrator(primary, config=RequestConfig(cache_responses=False))

    async def scenario() -> None:
        await orch.fetch_ai("prompt")
        await orch.fetch_ai("prompt")
        assert await orch.cache.get("prompt") is None

    run_async(scenario())
    assert len(primary.calls) == 2


class _BrokenCache:
    backend_id = "broken"

    def __init__(self) -> None:
        self.gets = 0
        self.sets = 0

    async def get(self, key):
        self.gets += 1
        raise ConnectionError("cache down")

    async def set(self, key, text):
        self.sets += 1
        raise ConnectionError("cache down")

    async def clear(self):
        raise ConnectionError("cache down")


def test_failing_cache_backend_degrades_to_provider_call():
    primary = _FakeProvider(PRIMARY, text="fresh answer")
    cache = _BrokenCache()
    orch = _orchestrator(primary, cache=cache)

    async def scenario() -> None:
        assert await orch.fetch_ai("prompt") == "fresh answer"
        assert await orch.fetch_ai("prompt") == "fresh answer"

    run_async(scenario())
    assert len(primary.calls) == 2
    assert cache.gets == 2
    assert cache.sets == 2
    assert [m.role for m in orch.conversation.messages] == [
        "user",
        "assistant",
        "user",
        "assistant",
    ]


def test_history_appended_once_per_success_and_never_on_hits_or_failures():
    primary = _FakeProvider(PRIMARY, text="answer")
    secondary = _FakeProvider(SECONDARY, fail=True)
    orch = _orchestrator(primary, secondary, config=RequestConfig(max_retries=0))

    async def scenario() -> None:
        await orch.fetch_ai("question")
        assert orch.conversation.messages == (
            ConversationMessage(role="user", content="question"),
            ConversationMessage(role="assistant", content="answer"),
        )

        await orch.fetch_ai("question")
        assert len(orch.conversation) == 2

        primary.fail = True
        with pytest.raises(AggregateFailureError):
            await orch.fetch_ai("another question")
        assert len(orch.conversation) == 2

    run_async(scenario())


def test_history_is_sent_only_when_requested_and_non_empty():
    primary = _FakeProvider(PRIMARY, text="answer")
    orch = _orchestrator(primary, config=RequestConfig(cache_responses=False))

    async def scenario() -> None:
        await orch.fetch_ai("first", {"include_history": True})
        await orch.fetch_ai("second")
        await orch.fetch_ai("third", RequestConfigOverride(include_history=True, conversation_id="c-1"))

    run_async(scenario())
    first_ctx = primary.calls[0][2]
    second_ctx = primary.calls[1][2]
    third_ctx = primary.calls[2][2]

    assert first_ctx.previous_messages is None
    assert second_ctx.previous_messages is None
    assert third_ctx.conversation_id == "c-1"
    assert [m.content for m in third_ctx.previous_messages] == [
        "first",
        "answer",
        "second",
        "answer",
    ]
    assert first_ctx.user_id == third_ctx.user_id == orch.conversation.user_id


def test_timeout_from_effective_config_reaches_provider():
    primary = _FakeProvider(PRIMARY)
    orch = _orchestrator(primary, config=RequestConfig(timeout_ms=1234))

    async def scenario() -> None:
        await orch.fetch_ai("a")
        await orch.fetch_ai("b", {"timeout_ms": 99})

    run_async(scenario())
    assert [call[1] for call in primary.calls] == [1234, 99]


def test_call_override_does_not_change_process_default():
    primary = _FakeProvider(PRIMARY)
    secondary = _FakeProvider(SECONDARY, text="secondary answer")
    orch = _orchestrator(primary, secondary)

    async def scenario() -> None:
        result = await orch.fetch_ai("q", {"preferred_provider": "secondary"})
        assert result == "secondary answer"

    run_async(scenario())
    assert orch.get_config().preferred_provider is PRIMARY
    assert primary.calls == []


def test_configure_merges_into_process_default():
    orch = _orchestrator()

    orch.configure(max_retries=0)
    orch.configure(RequestConfigOverride(enable_fallback=False))

    config = orch.get_config()
    assert config.max_retries == 0
    assert config.enable_fallback is False
    assert config.timeout_ms == 30_000
    assert config.preferred_provider is PRIMARY


def test_configure_rejects_invalid_values():
    orch = _orchestrator()
    with pytest.raises(AIConfigurationError):
        orch.configure(max_retries=-1)
    with pytest.raises(AIConfigurationError):
        orch.configure(timeout_ms=0)
    with pytest.raises(AIConfigurationError):
        orch.configure(preferred_provider="tertiary")
    with pytest.raises(AIConfigurationError, match="enable_fallback"):
        orch.configure(enable_fallback="false")
    with pytest.raises(AIConfigurationError, match="Unknown request config"):
        orch.configure({"retries": 2})
    assert orch.get_config() == RequestConfig()


def test_missing_provider_client_is_a_configuration_error():
    with pytest.raises(AIConfigurationError, match="secondary"):
        AIOrchestrator(providers={PRIMARY: _FakeProvider(PRIMARY)})


def test_auto_select_prefers_primary_then_secondary_then_keeps_current():
    primary = _FakeProvider(PRIMARY, healthy=False)
    secondary = _FakeProvider(SECONDARY, healthy=True)
    orch = _orchestrator(primary, secondary)

    async def scenario() -> None:
        health = await orch.check_health()
        assert health.to_dict() == {"primary": False, "secondary": True}

        await orch.auto_select_best_provider()
        assert orch.get_config().preferred_provider is SECONDARY

        secondary.healthy = False
        await orch.auto_select_best_provider()
        assert orch.get_config().preferred_provider is SECONDARY

        primary.healthy = True
        await orch.auto_select_best_provider()
        assert orch.get_config().preferred_provider is PRIMARY

    run_async(scenario())
    assert primary.calls == []
    assert secondary.calls == []


def test_health_probe_errors_count_as_unhealthy():
    primary = _FakeProvider(PRIMARY, probe_error=RuntimeError("probe exploded"))
    secondary = _FakeProvider(SECONDARY, healthy=True)
    orch = _orchestrator(primary, secondary)

    health = run_async(orch.check_health())

    assert health.primary is False
    assert health.secondary is True


def test_concurrent_calls_each_record_one_exchange():
    primary = _FakeProvider(PRIMARY, text="answer")
    orch = _orchestrator(primary, config=RequestConfig(cache_responses=False))

    async def scenario() -> list[str]:
        return await asyncio.gather(orch.fetch_ai("a"), orch.fetch_ai("b"))

    results = run_async(scenario())
    assert results == ["answer", "answer"]
    assert len(orch.conversation) == 4
    assert sorted(m.content for m in orch.conversation.messages if m.role == "user") == ["a", "b"]


def test_aclose_closes_both_providers():
    primary = _FakeProvider(PRIMARY)
    secondary = _FakeProvider(SECONDARY)
    orch = _orchestrator(primary, secondary)

    run_async(orch.aclose())

    assert primary.closed and secondary.closed
