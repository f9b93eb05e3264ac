"""Unit tests for the tutor chat dispatcher."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from divetutor.errors import GenerationUnavailableError, TutorNotFoundError
from divetutor.services import create_services


class AuthenticationError(Exception):
    """Stand-in for a provider SDK's invalid-credential error."""


def _mock_llm(**kwargs):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(**kwargs)
    return llm


async def _hang(_messages):
    await asyncio.sleep(10)


class TestResolution:
    @pytest.mark.asyncio
    async def test_unknown_discipline_never_reaches_model(self, make_services):
        llm = _mock_llm(return_value=AIMessage(content="hi"))
        services = make_services(llm=llm)
        with pytest.raises(TutorNotFoundError):
            await services.dispatcher.chat("scuba", "hello")
        llm.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolves_by_discipline_label(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=["ok"]))
        result = await services.dispatcher.chat("Commercial Dive Supervisor", "hello")
        assert result.persona.id == "supervisor-tutor"


class TestLiveModel:
    """Successful generation path."""

    @pytest.mark.asyncio
    async def test_model_answer_returned(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=["Check the anodes."]))
        await services.build_index()
        result = await services.dispatcher.chat("ndt", "How is cathodic protection verified?", "s-1")

        assert result.response_text == "Check the anodes."
        assert result.used_fallback is False
        assert result.fallback_reason is None
        assert result.session_id == "s-1"
        assert result.persona.id == "ndt-tutor"
        assert result.matched_chunks
        assert all(c.metadata.discipline == "NDT" for c in result.matched_chunks)

    @pytest.mark.asyncio
    async def test_retrieved_context_reaches_prompt(self, make_services):
        llm = _mock_llm(return_value=AIMessage(content="answer"))
        services = make_services(llm=llm)
        await services.build_index()
        result = await services.dispatcher.chat("dmt", "decompression sickness oxygen")

        messages = llm.ainvoke.await_args.args[0]
        system = messages[0].content
        assert "Dr. James Mitchell" in system
        for chunk in result.matched_chunks:
            assert chunk.text in system
        assert messages[1].content == "decompression sickness oxygen"

    @pytest.mark.asyncio
    async def test_unbuilt_index_still_answers(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=["fine"]))
        result = await services.dispatcher.chat("lst", "gas analysis")
        assert result.response_text == "fine"
        assert result.matched_chunks == []

    @pytest.mark.asyncio
    async def test_retrieval_failure_still_answers(self, make_services, embedding_provider):
        services = make_services(llm=FakeListChatModel(responses=["fine"]))
        await services.build_index()
        embedding_provider.fail = True
        result = await services.dispatcher.chat("lst", "gas analysis")
        assert result.response_text == "fine"
        assert result.used_fallback is False
        assert result.matched_chunks == []


class TestFallback:
    """Every generative failure yields a fallback answer, never an error."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "llm",
        [
            None,
            _mock_llm(side_effect=AuthenticationError("invalid api key")),
            _mock_llm(side_effect=ConnectionError("connection refused")),
            _mock_llm(side_effect=asyncio.TimeoutError()),
            _mock_llm(return_value=AIMessage(content="")),
            _mock_llm(return_value=None),
        ],
        ids=["unconfigured", "auth", "network", "timeout", "empty", "malformed"],
    )
    async def test_failure_modes(self, make_services, llm):
        services = make_services(llm=llm)
        result = await services.dispatcher.chat("alst", "Tell me about saturation systems")
        assert result.used_fallback is True
        assert result.fallback_reason
        assert result.response_text.strip()
        assert result.persona.id == "alst-tutor"

    @pytest.mark.asyncio
    async def test_slow_model_times_out_to_fallback(self, test_settings, embedding_provider):
        test_settings.divetutor_llm_timeout = 0.05
        llm = MagicMock()
        llm.ainvoke = _hang
        services = create_services(test_settings, embedding_provider, llm=llm)
        result = await services.dispatcher.chat("dmt", "hello")
        assert result.used_fallback is True
        assert "timed out" in result.fallback_reason

    @pytest.mark.asyncio
    async def test_invalid_credential_corrosion_question(self, make_services):
        llm = _mock_llm(side_effect=AuthenticationError("Incorrect API key provided"))
        services = make_services(llm=llm)
        await services.build_index()
        result = await services.dispatcher.chat("ndt", "What is galvanic corrosion?")

        assert result.used_fallback is True
        assert result.persona.id == "ndt-tutor"
        assert "Galvanic corrosion" in result.response_text
        assert "AuthenticationError" in result.fallback_reason
        llm.ainvoke.assert_awaited_once()


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_parallel_chats(self, make_services):
        services = make_services(llm=None)
        await services.build_index()
        keys = ["ndt", "lst", "alst", "dmt", "commercial-supervisor"] * 4
        results = await asyncio.gather(
            *(services.dispatcher.chat(k, "help with safety", f"s-{i}") for i, k in enumerate(keys))
        )
        assert [r.session_id for r in results] == [f"s-{i}" for i in range(len(keys))]
        assert all(r.used_fallback and r.response_text for r in results)

    @pytest.mark.asyncio
    async def test_chat_during_rebuild(self, make_services):
        services = make_services(llm=None)
        await services.build_index()
        rebuild = asyncio.create_task(services.build_index())
        result = await services.dispatcher.chat("ndt", "corrosion")
        await rebuild
        assert result.response_text
        assert services.index.is_built()


LEARNING_PATH_REPLY = """Recommendations:
- Review AWS D3.6M underwater weld inspection criteria
- Practice ultrasonic thickness readings on corroded plate
Next Steps:
- Log supervised inspection dives
Resources:
- CSWIP 3.2U certification
"""

ASSESSMENT_REPLY = """1. What does a cathodic protection survey measure?
A) Anode weight
B) Structure-to-electrolyte potential
C) Water temperature
D) Visibility
Answer: B
Explanation: Potential readings against a reference electrode show protection levels.

2. Which reference electrode is common subsea?
A) Silver/silver chloride
B) Copper/copper sulfate
C) Hydrogen
D) Calomel
Answer: A
Explanation: Ag/AgCl is stable in seawater.
"""


class TestLearningPath:
    @pytest.mark.asyncio
    async def test_parsed_path_returned(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=[LEARNING_PATH_REPLY]))
        path = await services.dispatcher.generate_learning_path(
            "ndt", "beginner", ["underwater weld inspection"]
        )
        assert path.recommendations[0] == "Review AWS D3.6M underwater weld inspection criteria"
        assert path.next_steps == ("Log supervised inspection dives",)
        assert path.resources == ("CSWIP 3.2U certification",)

    @pytest.mark.asyncio
    async def test_discipline_content_and_instructions_reach_prompt(self, make_services):
        llm = _mock_llm(return_value=AIMessage(content=LEARNING_PATH_REPLY))
        services = make_services(llm=llm)
        await services.build_index()
        await services.dispatcher.generate_learning_path("lst", "advanced", ["gas blending", " "])

        messages = llm.ainvoke.await_args.args[0]
        system = messages[0].content
        assert "advanced level professional in LST" in system
        assert "User goals: gas blending" in system
        lst_chunks = [c for c in services.index.chunks if c.metadata.discipline == "LST"]
        assert any(c.text in system for c in lst_chunks)
        other_chunks = [c for c in services.index.chunks if c.metadata.discipline != "LST"]
        assert not any(c.text in system for c in other_chunks)
        assert "goals: gas blending" in messages[1].content

    @pytest.mark.asyncio
    async def test_unknown_discipline_never_reaches_model(self, make_services):
        llm = _mock_llm(return_value=AIMessage(content=LEARNING_PATH_REPLY))
        services = make_services(llm=llm)
        with pytest.raises(TutorNotFoundError):
            await services.dispatcher.generate_learning_path("scuba", "beginner", ["x"])
        llm.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "level,goals",
        [("expert", ["welding"]), ("beginner", []), ("beginner", ["  "])],
        ids=["bad-level", "no-goals", "blank-goals"],
    )
    async def test_invalid_input(self, make_services, level, goals):
        services = make_services(llm=FakeListChatModel(responses=[LEARNING_PATH_REPLY]))
        with pytest.raises(ValueError):
            await services.dispatcher.generate_learning_path("ndt", level, goals)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "llm",
        [
            None,
            _mock_llm(side_effect=ConnectionError("connection refused")),
            _mock_llm(return_value=AIMessage(content="")),
        ],
        ids=["unconfigured", "network", "empty"],
    )
    async def test_generation_failure_raises(self, make_services, llm):
        services = make_services(llm=llm)
        with pytest.raises(GenerationUnavailableError):
            await services.dispatcher.generate_learning_path("dmt", "beginner", ["oxygen therapy"])

    @pytest.mark.asyncio
    async def test_unparseable_output_raises(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=["## Recommendations"]))
        with pytest.raises(GenerationUnavailableError, match="no learning path"):
            await services.dispatcher.generate_learning_path("dmt", "beginner", ["oxygen therapy"])


class TestAssessment:
    @pytest.mark.asyncio
    async def test_questions_tagged_with_requested_difficulty(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=[ASSESSMENT_REPLY]))
        questions = await services.dispatcher.generate_assessment(
            "ndt", "advanced", "cathodic protection"
        )
        assert len(questions) == 2
        assert questions[0].correct_answer == "Structure-to-electrolyte potential"
        assert questions[1].correct_answer == "Silver/silver chloride"
        assert all(q.difficulty == "advanced" for q in questions)

    @pytest.mark.asyncio
    async def test_count_limits_questions(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=[ASSESSMENT_REPLY]))
        questions = await services.dispatcher.generate_assessment(
            "ndt", "beginner", "cathodic protection", count=1
        )
        assert len(questions) == 1

    @pytest.mark.asyncio
    async def test_topic_retrieval_filtered_to_discipline(self, make_services):
        llm = _mock_llm(return_value=AIMessage(content=ASSESSMENT_REPLY))
        services = make_services(llm=llm)
        await services.build_index()
        await services.dispatcher.generate_assessment("ndt", "intermediate", "cathodic protection", 3)

        system = llm.ainvoke.await_args.args[0][0].content
        assert "Generate 3 intermediate level assessment questions about cathodic protection" in system
        other_chunks = [c for c in services.index.chunks if c.metadata.discipline != "NDT"]
        assert not any(c.text in system for c in other_chunks)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "difficulty,topic,count",
        [("expert", "welding", 5), ("beginner", " ", 5), ("beginner", "welding", 0)],
        ids=["bad-difficulty", "blank-topic", "zero-count"],
    )
    async def test_invalid_input(self, make_services, difficulty, topic, count):
        services = make_services(llm=FakeListChatModel(responses=[ASSESSMENT_REPLY]))
        with pytest.raises(ValueError):
            await services.dispatcher.generate_assessment("ndt", difficulty, topic, count)

    @pytest.mark.asyncio
    async def test_offline_raises(self, make_services):
        services = make_services(llm=None)
        with pytest.raises(GenerationUnavailableError):
            await services.dispatcher.generate_assessment("alst", "beginner", "bell runs")

    @pytest.mark.asyncio
    async def test_output_without_questions_raises(self, make_services):
        services = make_services(llm=FakeListChatModel(responses=["I cannot help with that."]))
        with pytest.raises(GenerationUnavailableError, match="no assessment questions"):
            await services.dispatcher.generate_assessment("alst", "beginner", "bell runs")

    @pytest.mark.asyncio
    async def test_retrieval_failure_still_generates(self, make_services, embedding_provider):
        services = make_services(llm=FakeListChatModel(responses=[ASSESSMENT_REPLY]))
        await services.build_index()
        embedding_provider.fail = True
        questions = await services.dispatcher.generate_assessment("ndt", "beginner", "anodes")
        assert questions
