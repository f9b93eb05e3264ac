"""LangGraph workflow definition for the tutor chat."""

from functools import partial

from langchain_core.language_models.chat_models import BaseChatModel
from langgraph.graph import END, StateGraph

from divetutor.agent.nodes import fallback_response, generate_response, retrieve_context
from divetutor.agent.state import TutorState
from divetutor.tutors.fallback import FallbackResponder
from divetutor.vectorstore.memory_store import SimilarityIndex


def _route_after_generate(state: TutorState) -> str:
    """Route to the offline responder when generation failed."""
    if state.get("generation_error") or not state.get("response_text"):
        return "fallback_response"
    return END


def build_graph(
    index: SimilarityIndex | None,
    llm: BaseChatModel | None,
    responder: FallbackResponder,
    top_k: int = 3,
    llm_timeout: float = 60.0,
):
    """Build the tutor workflow.

    retrieve_context -> generate_response -> (fallback_response | END)

    Returns:
        A compiled LangGraph StateGraph.
    """
    graph = StateGraph(TutorState)

    graph.add_node("retrieve_context", partial(retrieve_context, index=index, top_k=top_k))
    graph.add_node("generate_response", partial(generate_response, llm=llm, timeout=llm_timeout))
    graph.add_node("fallback_response", partial(fallback_response, responder=responder))

    graph.set_entry_point("retrieve_context")

    graph.add_edge("retrieve_context", "generate_response")
    graph.add_conditional_edges("generate_response", _route_after_generate)
    graph.add_edge("fallback_response", END)

    return graph.compile()
