"""
course_recommendation.py: Minimal learnloop AI service example.

Picks the healthiest provider, then asks for a course recommendation with
conversation history attached.

Usage:
    export LEARNLOOP_PRIMARY_URL=http://localhost:4001/api/groq
    export LEARNLOOP_SECONDARY_URL=http://localhost:5174/api/gemini
    export LEARNLOOP_SECONDARY_API_KEY=...
    python examples/course_recommendation.py
"""

import logging

from learnloop.llms import (
    AggregateFailureError,
    auto_select_best_ai_service,
    fetch_ai,
    get_ai_service_config,
    get_default_orchestrator,
)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    await auto_select_best_ai_service()
    print("preferred provider:", get_ai_service_config().preferred_provider.value)

    try:
        text = await fetch_ai(
            "Recommend one beginner Python course and explain why.",
            include_history=True,
        )
    except AggregateFailureError:
        print("Sorry, we couldn't get a response right now.")
    else:
        print(text)
    finally:
        await get_default_orchestrator().aclose()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
