# services/ai/insights.py
from __future__ import annotations
import json
import logging
from typing import Any, List, Sequence

from pydantic import ValidationError

from core.emissions import aggregate
from core.exceptions import (
    AIServiceError,
    APIKeyMissingError,
    InvalidInput,
    InvalidResponseError,
)
from core.interfaces import TextGenerator
from models.ai import ChatMessage, EmissionAnalysis, ReductionRecommendations
from models.emissions import EmissionFactors
from .prompts import (
    build_analysis_messages,
    build_assistant_messages,
    build_recommendations_messages,
)

logger = logging.getLogger(__name__)

GREETING = "Hello! How can I help you with your factory's data today?"
FLOW_ERROR = "I'm sorry, I'm having trouble understanding the conversation flow."
EMPTY_REPLY = "Sorry, I couldn't process that. Please try again."
CONNECTION_ERROR = (
    "Sorry, I'm having trouble connecting to my brain right now. Please try again later."
)


async def run_analysis(
    client: TextGenerator, records: Sequence[Any], factors: EmissionFactors
) -> EmissionAnalysis:
    if not records:
        raise InvalidInput("No operational data provided for analysis.")

    # InvalidInput from the engine surfaces before any network call
    summary = aggregate(records, factors)
    messages = build_analysis_messages(records, summary)

    logger.info("Requesting emission analysis for %d records", len(records))
    try:
        content = await client.complete(messages, json_mode=True)
        result = EmissionAnalysis.model_validate(json.loads(content))
    except APIKeyMissingError:
        raise
    except (AIServiceError, ValueError, ValidationError) as e:
        logger.warning("Emission analysis failed: %s", e)
        raise AIServiceError(f"Analysis Failed: {e}") from e

    logger.info("Emission analysis complete")
    return result


async def get_recommendations(
    client: TextGenerator, analysis: EmissionAnalysis
) -> ReductionRecommendations:
    if analysis is None:
        raise InvalidInput("Analysis results are required to generate recommendations.")

    messages = build_recommendations_messages(analysis)
    logger.info("Requesting reduction recommendations")
    try:
        content = await client.complete(messages, json_mode=True)
        data = json.loads(content)
        if not isinstance(data, dict) or not isinstance(data.get("recommendations"), list):
            raise AIServiceError("AI did not return recommendations in the expected format.")
        result = ReductionRecommendations.model_validate(data)
    except APIKeyMissingError:
        raise
    except (AIServiceError, ValueError, ValidationError) as e:
        logger.warning("Recommendation request failed: %s", e)
        raise AIServiceError(f"Failed to Get Recommendations: {e}") from e

    logger.info("Received %d recommendations", len(result.recommendations))
    return result


async def assistant_reply(
    client: TextGenerator,
    history: List[ChatMessage],
    records: Sequence[Any],
    factors: EmissionFactors,
) -> str:
    """Answer the chat; provider trouble becomes a polite reply, not an error."""
    if not history:
        return GREETING
    if history[-1].role != "user":
        return FLOW_ERROR

    messages = build_assistant_messages(history, records, aggregate(records, factors), factors)
    try:
        reply = await client.complete(messages)
    except InvalidResponseError:
        return EMPTY_REPLY
    except AIServiceError as e:
        logger.warning("Assistant request failed: %s", e)
        return CONNECTION_ERROR
    return reply or EMPTY_REPLY
