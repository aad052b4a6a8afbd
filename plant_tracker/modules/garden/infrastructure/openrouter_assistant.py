# 📄 File: plant_tracker/modules/garden/infrastructure/openrouter_assistant.py
# 🧭 Purpose (Layman Explanation):
# The AI botanist. Sends plant photos and questions to a language model through OpenRouter
# and turns its answers into diagnoses, recommendations and chat replies the app understands.
# 🧪 Purpose (Technical Summary):
# PlantAssistant implementation over the OpenAI-compatible OpenRouter chat completions API.
# Structured answers are requested as JSON objects and validated with pydantic; unusable
# answers raise PlantIdentificationError, transport problems surface as ExternalAPIError.
# 🔗 Dependencies:
# APIClient (aiohttp + tenacity), pydantic, settings, structured logging
# 🔄 Connected Modules / Calls From:
# plant_tracker.main (lifespan wiring), GardenService

import json
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from plant_tracker.shared.config.settings import Settings, get_settings
from plant_tracker.shared.core.exceptions import PlantIdentificationError
from plant_tracker.shared.infrastructure.external_apis import APIClient, create_api_client
from plant_tracker.shared.utils.logging import get_logger
from ..domain.models.garden import ChatMessage, ChatRole
from ..domain.models.plant import PlantDiagnosis
from ..domain.services.plant_assistant import (
    PlantAssistant,
    PlantRecommendation,
    ReanalysisResult,
    RecommendationList,
)

logger = get_logger(__name__)

PROVIDER_NAME = "openrouter"
CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"
APP_REFERER = "https://plant-tracker.app"
APP_TITLE = "Plant Tracker"

DIAGNOSIS_SCHEMA = """{
  "speciesName": "string",
  "popularName": "string",
  "identificationConfidence": "high" | "medium" | "low",
  "alternativeSpecies": [
    {"speciesName": "string", "popularName": "string", "reason": "string"}
  ],
  "isHealthy": boolean,
  "diagnosis": {"title": "string", "description": "string"},
  "careInstructions": {
    "watering": "string", "sunlight": "string", "soil": "string", "fertilizer": "string"
  },
  "careSchedule": {
    "wateringFrequency": number, "fertilizingFrequency": number, "pruningSchedule": "string"
  },
  "generalTips": ["string"],
  "pestAndDiseaseAnalysis": {"title": "string", "description": "string", "suggestedTreatment": "string"}
}"""

ANALYSIS_PROMPT = f"""
Analyze the image of this plant with great care. Species identification can be difficult.

1. Main identification: identify the species from clear visual features (leaf shape, venation,
   colour). Give the scientific name and the most common popular name.
2. Confidence: rate your confidence as 'high', 'medium' or 'low'. Be conservative; 'high' must
   be almost unambiguous.
3. Alternatives: when confidence is 'medium' or 'low', suggest one or two look-alike species and
   briefly explain why each could match. Omit 'alternativeSpecies' when confidence is 'high'.
4. Health: assess the overall health of the plant.
5. Diagnosis and care: give a detailed diagnosis, a structured 'careSchedule' with frequencies in
   days and general tips. Include 'pestAndDiseaseAnalysis' when pests or diseases are present.

Answer strictly with a JSON object of this shape:
{DIAGNOSIS_SCHEMA}
"""

REANALYSIS_PROMPT = """
The user believes the plant in the image is a '{suggestion}'.

1. Re-evaluate the image: compare the plant's visual features (leaf shape, venation, stem, colour)
   with the known features of '{suggestion}'.
2. Decide:
   - If you agree the suggestion is plausible or correct, set 'isSuggestionAccepted' to true,
     explain why in 'reasoning' and produce a complete 'newAnalysis' for '{suggestion}'.
   - If you disagree, set 'isSuggestionAccepted' to false, explain the visual discrepancies in
     'reasoning' and omit 'newAnalysis'.

Answer strictly with a JSON object of this shape:
{{
  "isSuggestionAccepted": boolean,
  "reasoning": "string",
  "newAnalysis": {schema}
}}
"""

RECOMMENDATION_PROMPT = """
A user already owns these plants: [{names}].
Recommend 3 other plants that would likely thrive under similar care conditions.
For each one give the popular name, the scientific name and a short reason (1-2 sentences).

Answer strictly with a JSON object of this shape:
{{"recommendations": [{{"popularName": "string", "speciesName": "string", "reason": "string"}}]}}
"""

CHAT_SYSTEM_INSTRUCTION = (
    "You are a friendly, experienced botanist specialised in home gardening. "
    "Give users clear, helpful and encouraging advice about their plants. "
    "Answer their questions accurately and in a conversational tone."
)

# OpenRouter speaks OpenAI roles
_ROLE_MAP = {
    ChatRole.USER: "user",
    ChatRole.MODEL: "assistant",
}


class OpenRouterAssistant(PlantAssistant):
    """
    PlantAssistant backed by OpenRouter chat completions.

    Implementation Notes:
    - Images are sent as base64 JPEG data URLs
    - Structured operations use response_format json_object
    - The HTTP client is created lazily and shared across calls
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[APIClient] = None):
        self.settings = settings or get_settings()
        config = self.settings.get_ai_api_config()
        self.model = config["model"]
        self.max_tokens = config["max_tokens"]
        self.chat_max_tokens = config["chat_max_tokens"]
        self.client = client or create_api_client(
            api_name=PROVIDER_NAME,
            base_url=config["api_url"],
            api_key=config["api_key"],
            timeout=config["timeout"],
            max_retries=config["max_retries"],
            extra_headers={"HTTP-Referer": APP_REFERER, "X-Title": APP_TITLE},
        )

    async def close(self) -> None:
        await self.client.close()

    # =========================================================================
    # PLANT ASSISTANT OPERATIONS
    # =========================================================================

    async def analyze(self, image: str) -> PlantDiagnosis:
        content = await self._complete(
            [_vision_message(ANALYSIS_PROMPT, image)],
            max_tokens=self.max_tokens,
            json_mode=True,
        )
        payload = _parse_json(content)
        try:
            return PlantDiagnosis.model_validate(payload)
        except PydanticValidationError as e:
            raise PlantIdentificationError(
                "AI returned an incomplete plant diagnosis",
                provider=PROVIDER_NAME,
                details={"errors": e.error_count()},
            ) from e

    async def reanalyze(self, image: str, suggestion: str) -> ReanalysisResult:
        prompt = REANALYSIS_PROMPT.format(suggestion=suggestion, schema=DIAGNOSIS_SCHEMA)
        content = await self._complete(
            [_vision_message(prompt, image)],
            max_tokens=self.max_tokens,
            json_mode=True,
        )
        payload = _parse_json(content)
        try:
            return ReanalysisResult.model_validate(payload)
        except PydanticValidationError as e:
            raise PlantIdentificationError(
                "AI returned an invalid re-analysis",
                provider=PROVIDER_NAME,
                details={"errors": e.error_count()},
            ) from e

    async def recommend(self, existing_plant_names: Sequence[str]) -> List[PlantRecommendation]:
        prompt = RECOMMENDATION_PROMPT.format(names=", ".join(existing_plant_names))
        content = await self._complete(
            [{"role": "user", "content": prompt}],
            max_tokens=self.chat_max_tokens,
            json_mode=True,
        )
        payload = _parse_json(content)
        if isinstance(payload, list):
            payload = {"recommendations": payload}
        try:
            return RecommendationList.model_validate(payload).recommendations
        except PydanticValidationError as e:
            raise PlantIdentificationError(
                "AI returned invalid recommendations",
                provider=PROVIDER_NAME,
                details={"errors": e.error_count()},
            ) from e

    async def chat(self, message: str, history: Sequence[ChatMessage]) -> str:
        messages: List[Dict[str, Any]] = [{"role": "system", "content": CHAT_SYSTEM_INSTRUCTION}]
        messages.extend({"role": _ROLE_MAP[m.role], "content": m.text} for m in history)
        messages.append({"role": "user", "content": message})

        return await self._complete(messages, max_tokens=self.chat_max_tokens)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _complete(self, messages: List[Dict[str, Any]], max_tokens: int, json_mode: bool = False) -> str:
        body: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        response = await self.client.post(CHAT_COMPLETIONS_ENDPOINT, data=body)

        try:
            content = response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise PlantIdentificationError(
                "AI response had no message content",
                provider=PROVIDER_NAME,
            ) from e

        if not isinstance(content, str) or not content.strip():
            raise PlantIdentificationError("AI response was empty", provider=PROVIDER_NAME)

        logger.debug("AI completion received", extra={"model": self.model, "length": len(content)})
        return content


def _vision_message(prompt: str, image: str) -> Dict[str, Any]:
    return {
        "role": "user",
        "content": [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image}"}},
        ],
    }


def _parse_json(content: str) -> Any:
    """Parse a model answer, tolerating a ```json fence around it."""
    text = content.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PlantIdentificationError(
            "AI response was not valid JSON",
            provider=PROVIDER_NAME,
            details={"position": e.pos},
        ) from e
